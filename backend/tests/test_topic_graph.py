"""Tree building and shortest-path search over in-memory topic snapshots."""
import pytest

from knowledge_api.domain.topic.graph import TopicGraph
from knowledge_api.domain.topic.models import Topic
from knowledge_api.domain.topic.rules import TopicHierarchyError


def _topic(topic_id, parent=None, name=None):
    return Topic(
        id=topic_id,
        name=name or f"topic-{topic_id}",
        content="c",
        version=1,
        created_at="2024-01-01T00:00:00+00:00",
        updated_at="2024-01-01T00:00:00+00:00",
        parent_topic_id=parent,
    )


# ------------------------------------------------------------------
# Tree
# ------------------------------------------------------------------
def test_build_tree_nests_children_in_order():
    r, x, y = _topic("r"), _topic("x", "r"), _topic("y", "r")
    tree = TopicGraph([r, x, y]).build_tree("r")

    assert tree.to_dict() == {
        **r.to_record(),
        "subtopics": [
            {**x.to_record(), "subtopics": []},
            {**y.to_record(), "subtopics": []},
        ],
    }


def test_build_tree_from_inner_node_only_covers_its_subtree():
    topics = [_topic("a"), _topic("b", "a"), _topic("c", "b"), _topic("d", "a")]
    tree = TopicGraph(topics).build_tree("b")

    assert tree.topic.id == "b"
    assert [n.topic.id for n in tree.subtopics] == ["c"]
    assert tree.subtopics[0].subtopics == []


def test_build_tree_unknown_root():
    assert TopicGraph([_topic("a")]).build_tree("missing") is None


def test_build_tree_reports_cycle():
    graph = TopicGraph([_topic("a", "b"), _topic("b", "a")])
    with pytest.raises(TopicHierarchyError):
        graph.build_tree("a")


def test_build_tree_reports_excessive_depth():
    chain = [_topic(0)] + [_topic(i, i - 1) for i in range(1, 6)]
    with pytest.raises(TopicHierarchyError):
        TopicGraph(chain, max_depth=3).build_tree(0)
    assert TopicGraph(chain, max_depth=5).build_tree(0) is not None


def test_build_tree_handles_chain_deeper_than_recursion_limit():
    chain = [_topic(0)] + [_topic(i, i - 1) for i in range(1, 1500)]
    tree = TopicGraph(chain, max_depth=5000).build_tree(0)

    depth, node = 0, tree.to_dict()
    while node["subtopics"]:
        node = node["subtopics"][0]
        depth += 1
    assert depth == 1499
    assert node["id"] == 1499

    with pytest.raises(TopicHierarchyError):
        TopicGraph(chain, max_depth=1000).build_tree(0)


def test_build_tree_reports_cycle_below_root():
    topics = [_topic("r"), _topic("a", "a2"), _topic("b", "a"), _topic("a2", "b")]
    graph = TopicGraph(topics)
    assert graph.build_tree("r").subtopics == []
    with pytest.raises(TopicHierarchyError):
        graph.build_tree("a")


def test_descendants_and_ancestors():
    topics = [_topic("a"), _topic("b", "a"), _topic("c", "b"), _topic("d", "a"), _topic("e")]
    graph = TopicGraph(topics)

    assert graph.descendant_ids("a") == {"b", "c", "d"}
    assert graph.descendant_ids("c") == set()
    assert [t.id for t in graph.ancestors("c")] == ["b", "a"]
    assert graph.ancestors("a") == []
    assert graph.ancestors("zzz") is None


def test_ancestors_stop_at_dangling_parent():
    graph = TopicGraph([_topic("b", "deleted"), _topic("c", "b")])
    assert [t.id for t in graph.ancestors("c")] == ["b"]


# ------------------------------------------------------------------
# Shortest path
# ------------------------------------------------------------------
def test_path_to_self():
    a = _topic("a")
    graph = TopicGraph([a])
    assert graph.find_shortest_path("a", "a") == [a]
    assert graph.find_shortest_path("zzz", "zzz") is None


def test_path_down_a_chain():
    a, b, c = _topic("a"), _topic("b", "a"), _topic("c", "b")
    assert TopicGraph([a, b, c]).find_shortest_path("a", "c") == [a, b, c]


def test_path_up_a_chain():
    a, b, c = _topic("a"), _topic("b", "a"), _topic("c", "b")
    assert TopicGraph([a, b, c]).find_shortest_path("c", "a") == [c, b, a]


def test_path_between_siblings_goes_through_parent():
    topics = [_topic("r"), _topic("x", "r"), _topic("y", "r"), _topic("y1", "y")]
    path = TopicGraph(topics).find_shortest_path("x", "y1")
    assert [t.id for t in path] == ["x", "r", "y", "y1"]


def test_no_path_between_separate_trees():
    topics = [_topic("a"), _topic("a1", "a"), _topic("b"), _topic("b1", "b")]
    assert TopicGraph(topics).find_shortest_path("a1", "b1") is None


def test_path_with_unknown_endpoint():
    graph = TopicGraph([_topic("a"), _topic("b", "a")])
    assert graph.find_shortest_path("a", "nope") is None
    assert graph.find_shortest_path("nope", "a") is None
    assert TopicGraph([]).find_shortest_path("x", "y") is None


def test_path_does_not_pass_through_deleted_parent():
    # Both children still point at a parent that no longer exists
    topics = [_topic("left", "gone"), _topic("right", "gone")]
    assert TopicGraph(topics).find_shortest_path("left", "right") is None


def test_path_with_integer_ids():
    topics = [_topic(1), _topic(2, 1), _topic(3, 1), _topic(4, 3)]
    path = TopicGraph(topics).find_shortest_path(2, 4)
    assert [t.id for t in path] == [2, 1, 3, 4]


def test_path_on_larger_tree_is_fewest_hops():
    # Binary tree of 63 nodes: heap layout, parent of i is (i - 1) // 2
    topics = [_topic(0)] + [_topic(i, (i - 1) // 2) for i in range(1, 63)]
    path = TopicGraph(topics).find_shortest_path(31, 62)
    # 31 -> 15 -> 7 -> 3 -> 1 -> 0 -> 2 -> 6 -> 14 -> 30 -> 62
    assert [t.id for t in path] == [31, 15, 7, 3, 1, 0, 2, 6, 14, 30, 62]
