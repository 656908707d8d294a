"""Topic graph engine: subtree views and shortest paths over parent/child links.

Every query works on one snapshot of the full topic collection handed in at
construction; nothing is read from storage here. Two views of the same
``parent_topic_id`` links are used:

* the directed tree (parent -> children) for subtree building and descendants;
* the undirected adjacency (parent <-> child) for shortest-path search.

Sibling order everywhere is the order the topics appear in the snapshot.
"""
from __future__ import annotations
import logging
from collections import deque
from typing import Dict, Iterable, List, Optional, Set

from knowledge_api.domain.common.ids import Identifier
from knowledge_api.domain.topic.models import Topic, TopicTreeNode
from knowledge_api.domain.topic.rules import TopicHierarchyError

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256


def _has_parent(topic: Topic) -> bool:
    return topic.parent_topic_id is not None and topic.parent_topic_id != ""


class TopicGraph:

    def __init__(self, topics: Iterable[Topic], max_depth: int = DEFAULT_MAX_DEPTH):
        self._topics: List[Topic] = list(topics)
        self._max_depth = max_depth
        self._by_id: Dict[Identifier, Topic] = {t.id: t for t in self._topics}
        self._children: Dict[Identifier, List[Topic]] = {}
        for t in self._topics:
            if _has_parent(t):
                self._children.setdefault(t.parent_topic_id, []).append(t)

    # ------------------------------------------------------------------
    # Tree
    # ------------------------------------------------------------------
    def build_tree(self, root_id: Identifier) -> Optional[TopicTreeNode]:
        """
        Return ``root_id`` with all of its descendants nested under ``subtopics``,
        or None if the root does not exist.

        Raises TopicHierarchyError when the links below the root loop back on
        themselves or nest deeper than ``max_depth``. Walks with an explicit
        stack, so tree depth is bounded by ``max_depth`` only.
        """
        root = self._by_id.get(root_id)
        if root is None:
            return None

        root_node = TopicTreeNode(topic=root)
        on_path: Set[Identifier] = {root.id}
        # (node, pending children, depth), depth-first in snapshot order
        stack = [(root_node, iter(self._children.get(root.id, [])), 0)]
        while stack:
            node, pending, depth = stack[-1]
            child = next(pending, None)
            if child is None:
                stack.pop()
                on_path.discard(node.topic.id)
                continue

            self._check_descent(child, depth + 1, on_path)
            child_node = TopicTreeNode(topic=child)
            node.subtopics.append(child_node)
            on_path.add(child.id)
            stack.append((child_node, iter(self._children.get(child.id, [])), depth + 1))
        return root_node

    def _check_descent(self, topic: Topic, depth: int, on_path: Set[Identifier]) -> None:
        if topic.id in on_path:
            logger.warning("Cycle in topic hierarchy at '%s'", topic.id)
            raise TopicHierarchyError(f"Cycle detected in topic hierarchy at '{topic.id}'.", topic.id)
        if depth > self._max_depth:
            raise TopicHierarchyError(
                f"Topic tree deeper than {self._max_depth} levels at '{topic.id}'.", topic.id
            )

    def descendant_ids(self, topic_id: Identifier) -> Set[Identifier]:
        """Ids of every topic below ``topic_id`` (the topic itself excluded)."""
        found: Set[Identifier] = set()
        queue = deque([topic_id])
        while queue:
            current = queue.popleft()
            for child in self._children.get(current, []):
                if child.id not in found and child.id != topic_id:
                    found.add(child.id)
                    queue.append(child.id)
        return found

    def ancestors(self, topic_id: Identifier) -> Optional[List[Topic]]:
        """Parent chain of ``topic_id``, nearest first. None if the topic does not exist."""
        topic = self._by_id.get(topic_id)
        if topic is None:
            return None

        chain: List[Topic] = []
        seen = {topic.id}
        while _has_parent(topic):
            parent = self._by_id.get(topic.parent_topic_id)
            if parent is None or parent.id in seen:
                break
            chain.append(parent)
            seen.add(parent.id)
            topic = parent
        return chain

    # ------------------------------------------------------------------
    # Shortest path
    # ------------------------------------------------------------------
    def _adjacency(self) -> Dict[Identifier, Dict[Identifier, None]]:
        # dict keys double as an insertion-ordered set
        adj: Dict[Identifier, Dict[Identifier, None]] = {}
        for t in self._topics:
            adj.setdefault(t.id, {})
            if not _has_parent(t) or t.parent_topic_id not in self._by_id:
                continue
            adj[t.id][t.parent_topic_id] = None
            adj.setdefault(t.parent_topic_id, {})[t.id] = None
        return adj

    def find_shortest_path(self, from_id: Identifier, to_id: Identifier) -> Optional[List[Topic]]:
        """
        Fewest-hops route from ``from_id`` to ``to_id`` treating parent/child
        links as undirected edges. Returns the topics in traversal order, or
        None when either end is unknown or the two lie in different trees.
        """
        if from_id == to_id:
            topic = self._by_id.get(from_id)
            return [topic] if topic else None

        if from_id not in self._by_id or to_id not in self._by_id:
            return None

        adj = self._adjacency()
        # Predecessor map: a node is visited as soon as it is enqueued
        came_from: Dict[Identifier, Optional[Identifier]] = {from_id: None}
        queue = deque([from_id])

        while queue:
            current = queue.popleft()
            if current == to_id:
                return self._reconstruct(came_from, to_id)
            for neighbour in adj.get(current, {}):
                if neighbour not in came_from:
                    came_from[neighbour] = current
                    queue.append(neighbour)

        logger.debug("No path between '%s' and '%s'", from_id, to_id)
        return None

    def _reconstruct(
        self, came_from: Dict[Identifier, Optional[Identifier]], to_id: Identifier
    ) -> List[Topic]:
        path: List[Topic] = []
        node: Optional[Identifier] = to_id
        while node is not None:
            path.append(self._by_id[node])
            node = came_from[node]
        path.reverse()
        return path
