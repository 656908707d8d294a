"""Topic repository against an in-memory store (version bumped in place)."""
import pytest

from knowledge_api.domain.common.ids import SequentialIdAllocator
from knowledge_api.persistence.interfaces.record_store import StoreError
from knowledge_api.persistence.stores.json_store import InMemoryStore
from knowledge_api.persistence.repositories.json.json_topic_repository import JsonTopicRepository


# ------------------------------------------------------------------
# CREATE
# ------------------------------------------------------------------
def test_create_forces_version_one(topic_repo):
    topic = topic_repo.create({"name": "root", "content": "r", "version": 7})

    assert topic.version == 1
    assert topic.id == 1
    assert topic.created_at == topic.updated_at
    assert topic.parent_topic_id is None


def test_create_persists_and_ignores_caller_id(topic_repo, topic_store):
    topic = topic_repo.create({"id": 99, "name": "root", "content": "r"})

    assert topic.id == 1
    assert [row["id"] for row in topic_store.read_all()] == [1]


def test_create_does_not_check_parent(topic_repo):
    orphan = topic_repo.create({"name": "orphan", "content": "o", "parent_topic_id": 42})
    assert orphan.parent_topic_id == 42


def test_ids_continue_after_existing_rows():
    store = InMemoryStore([{"id": 5, "name": "old", "content": "o", "version": 3}])
    repo = JsonTopicRepository(store, SequentialIdAllocator())

    assert repo.create({"name": "new", "content": "n"}).id == 6


# ------------------------------------------------------------------
# READ
# ------------------------------------------------------------------
def test_find_by_id_and_all(topic_repo):
    a = topic_repo.create({"name": "a", "content": "a"})
    b = topic_repo.create({"name": "b", "content": "b"})

    assert topic_repo.find_by_id(b.id) == b
    assert topic_repo.find_by_id(404) is None
    assert [t.id for t in topic_repo.find_all()] == [a.id, b.id]


def test_find_by_parent_id_keeps_insertion_order(topic_repo):
    root = topic_repo.create({"name": "root", "content": "r"})
    x = topic_repo.create({"name": "x", "content": "x", "parent_topic_id": root.id})
    topic_repo.create({"name": "other", "content": "o"})
    y = topic_repo.create({"name": "y", "content": "y", "parent_topic_id": root.id})

    assert [t.id for t in topic_repo.find_by_parent_id(root.id)] == [x.id, y.id]
    assert topic_repo.find_by_parent_id(y.id) == []


def test_find_by_parent_id_and_version(topic_repo):
    root = topic_repo.create({"name": "root", "content": "r"})
    child = topic_repo.create({"name": "c", "content": "c", "parent_topic_id": root.id})
    topic_repo.update(child.id, {"content": "c2"})

    found = topic_repo.find_by_parent_id_and_version(root.id, 2)
    assert found.id == child.id
    assert found.content == "c2"
    assert topic_repo.find_by_parent_id_and_version(root.id, 1) is None


# ------------------------------------------------------------------
# UPDATE
# ------------------------------------------------------------------
def test_update_bumps_version_by_one_each_time(topic_repo):
    topic = topic_repo.create({"name": "t", "content": "c"})

    v2 = topic_repo.update(topic.id, {"name": "t2"})
    v3 = topic_repo.update(topic.id, {"content": "c3"})

    assert (v2.version, v3.version) == (2, 3)
    assert v3.id == topic.id
    assert v3.name == "t2"
    assert v3.content == "c3"
    assert v3.created_at == topic.created_at
    assert v3.updated_at >= topic.updated_at
    assert len(topic_repo.find_all()) == 1


def test_update_ignores_managed_fields_and_none_values(topic_repo):
    root = topic_repo.create({"name": "root", "content": "r"})
    topic = topic_repo.create({"name": "t", "content": "c", "parent_topic_id": root.id})

    updated = topic_repo.update(
        topic.id,
        {"version": 50, "id": 77, "created_at": "yesterday", "name": None, "parent_topic_id": None},
    )

    assert updated.version == 2
    assert updated.id == topic.id
    assert updated.created_at == topic.created_at
    assert updated.name == "t"
    assert updated.parent_topic_id == root.id


def test_update_missing_id_leaves_store_untouched(topic_repo, topic_store):
    topic_repo.create({"name": "t", "content": "c"})
    before = topic_store.read_all()

    assert topic_repo.update(404, {"name": "x"}) is None
    assert topic_store.read_all() == before


# ------------------------------------------------------------------
# DELETE
# ------------------------------------------------------------------
def test_delete_twice_returns_true_then_false(topic_repo):
    topic = topic_repo.create({"name": "t", "content": "c"})

    assert topic_repo.delete(topic.id) is True
    assert topic_repo.delete(topic.id) is False
    assert topic_repo.find_by_id(topic.id) is None


def test_delete_unknown_id(topic_repo):
    assert topic_repo.delete(12345) is False


# ------------------------------------------------------------------
# STORAGE FAILURES
# ------------------------------------------------------------------
class _UnwritableStore(InMemoryStore):
    fail_writes = False

    def write_all(self, records):
        if self.fail_writes:
            raise StoreError("disk full")
        super().write_all(records)


@pytest.fixture
def failing_store():
    store = _UnwritableStore()
    repo = JsonTopicRepository(store, SequentialIdAllocator())
    repo.create({"name": "root", "content": "r"})
    store.fail_writes = True
    return store, repo


def test_failed_write_propagates_and_keeps_collection(failing_store):
    store, repo = failing_store
    before = store.read_all()

    with pytest.raises(StoreError):
        repo.create({"name": "new", "content": "n"})
    with pytest.raises(StoreError):
        repo.update(1, {"name": "renamed"})
    with pytest.raises(StoreError):
        repo.delete(1)

    assert store.read_all() == before
    assert repo.find_by_id(1).version == 1


def test_failed_write_propagates_through_service(failing_store):
    from knowledge_api.application.topic_app_service import TopicAppService

    store, repo = failing_store
    svc = TopicAppService(repo)

    with pytest.raises(StoreError):
        svc.update(1, {"content": "changed"})
    assert svc.find_by_id(1).content == "r"
