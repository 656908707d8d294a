"""JSON-collection implementation of TopicRepository (version bumped in place)."""
from __future__ import annotations
from typing import List, Optional

from knowledge_api.domain.common.ids import Identifier
from knowledge_api.domain.topic.models import Topic, UPDATABLE_FIELDS
from knowledge_api.persistence.interfaces.topic_repository import TopicRepository
from knowledge_api.persistence.repositories.json.base import JsonCollectionRepository


class JsonTopicRepository(JsonCollectionRepository[Topic], TopicRepository):
    model = Topic
    label = "topic"

    def _prepare_create(self, data: dict) -> dict:
        record = {key: data.get(key) for key in UPDATABLE_FIELDS}
        # Caller-supplied versions are ignored
        record["version"] = 1
        return record

    def _prepare_update(self, existing: dict, data: dict) -> dict:
        # None means "not supplied": keep the stored value
        changes = {k: v for k, v in data.items() if k in UPDATABLE_FIELDS and v is not None}
        changes["version"] = int(existing.get("version") or 0) + 1
        return changes

    def find_by_parent_id(self, parent_topic_id: Identifier) -> List[Topic]:
        return self._find_where(lambda r: r.get("parent_topic_id") == parent_topic_id)

    def find_by_parent_id_and_version(self, parent_topic_id: Identifier, version: int) -> Optional[Topic]:
        for row in self._store.read_all():
            if row.get("parent_topic_id") == parent_topic_id and row.get("version") == version:
                return self._to_model(row)
        return None
