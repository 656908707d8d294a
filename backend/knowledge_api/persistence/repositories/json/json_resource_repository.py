"""JSON-collection implementation of ResourceRepository."""
from __future__ import annotations
from typing import List

from knowledge_api.domain.common.ids import Identifier
from knowledge_api.domain.resource.models import Resource
from knowledge_api.persistence.interfaces.resource_repository import ResourceRepository
from knowledge_api.persistence.repositories.json.base import JsonCollectionRepository

_FIELDS = ("topic_id", "url", "description", "type")


class JsonResourceRepository(JsonCollectionRepository[Resource], ResourceRepository):
    model = Resource
    label = "resource"

    def _prepare_create(self, data: dict) -> dict:
        return {key: data.get(key) for key in _FIELDS}

    def _prepare_update(self, existing: dict, data: dict) -> dict:
        return {k: v for k, v in data.items() if k in _FIELDS and v is not None}

    def find_by_topic_id(self, topic_id: Identifier) -> List[Resource]:
        return self._find_where(lambda r: r.get("topic_id") == topic_id)
