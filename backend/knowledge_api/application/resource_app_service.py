"""Application service for resources: a resource must point at an existing topic."""
from __future__ import annotations
import logging
from typing import List, Optional

from knowledge_api.domain.common.ids import Identifier
from knowledge_api.domain.common.result import NOT_FOUND, Result
from knowledge_api.domain.resource.models import RESOURCE_TYPES, Resource
from knowledge_api.persistence.interfaces.resource_repository import ResourceRepository
from knowledge_api.persistence.interfaces.topic_repository import TopicRepository

logger = logging.getLogger(__name__)


class ResourceAppService:
    def __init__(self, repo: ResourceRepository, topics: TopicRepository):
        self._repo = repo
        self._topics = topics

    def _check(self, data: dict) -> Optional[str]:
        topic_id = data.get("topic_id")
        if topic_id is not None and not self._topics.find_by_id(topic_id):
            return f"Topic '{topic_id}' not found."
        kind = data.get("type")
        if kind is not None and kind not in RESOURCE_TYPES:
            return f"'{kind}' is not a valid resource type. Must be one of {sorted(RESOURCE_TYPES)}."
        return None

    def create(self, data: dict) -> Result[Resource]:
        if data.get("topic_id") is None:
            return Result.fail("Resource 'topic_id' is required.")
        error = self._check(data)
        if error:
            logger.info("Resource rejected: %s", error)
            return Result.fail(error)
        return Result.ok(self._repo.create(data))

    def find_by_id(self, resource_id: Identifier) -> Optional[Resource]:
        return self._repo.find_by_id(resource_id)

    def find_all(self) -> List[Resource]:
        return self._repo.find_all()

    def find_by_topic_id(self, topic_id: Identifier) -> List[Resource]:
        return self._repo.find_by_topic_id(topic_id)

    def update(self, resource_id: Identifier, data: dict) -> Result[Resource]:
        error = self._check(data)
        if error:
            return Result.fail(error)
        updated = self._repo.update(resource_id, data)
        if not updated:
            return Result.fail(f"Resource '{resource_id}' not found.", code=NOT_FOUND)
        return Result.ok(updated)

    def delete(self, resource_id: Identifier) -> bool:
        return self._repo.delete(resource_id)
