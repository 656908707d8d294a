"""Abstract repository interface for resources."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from knowledge_api.domain.common.ids import Identifier
from knowledge_api.domain.resource.models import Resource


class ResourceRepository(ABC):

    @abstractmethod
    def create(self, data: dict) -> Resource:
        ...

    @abstractmethod
    def find_by_id(self, resource_id: Identifier) -> Optional[Resource]:
        ...

    @abstractmethod
    def find_all(self) -> List[Resource]:
        ...

    @abstractmethod
    def find_by_topic_id(self, topic_id: Identifier) -> List[Resource]:
        """Return resources attached to a topic, in insertion order."""
        ...

    @abstractmethod
    def update(self, resource_id: Identifier, data: dict) -> Optional[Resource]:
        ...

    @abstractmethod
    def delete(self, resource_id: Identifier) -> bool:
        ...
