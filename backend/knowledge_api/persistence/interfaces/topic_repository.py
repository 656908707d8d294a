"""Abstract repository interface for topics."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from knowledge_api.domain.common.ids import Identifier
from knowledge_api.domain.topic.models import Topic


class TopicRepository(ABC):

    @abstractmethod
    def create(self, data: dict) -> Topic:
        """Allocate an id, force version 1, stamp both timestamps and persist."""
        ...

    @abstractmethod
    def find_by_id(self, topic_id: Identifier) -> Optional[Topic]:
        """Return the topic, or None."""
        ...

    @abstractmethod
    def find_all(self) -> List[Topic]:
        """Return every topic in insertion order."""
        ...

    @abstractmethod
    def find_by_parent_id(self, parent_topic_id: Identifier) -> List[Topic]:
        """Return the direct children of a topic, in insertion order."""
        ...

    @abstractmethod
    def find_by_parent_id_and_version(self, parent_topic_id: Identifier, version: int) -> Optional[Topic]:
        """Return the first topic under ``parent_topic_id`` at exactly ``version``, or None."""
        ...

    @abstractmethod
    def update(self, topic_id: Identifier, data: dict) -> Optional[Topic]:
        """Merge ``data`` into the topic in place, bumping its version. None if missing."""
        ...

    @abstractmethod
    def delete(self, topic_id: Identifier) -> bool:
        """Hard-delete the topic. Returns True if it existed."""
        ...
