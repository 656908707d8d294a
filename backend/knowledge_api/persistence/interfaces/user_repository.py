"""Abstract repository interface for user accounts."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from knowledge_api.domain.common.ids import Identifier
from knowledge_api.domain.user.models import User


class UserRepository(ABC):

    @abstractmethod
    def create(self, data: dict) -> User:
        ...

    @abstractmethod
    def find_by_id(self, user_id: Identifier) -> Optional[User]:
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup, or None."""
        ...

    @abstractmethod
    def find_all(self) -> List[User]:
        ...

    @abstractmethod
    def count(self) -> int:
        ...
