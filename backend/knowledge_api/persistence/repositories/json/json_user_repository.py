"""JSON-collection implementation of UserRepository."""
from __future__ import annotations
from typing import Optional

from knowledge_api.domain.user.models import User
from knowledge_api.persistence.interfaces.user_repository import UserRepository
from knowledge_api.persistence.repositories.json.base import JsonCollectionRepository


class JsonUserRepository(JsonCollectionRepository[User], UserRepository):
    model = User
    label = "user"

    def _prepare_create(self, data: dict) -> dict:
        record = {key: data.get(key) for key in ("name", "role", "password_hash")}
        record["email"] = (data.get("email") or "").strip().lower()
        return record

    def find_by_email(self, email: str) -> Optional[User]:
        wanted = (email or "").strip().lower()
        matches = self._find_where(lambda r: (r.get("email") or "").lower() == wanted)
        return matches[0] if matches else None

    def count(self) -> int:
        return len(self._store.read_all())
