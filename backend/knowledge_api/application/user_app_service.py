"""Application service for user accounts and credential checks."""
from __future__ import annotations
import logging
from typing import List, Optional

from knowledge_api.core.security import hash_password, verify_password
from knowledge_api.domain.common.ids import Identifier
from knowledge_api.domain.common.result import CONFLICT, Result
from knowledge_api.domain.user.models import ADMIN, ROLES, User
from knowledge_api.persistence.interfaces.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserAppService:
    def __init__(self, repo: UserRepository):
        self._repo = repo

    def create(self, data: dict) -> Result[User]:
        email = (data.get("email") or "").strip()
        role = data.get("role")
        password = data.get("password") or ""
        if not email:
            return Result.fail("User 'email' is required.")
        if role not in ROLES:
            return Result.fail(f"'{role}' is not a valid role. Must be one of {sorted(ROLES)}.")
        if not password:
            return Result.fail("User 'password' is required.")
        if self._repo.find_by_email(email):
            return Result.fail(f"A user with email '{email}' already exists.", code=CONFLICT)

        user = self._repo.create({
            "name": data.get("name") or email,
            "email": email,
            "role": role,
            "password_hash": hash_password(password),
        })
        return Result.ok(user)

    def find_by_id(self, user_id: Identifier) -> Optional[User]:
        return self._repo.find_by_id(user_id)

    def find_all(self) -> List[User]:
        return self._repo.find_all()

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = self._repo.find_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("Failed login for '%s'", email)
            return None
        return user

    def ensure_default_admin(self, name: str, email: str, password: str) -> Optional[User]:
        """Create one Admin account when no users exist yet. Returns it, or None if skipped."""
        if self._repo.count() > 0:
            return None
        result = self.create({"name": name, "email": email, "role": ADMIN, "password": password})
        if not result.is_success:
            logger.error("Could not seed default admin: %s", result.error)
            return None
        logger.info("Seeded default admin '%s'", email)
        return result.value
