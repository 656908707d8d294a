"""User domain model and role table."""
from __future__ import annotations
from dataclasses import asdict, dataclass

from knowledge_api.domain.common.ids import Identifier

ADMIN = "Admin"
EDITOR = "Editor"
VIEWER = "Viewer"
ROLES = {ADMIN, EDITOR, VIEWER}

# Roles allowed to mutate topics and resources
EDITOR_ROLES = (ADMIN, EDITOR)


@dataclass
class User:
    id: Identifier
    name: str
    email: str
    role: str  # Admin | Editor | Viewer
    password_hash: str
    created_at: str
    updated_at: str

    def to_record(self) -> dict:
        return asdict(self)

    @classmethod
    def from_record(cls, row: dict) -> "User":
        return cls(
            id=row["id"],
            name=row.get("name", ""),
            email=row.get("email", ""),
            role=row.get("role", VIEWER),
            password_hash=row.get("password_hash", ""),
            created_at=row.get("created_at", ""),
            updated_at=row.get("updated_at", ""),
        )
