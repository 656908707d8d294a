"""Resource domain model: a link attached to a topic."""
from __future__ import annotations
from dataclasses import asdict, dataclass

from knowledge_api.domain.common.ids import Identifier

RESOURCE_TYPES = {"video", "article", "pdf"}


@dataclass
class Resource:
    id: Identifier
    topic_id: Identifier
    url: str
    description: str
    type: str  # video | article | pdf
    created_at: str
    updated_at: str

    def to_record(self) -> dict:
        return asdict(self)

    @classmethod
    def from_record(cls, row: dict) -> "Resource":
        return cls(
            id=row["id"],
            topic_id=row["topic_id"],
            url=row.get("url", ""),
            description=row.get("description", ""),
            type=row.get("type", "article"),
            created_at=row.get("created_at", ""),
            updated_at=row.get("updated_at", ""),
        )
