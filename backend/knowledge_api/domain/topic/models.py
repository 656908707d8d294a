"""Topic domain models: pure Python, no storage or HTTP dependencies."""
from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import List, Optional

from knowledge_api.domain.common.ids import Identifier

# Fields a caller may change through update(); everything else is managed
UPDATABLE_FIELDS = ("name", "content", "parent_topic_id")


@dataclass
class Topic:
    id: Identifier
    name: str
    content: str
    version: int
    created_at: str
    updated_at: str
    parent_topic_id: Optional[Identifier] = None

    def to_record(self) -> dict:
        return asdict(self)

    @classmethod
    def from_record(cls, row: dict) -> "Topic":
        return cls(
            id=row["id"],
            name=row.get("name", ""),
            content=row.get("content", ""),
            version=int(row.get("version") or 1),
            created_at=row.get("created_at", ""),
            updated_at=row.get("updated_at", ""),
            parent_topic_id=row.get("parent_topic_id"),
        )


@dataclass
class TopicTreeNode:
    topic: Topic
    subtopics: List["TopicTreeNode"] = field(default_factory=list)

    def to_dict(self) -> dict:
        root = {**self.topic.to_record(), "subtopics": []}
        stack = [(self, root)]
        while stack:
            node, out = stack.pop()
            for child in node.subtopics:
                child_out = {**child.topic.to_record(), "subtopics": []}
                out["subtopics"].append(child_out)
                stack.append((child, child_out))
        return root
