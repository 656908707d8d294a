"""Business rules for the topic hierarchy."""
from __future__ import annotations
from typing import Collection

from knowledge_api.domain.common.ids import Identifier


class TopicHierarchyError(ValueError):
    """The parent/child relation is (or would become) something other than a tree."""

    def __init__(self, message: str, topic_id: Identifier = None):
        super().__init__(message)
        self.topic_id = topic_id


def validate_parent_assignment(
    topic_id: Identifier,
    new_parent_id: Identifier,
    descendant_ids: Collection[Identifier],
) -> None:
    """
    A topic may not become its own parent, nor the child of one of its descendants.
    Raises TopicHierarchyError otherwise.
    """
    if new_parent_id == topic_id:
        raise TopicHierarchyError(f"Topic '{topic_id}' cannot be its own parent.", topic_id)
    if new_parent_id in descendant_ids:
        raise TopicHierarchyError(
            f"Topic '{new_parent_id}' is a descendant of '{topic_id}'; "
            f"re-parenting would create a cycle.",
            topic_id,
        )
