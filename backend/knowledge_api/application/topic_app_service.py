"""Application service for topics: checks cross-record invariants, then delegates.

Mutations go to the repository; tree and path queries load the whole
collection once and hand it to the graph engine.
"""
from __future__ import annotations
import logging
from typing import List, Optional

from knowledge_api.domain.common.ids import Identifier
from knowledge_api.domain.topic.graph import DEFAULT_MAX_DEPTH, TopicGraph
from knowledge_api.domain.topic.models import Topic, TopicTreeNode
from knowledge_api.domain.topic.rules import validate_parent_assignment
from knowledge_api.persistence.interfaces.topic_repository import TopicRepository

logger = logging.getLogger(__name__)


class TopicAppService:
    def __init__(self, repo: TopicRepository, max_tree_depth: int = DEFAULT_MAX_DEPTH):
        self._repo = repo
        self._max_tree_depth = max_tree_depth

    def _graph(self) -> TopicGraph:
        return TopicGraph(self._repo.find_all(), max_depth=self._max_tree_depth)

    # ------------------------------------------------------------------
    # CREATE
    # ------------------------------------------------------------------
    def create(self, data: dict) -> Topic:
        # Parent existence is not checked on create
        return self._repo.create(data)

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------
    def find_by_id(self, topic_id: Identifier) -> Optional[Topic]:
        return self._repo.find_by_id(topic_id)

    def find_all(self) -> List[Topic]:
        return self._repo.find_all()

    def get_topic_version(self, parent_topic_id: Identifier, version: int) -> Optional[Topic]:
        return self._repo.find_by_parent_id_and_version(parent_topic_id, version)

    # ------------------------------------------------------------------
    # UPDATE
    # ------------------------------------------------------------------
    def update(self, topic_id: Identifier, data: dict) -> Optional[Topic]:
        """
        Returns None when either the topic or the requested parent does not exist.
        Raises TopicHierarchyError if the new parent would close a cycle.
        """
        parent_id = data.get("parent_topic_id")
        if parent_id:
            if not self._repo.find_by_id(parent_id):
                logger.info("Update of topic '%s' refused, parent '%s' not found", topic_id, parent_id)
                return None
            graph = self._graph()
            validate_parent_assignment(topic_id, parent_id, graph.descendant_ids(topic_id))

        return self._repo.update(topic_id, data)

    # ------------------------------------------------------------------
    # DELETE
    # ------------------------------------------------------------------
    def delete(self, topic_id: Identifier) -> bool:
        return self._repo.delete(topic_id)

    # ------------------------------------------------------------------
    # GRAPH QUERIES
    # ------------------------------------------------------------------
    def get_topic_tree(self, topic_id: Identifier) -> Optional[TopicTreeNode]:
        return self._graph().build_tree(topic_id)

    def find_shortest_path(self, from_id: Identifier, to_id: Identifier) -> Optional[List[Topic]]:
        if from_id == to_id:
            topic = self._repo.find_by_id(from_id)
            return [topic] if topic else None
        return self._graph().find_shortest_path(from_id, to_id)

    def get_ancestors(self, topic_id: Identifier) -> Optional[List[Topic]]:
        return self._graph().ancestors(topic_id)
