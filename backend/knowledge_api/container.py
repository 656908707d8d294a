"""Dependency injection container: wires implementations to interfaces."""
from __future__ import annotations
import os
from functools import lru_cache

from knowledge_api.core.config import DATA_DIR, ID_POLICY, MAX_TREE_DEPTH
from knowledge_api.domain.common.ids import IdAllocator, build_id_allocator
from knowledge_api.persistence.stores.json_store import JsonFileStore
from knowledge_api.persistence.repositories.json.json_topic_repository import JsonTopicRepository
from knowledge_api.persistence.repositories.json.json_resource_repository import JsonResourceRepository
from knowledge_api.persistence.repositories.json.json_user_repository import JsonUserRepository
from knowledge_api.application.topic_app_service import TopicAppService
from knowledge_api.application.resource_app_service import ResourceAppService
from knowledge_api.application.user_app_service import UserAppService


def _store(name: str) -> JsonFileStore:
    return JsonFileStore(os.path.join(DATA_DIR, f"{name}.json"))


@lru_cache(maxsize=1)
def get_id_allocator() -> IdAllocator:
    return build_id_allocator(ID_POLICY)


@lru_cache(maxsize=1)
def get_topic_repo() -> JsonTopicRepository:
    return JsonTopicRepository(_store("topics"), build_id_allocator(ID_POLICY))


@lru_cache(maxsize=1)
def get_resource_repo() -> JsonResourceRepository:
    return JsonResourceRepository(_store("resources"), build_id_allocator(ID_POLICY))


@lru_cache(maxsize=1)
def get_user_repo() -> JsonUserRepository:
    return JsonUserRepository(_store("users"), build_id_allocator(ID_POLICY))


@lru_cache(maxsize=1)
def get_topic_app_service() -> TopicAppService:
    return TopicAppService(repo=get_topic_repo(), max_tree_depth=MAX_TREE_DEPTH)


@lru_cache(maxsize=1)
def get_resource_app_service() -> ResourceAppService:
    return ResourceAppService(repo=get_resource_repo(), topics=get_topic_repo())


@lru_cache(maxsize=1)
def get_user_app_service() -> UserAppService:
    return UserAppService(repo=get_user_repo())


def reset() -> None:
    """Drop every cached singleton (tests, config reloads)."""
    for factory in (
        get_id_allocator,
        get_topic_repo,
        get_resource_repo,
        get_user_repo,
        get_topic_app_service,
        get_resource_app_service,
        get_user_app_service,
    ):
        factory.cache_clear()
