"""Topic CRUD, tree and path API endpoints."""
from __future__ import annotations
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from knowledge_api.api.auth import get_current_user, require_roles
from knowledge_api.api.common import parse_id, parse_optional_id
from knowledge_api.application.topic_app_service import TopicAppService
from knowledge_api.container import get_id_allocator, get_topic_app_service
from knowledge_api.domain.common.ids import IdAllocator
from knowledge_api.domain.topic.models import Topic
from knowledge_api.domain.user.models import EDITOR_ROLES

router = APIRouter(tags=["topics"])


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class TopicCreateBody(BaseModel):
    name: str = Field(min_length=1)
    content: str = Field(min_length=1)
    version: Optional[int] = None  # accepted, always reset to 1
    parent_topic_id: Optional[Union[int, str]] = None


class TopicUpdateBody(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    parent_topic_id: Optional[Union[int, str]] = None


# ------------------------------------------------------------------
# Serializers
# ------------------------------------------------------------------
def _serialize_topic(t: Topic) -> dict:
    return t.to_record()


# ------------------------------------------------------------------
# Health check
# ------------------------------------------------------------------
@router.get("/health")
def health():
    return {"status": "ok"}


# ------------------------------------------------------------------
# Topic endpoints
# ------------------------------------------------------------------
@router.get("/topics/")
def list_topics(
    svc: TopicAppService = Depends(get_topic_app_service),
    current_user: dict = Depends(get_current_user),
):
    return [_serialize_topic(t) for t in svc.find_all()]


@router.post("/topics/", status_code=status.HTTP_201_CREATED)
def create_topic(
    body: TopicCreateBody,
    svc: TopicAppService = Depends(get_topic_app_service),
    ids: IdAllocator = Depends(get_id_allocator),
    current_user: dict = Depends(require_roles(*EDITOR_ROLES)),
):
    data = body.model_dump()
    data["parent_topic_id"] = parse_optional_id(body.parent_topic_id, ids)
    return _serialize_topic(svc.create(data))


@router.get("/topics/shortest-path")
def shortest_path(
    from_id: Optional[str] = Query(None, min_length=1),
    to_id: Optional[str] = Query(None, min_length=1),
    from_: Optional[str] = Query(None, alias="from", min_length=1),
    to: Optional[str] = Query(None, min_length=1),
    svc: TopicAppService = Depends(get_topic_app_service),
    ids: IdAllocator = Depends(get_id_allocator),
    current_user: dict = Depends(get_current_user),
):
    start, end = from_id or from_, to_id or to
    if start is None or end is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Both 'from' and 'to' (or 'from_id' and 'to_id') are required",
        )
    path = svc.find_shortest_path(parse_id(start, ids), parse_id(end, ids))
    if not path:
        raise HTTPException(status_code=404, detail="No path found between the given topics")
    return [_serialize_topic(t) for t in path]


@router.get("/topics/{topic_id}")
def get_topic_tree(
    topic_id: str,
    svc: TopicAppService = Depends(get_topic_app_service),
    ids: IdAllocator = Depends(get_id_allocator),
    current_user: dict = Depends(get_current_user),
):
    tree = svc.get_topic_tree(parse_id(topic_id, ids))
    if not tree:
        raise HTTPException(status_code=404, detail=f"Topic '{topic_id}' not found")
    return tree.to_dict()


@router.get("/topics/{topic_id}/ancestors")
def get_ancestors(
    topic_id: str,
    svc: TopicAppService = Depends(get_topic_app_service),
    ids: IdAllocator = Depends(get_id_allocator),
    current_user: dict = Depends(get_current_user),
):
    chain = svc.get_ancestors(parse_id(topic_id, ids))
    if chain is None:
        raise HTTPException(status_code=404, detail=f"Topic '{topic_id}' not found")
    return [_serialize_topic(t) for t in chain]


@router.put("/topics/{topic_id}")
def update_topic(
    topic_id: str,
    body: TopicUpdateBody,
    svc: TopicAppService = Depends(get_topic_app_service),
    ids: IdAllocator = Depends(get_id_allocator),
    current_user: dict = Depends(require_roles(*EDITOR_ROLES)),
):
    data = body.model_dump(exclude_none=True)
    if "parent_topic_id" in data:
        data["parent_topic_id"] = parse_id(data["parent_topic_id"], ids)

    updated = svc.update(parse_id(topic_id, ids), data)
    if not updated:
        raise HTTPException(status_code=404, detail="Topic or parent topic not found")
    return _serialize_topic(updated)


@router.delete("/topics/{topic_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_topic(
    topic_id: str,
    svc: TopicAppService = Depends(get_topic_app_service),
    ids: IdAllocator = Depends(get_id_allocator),
    current_user: dict = Depends(require_roles(*EDITOR_ROLES)),
):
    if not svc.delete(parse_id(topic_id, ids)):
        raise HTTPException(status_code=404, detail=f"Topic '{topic_id}' not found")


# ------------------------------------------------------------------
# Versioning endpoints
# ------------------------------------------------------------------
@router.get("/topics/{parent_topic_id}/versions/{version}")
def get_topic_version(
    parent_topic_id: str,
    version: int,
    svc: TopicAppService = Depends(get_topic_app_service),
    ids: IdAllocator = Depends(get_id_allocator),
    current_user: dict = Depends(get_current_user),
):
    topic = svc.get_topic_version(parse_id(parent_topic_id, ids), version)
    if not topic:
        raise HTTPException(
            status_code=404,
            detail=f"No topic at version {version} under parent '{parent_topic_id}'",
        )
    return _serialize_topic(topic)
