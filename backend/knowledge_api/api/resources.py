"""Resource (topic link) API endpoints."""
from __future__ import annotations
from typing import Literal, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from knowledge_api.api.auth import get_current_user, require_roles
from knowledge_api.api.common import parse_id, unwrap
from knowledge_api.application.resource_app_service import ResourceAppService
from knowledge_api.container import get_id_allocator, get_resource_app_service
from knowledge_api.domain.common.ids import IdAllocator
from knowledge_api.domain.resource.models import Resource
from knowledge_api.domain.user.models import EDITOR_ROLES

router = APIRouter(tags=["resources"])

_URL_PATTERN = r"^https?://\S+$"
ResourceType = Literal["video", "article", "pdf"]


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class ResourceCreateBody(BaseModel):
    topic_id: Union[int, str]
    url: str = Field(pattern=_URL_PATTERN)
    description: str = ""
    type: ResourceType = "article"


class ResourceUpdateBody(BaseModel):
    topic_id: Optional[Union[int, str]] = None
    url: Optional[str] = Field(default=None, pattern=_URL_PATTERN)
    description: Optional[str] = None
    type: Optional[ResourceType] = None


# ------------------------------------------------------------------
# Serializers
# ------------------------------------------------------------------
def _serialize_resource(r: Resource) -> dict:
    return r.to_record()


# ------------------------------------------------------------------
# Resource endpoints
# ------------------------------------------------------------------
@router.get("/resources/")
def list_resources(
    svc: ResourceAppService = Depends(get_resource_app_service),
    current_user: dict = Depends(get_current_user),
):
    return [_serialize_resource(r) for r in svc.find_all()]


@router.post("/resources/", status_code=status.HTTP_201_CREATED)
def create_resource(
    body: ResourceCreateBody,
    svc: ResourceAppService = Depends(get_resource_app_service),
    ids: IdAllocator = Depends(get_id_allocator),
    current_user: dict = Depends(require_roles(*EDITOR_ROLES)),
):
    data = body.model_dump()
    data["topic_id"] = parse_id(body.topic_id, ids)
    return _serialize_resource(unwrap(svc.create(data)))


@router.get("/resources/{resource_id}")
def get_resource(
    resource_id: str,
    svc: ResourceAppService = Depends(get_resource_app_service),
    ids: IdAllocator = Depends(get_id_allocator),
    current_user: dict = Depends(get_current_user),
):
    resource = svc.find_by_id(parse_id(resource_id, ids))
    if not resource:
        raise HTTPException(status_code=404, detail=f"Resource '{resource_id}' not found")
    return _serialize_resource(resource)


@router.put("/resources/{resource_id}")
def update_resource(
    resource_id: str,
    body: ResourceUpdateBody,
    svc: ResourceAppService = Depends(get_resource_app_service),
    ids: IdAllocator = Depends(get_id_allocator),
    current_user: dict = Depends(require_roles(*EDITOR_ROLES)),
):
    data = body.model_dump(exclude_none=True)
    if "topic_id" in data:
        data["topic_id"] = parse_id(data["topic_id"], ids)
    return _serialize_resource(unwrap(svc.update(parse_id(resource_id, ids), data)))


@router.delete("/resources/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resource(
    resource_id: str,
    svc: ResourceAppService = Depends(get_resource_app_service),
    ids: IdAllocator = Depends(get_id_allocator),
    current_user: dict = Depends(require_roles(*EDITOR_ROLES)),
):
    if not svc.delete(parse_id(resource_id, ids)):
        raise HTTPException(status_code=404, detail=f"Resource '{resource_id}' not found")


@router.get("/topics/{topic_id}/resources")
def list_topic_resources(
    topic_id: str,
    svc: ResourceAppService = Depends(get_resource_app_service),
    ids: IdAllocator = Depends(get_id_allocator),
    current_user: dict = Depends(get_current_user),
):
    return [_serialize_resource(r) for r in svc.find_by_topic_id(parse_id(topic_id, ids))]
