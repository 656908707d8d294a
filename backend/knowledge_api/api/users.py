"""User administration endpoints (Admin only)."""
from __future__ import annotations
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from knowledge_api.api.auth import require_roles, serialize_user
from knowledge_api.api.common import parse_id, unwrap
from knowledge_api.application.user_app_service import UserAppService
from knowledge_api.container import get_id_allocator, get_user_app_service
from knowledge_api.domain.common.ids import IdAllocator
from knowledge_api.domain.user.models import ADMIN

router = APIRouter(prefix="/users", tags=["users"])


class UserCreateBody(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    role: Literal["Admin", "Editor", "Viewer"]
    password: str = Field(min_length=1)


@router.get("/")
def list_users(
    svc: UserAppService = Depends(get_user_app_service),
    current_user: dict = Depends(require_roles(ADMIN)),
):
    return [serialize_user(u) for u in svc.find_all()]


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreateBody,
    svc: UserAppService = Depends(get_user_app_service),
    current_user: dict = Depends(require_roles(ADMIN)),
):
    return serialize_user(unwrap(svc.create(body.model_dump())))


@router.get("/{user_id}")
def get_user(
    user_id: str,
    svc: UserAppService = Depends(get_user_app_service),
    ids: IdAllocator = Depends(get_id_allocator),
    current_user: dict = Depends(require_roles(ADMIN)),
):
    user = svc.find_by_id(parse_id(user_id, ids))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return serialize_user(user)
