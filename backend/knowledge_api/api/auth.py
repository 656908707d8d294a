"""Auth API: login and profile endpoints plus the role-gate dependencies."""
from __future__ import annotations
from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from knowledge_api.application.user_app_service import UserAppService
from knowledge_api.container import get_user_app_service
from knowledge_api.core.security import InvalidTokenError, create_access_token, decode_access_token
from knowledge_api.domain.user.models import User

router = APIRouter(prefix="/auth", tags=["auth"])

_bearer = HTTPBearer(auto_error=False)


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class LoginRequest(BaseModel):
    email: str
    password: str


# ------------------------------------------------------------------
# Serializers
# ------------------------------------------------------------------
def serialize_user(u: User) -> dict:
    return {
        "id": u.id,
        "name": u.name,
        "email": u.email,
        "role": u.role,
        "created_at": u.created_at,
        "updated_at": u.updated_at,
    }


# ------------------------------------------------------------------
# Dependency: get current user from Bearer token
# ------------------------------------------------------------------
def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer)) -> dict:
    if not credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authorization token is required")
    try:
        return decode_access_token(credentials.credentials)
    except InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")


def require_roles(*roles: str) -> Callable[..., dict]:
    """Dependency factory: the caller must be authenticated and hold one of ``roles``."""

    def _check(current_user: dict = Depends(get_current_user)) -> dict:
        if roles and current_user.get("role") not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden: Insufficient permissions",
            )
        return current_user

    return _check


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------
@router.post("/login")
def login(body: LoginRequest, svc: UserAppService = Depends(get_user_app_service)):
    user = svc.authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_access_token(user.id, user.email, user.name, user.role)
    return {"token": token, "user": serialize_user(user)}


@router.post("/logout")
def logout(current_user: dict = Depends(get_current_user)):
    # Stateless JWT: just acknowledge. Client discards token.
    return {"detail": "Logged out successfully"}


@router.get("/profile")
def get_profile(
    current_user: dict = Depends(get_current_user),
    svc: UserAppService = Depends(get_user_app_service),
):
    user = svc.find_by_id(current_user.get("uid"))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return serialize_user(user)
