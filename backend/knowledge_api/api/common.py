"""Helpers shared by the routers: id parsing and Result → HTTP status mapping."""
from __future__ import annotations
from typing import Optional

from fastapi import HTTPException, status

from knowledge_api.domain.common.ids import IdAllocator, Identifier
from knowledge_api.domain.common.result import CONFLICT, NOT_FOUND, Result

_STATUS_FOR_CODE = {
    NOT_FOUND: status.HTTP_404_NOT_FOUND,
    CONFLICT: status.HTTP_409_CONFLICT,
}


def parse_id(raw, ids: IdAllocator) -> Identifier:
    try:
        return ids.parse(str(raw))
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid ID format")


def parse_optional_id(raw, ids: IdAllocator) -> Optional[Identifier]:
    if raw is None or raw == "":
        return None
    return parse_id(raw, ids)


def unwrap(result: Result):
    if not result.is_success:
        code = _STATUS_FOR_CODE.get(result.code, status.HTTP_400_BAD_REQUEST)
        raise HTTPException(status_code=code, detail=result.error)
    return result.value
