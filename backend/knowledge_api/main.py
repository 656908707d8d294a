"""FastAPI application entry point."""
from __future__ import annotations
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from knowledge_api.api import auth, resources, topics, users
from knowledge_api.container import get_user_app_service
from knowledge_api.core.config import (
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_NAME,
    DEFAULT_ADMIN_PASSWORD,
    LOG_LEVEL,
)
from knowledge_api.domain.topic.rules import TopicHierarchyError
from knowledge_api.persistence.interfaces.record_store import StoreError

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def seed_default_admin() -> None:
    get_user_app_service().ensure_default_admin(
        DEFAULT_ADMIN_NAME, DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_PASSWORD
    )


# ------------------------------------------------------------------
# Startup: make sure someone can log in
# ------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    seed_default_admin()
    yield


# ------------------------------------------------------------------
# App creation
# ------------------------------------------------------------------
app = FastAPI(
    title="Knowledge Base API",
    description="Versioned topic hierarchy with resources and role-based access",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS: allow everything for local dev (restrict for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------------------------------------------
# Error mapping
# ------------------------------------------------------------------
@app.exception_handler(TopicHierarchyError)
def on_hierarchy_error(request: Request, exc: TopicHierarchyError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(StoreError)
def on_store_error(request: Request, exc: StoreError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


# ------------------------------------------------------------------
# Routers
# ------------------------------------------------------------------
app.include_router(auth.router)
app.include_router(topics.router)
app.include_router(resources.router)
app.include_router(users.router)
