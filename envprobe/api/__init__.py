"""API router definitions."""

from fastapi import APIRouter

from .logs import router as logs_router
from .query import router as query_router
from .routes import health_router
from .slots import router as slots_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(slots_router)
api_router.include_router(query_router)
api_router.include_router(logs_router)

__all__ = ["api_router"]
