"""API routers."""

from .auth import router as auth_router
from .documents import router as documents_router
from .health import router as health_router
from .ingestion import router as ingestion_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "documents_router",
    "health_router",
    "ingestion_router",
    "users_router",
]
