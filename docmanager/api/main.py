"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, docmanager.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docmanager.api.deps.dependencies import get_service_cache
from docmanager.boundary.db.create_tables import create_all_tables
from docmanager.configs import get_settings
from docmanager.observability import configure_logging
from docmanager.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

from .routers import (
    auth_router,
    documents_router,
    health_router,
    ingestion_router,
    users_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events. Pending simulated ingestion tasks
    are cancelled on shutdown; they are not resumed on the next start.
    """
    settings = get_settings()
    configure_logging(settings.effective_log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    if settings.database.is_sqlite:
        await create_all_tables()
        logger.info("SQLite schema ensured")
    cache = get_service_cache()
    _ = cache.token_issuer
    _ = cache.blob_store
    _ = cache.scheduler
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    await cache.shutdown()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title=get_settings().app_name,
        description="Document upload, role-based access and simulated ingestion jobs",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware (correlation id outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(users_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(ingestion_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "docmanager.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
