"""
Dependency injection container.

Factory functions for FastAPI dependencies: database sessions, cached
process-wide collaborators (token issuer, blob store, ingestion scheduler),
service instances and the authenticated actor.

Dependencies: docmanager.configs, docmanager.application, docmanager.boundary
System role: DI container for service injection
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docmanager.application.services import (
    AuthService,
    DocumentService,
    IngestionService,
    UserService,
)
from docmanager.boundary.db import get_async_db, get_async_session_factory
from docmanager.boundary.storage import BlobStore, create_blob_store
from docmanager.configs import Settings, get_settings
from docmanager.core.authorization import Actor
from docmanager.core.exceptions import UnauthorizedError
from docmanager.core.scheduler import IngestionScheduler
from docmanager.core.security import TokenIssuer


class ServiceCache:
    """Container for cached process-wide instances."""

    def __init__(self):
        self._token_issuer = None
        self._blob_store = None
        self._scheduler = None

    @property
    def token_issuer(self) -> TokenIssuer:
        """Get cached token issuer."""
        if self._token_issuer is None:
            auth = get_settings().auth
            self._token_issuer = TokenIssuer(
                secret=auth.jwt_secret,
                algorithm=auth.jwt_algorithm,
                expire_minutes=auth.access_token_expire_minutes,
            )
        return self._token_issuer

    @property
    def blob_store(self) -> BlobStore:
        """Get cached blob store."""
        if self._blob_store is None:
            self._blob_store = create_blob_store(get_settings().storage)
        return self._blob_store

    @property
    def scheduler(self) -> IngestionScheduler:
        """Get cached simulated ingestion scheduler."""
        if self._scheduler is None:
            ingestion = get_settings().ingestion
            self._scheduler = IngestionScheduler(
                running_delay=ingestion.running_delay_seconds,
                completion_delay=ingestion.completion_delay_seconds,
            )
        return self._scheduler

    async def shutdown(self) -> None:
        """Stop pending scheduler tasks and clear all cached instances."""
        if self._scheduler is not None:
            await self._scheduler.shutdown()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._token_issuer = None
        self._blob_store = None
        self._scheduler = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_token_issuer() -> TokenIssuer:
    return get_service_cache().token_issuer


def get_blob_store() -> BlobStore:
    return get_service_cache().blob_store


def get_scheduler() -> IngestionScheduler:
    return get_service_cache().scheduler


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for work that outlives the request session."""
    return get_async_session_factory()


def get_auth_service(
    db: AsyncSession = Depends(get_async_db),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthService:
    """
    Get auth service instance.

    Args:
        db: Async database session (injected via Depends)
        token_issuer: Cached token issuer
        settings: Application settings

    Returns:
        AuthService: Auth service instance
    """
    return AuthService(
        db=db,
        token_issuer=token_issuer,
        hash_rounds=settings.auth.password_hash_rounds,
    )


def get_user_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> UserService:
    """
    Get user service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings

    Returns:
        UserService: User service instance
    """
    return UserService(db=db, hash_rounds=settings.auth.password_hash_rounds)


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    blob_store: BlobStore = Depends(get_blob_store),
    scheduler: IngestionScheduler = Depends(get_scheduler),
    settings: Settings = Depends(get_settings_dependency),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)
        blob_store: Cached blob store
        scheduler: Cached ingestion scheduler
        settings: Application settings

    Returns:
        DocumentService: Document service instance
    """
    return DocumentService(
        db=db,
        blob_store=blob_store,
        max_file_size=settings.upload.max_file_size,
        scheduler=scheduler,
    )


def get_ingestion_service(
    db: AsyncSession = Depends(get_async_db),
    scheduler: IngestionScheduler = Depends(get_scheduler),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    settings: Settings = Depends(get_settings_dependency),
) -> IngestionService:
    """
    Get ingestion service instance.

    Args:
        db: Async database session (injected via Depends)
        scheduler: Cached ingestion scheduler
        session_factory: Factory for simulated step sessions
        settings: Application settings

    Returns:
        IngestionService: Ingestion service instance
    """
    return IngestionService(
        db=db,
        scheduler=scheduler,
        session_factory=session_factory,
        simulation_enabled=settings.ingestion.simulation_enabled,
    )


_bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> Actor:
    """
    Resolve the authenticated actor from the bearer token.

    Raises:
        HTTPException(401): Missing, invalid or expired token, or the user
            no longer exists or is inactive
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return await auth_service.resolve_actor(credentials.credentials)
    except UnauthorizedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
