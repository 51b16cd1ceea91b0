"""
Shared test fixtures and configuration for entire test suite.

Provides: SQLite-backed async sessions, seeded users/documents, actors,
temp blob stores, an API test client and unsaved model builders
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from docmanager.api.deps import get_current_actor
from docmanager.api.main import create_app
from docmanager.boundary.db.base import Base
from docmanager.boundary.db.models import (
    DocumentModel,
    DocumentStatus,
    IngestionJobModel,
    IngestionStatus,
    UserModel,
)
from docmanager.boundary.storage.local_blob_store import LocalBlobStore
from docmanager.core.authorization import Actor
from docmanager.core.roles import UserRole


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def session_factory(tmp_path: Path):
    """
    File-backed SQLite session factory.

    Separate sessions see each other's commits, which the simulated
    ingestion steps rely on.

    Yields:
        async_sessionmaker: Factory bound to a fresh database file
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest.fixture
async def db_session(session_factory):
    """Session from the file-backed factory."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def blob_store(tmp_path: Path) -> LocalBlobStore:
    """Local blob store rooted in a temp directory."""
    return LocalBlobStore(tmp_path / "uploads")


async def create_user(
    session: AsyncSession,
    role: UserRole = UserRole.VIEWER,
    email: str | None = None,
    is_active: bool = True,
) -> UserModel:
    """Insert a user row (password hash is a placeholder)."""
    user = UserModel(
        email=email or f"{uuid.uuid4().hex[:8]}@example.com",
        password_hash="not-a-real-hash",
        first_name="Test",
        last_name=role.value.title(),
        role=role,
        is_active=is_active,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def create_document(
    session: AsyncSession,
    owner: UserModel,
    status: DocumentStatus = DocumentStatus.UPLOADED,
) -> DocumentModel:
    """Insert a document row owned by ``owner``."""
    name = f"{uuid.uuid4()}-report.pdf"
    document = DocumentModel(
        filename=name,
        original_name="report.pdf",
        mime_type="application/pdf",
        size=12,
        file_path=f"/tmp/{name}",
        status=status,
        uploaded_by_id=owner.id,
    )
    session.add(document)
    await session.commit()
    await session.refresh(document)
    return document


async def create_job(
    session: AsyncSession,
    document: DocumentModel,
    status: IngestionStatus = IngestionStatus.PENDING,
) -> IngestionJobModel:
    """Insert an ingestion job row for ``document``."""
    job = IngestionJobModel(document_id=document.id, status=status, config={})
    session.add(job)
    await session.commit()
    await session.refresh(job)
    return job


@pytest.fixture
def make_user():
    """Factory inserting user rows."""
    return create_user


@pytest.fixture
def make_document():
    """Factory inserting document rows."""
    return create_document


@pytest.fixture
def make_job():
    """Factory inserting ingestion job rows."""
    return create_job


@pytest.fixture
def as_actor():
    """Build the Actor for a stored user."""

    def _as_actor(user: UserModel) -> Actor:
        return Actor(id=user.id, role=user.role)

    return _as_actor


@pytest.fixture
def admin_actor() -> Actor:
    return Actor(id=uuid.uuid4(), role=UserRole.ADMIN)


@pytest.fixture
def editor_actor() -> Actor:
    return Actor(id=uuid.uuid4(), role=UserRole.EDITOR)


@pytest.fixture
def viewer_actor() -> Actor:
    return Actor(id=uuid.uuid4(), role=UserRole.VIEWER)


@pytest.fixture
def client():
    """TestClient over a fresh app (lifespan not started)."""
    app = create_app()
    yield TestClient(app)
    app.dependency_overrides.clear()


_FIXED_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def build_user():
    """Factory for unsaved UserModel instances with every column filled."""

    def _build(role: UserRole = UserRole.VIEWER, **overrides) -> UserModel:
        values = dict(
            id=uuid.uuid4(),
            email=f"{uuid.uuid4().hex[:8]}@example.com",
            password_hash="not-a-real-hash",
            first_name="Test",
            last_name="User",
            role=role,
            is_active=True,
            created_at=_FIXED_TIME,
            updated_at=_FIXED_TIME,
        )
        values.update(overrides)
        return UserModel(**values)

    return _build


@pytest.fixture
def build_document():
    """Factory for unsaved DocumentModel instances."""

    def _build(owner_id: uuid.UUID | None = None, **overrides) -> DocumentModel:
        name = f"{uuid.uuid4()}-report.pdf"
        values = dict(
            id=uuid.uuid4(),
            filename=name,
            original_name="report.pdf",
            mime_type="application/pdf",
            size=12,
            file_path=f"/tmp/{name}",
            status=DocumentStatus.UPLOADED,
            description=None,
            doc_metadata=None,
            uploaded_by_id=owner_id or uuid.uuid4(),
            created_at=_FIXED_TIME,
            updated_at=_FIXED_TIME,
        )
        values.update(overrides)
        return DocumentModel(**values)

    return _build


@pytest.fixture
def build_job():
    """Factory for unsaved IngestionJobModel instances."""

    def _build(document_id: uuid.UUID | None = None, **overrides) -> IngestionJobModel:
        values = dict(
            id=uuid.uuid4(),
            document_id=document_id or uuid.uuid4(),
            status=IngestionStatus.PENDING,
            error_message=None,
            result=None,
            config={},
            started_at=None,
            completed_at=None,
            created_at=_FIXED_TIME,
            updated_at=_FIXED_TIME,
        )
        values.update(overrides)
        return IngestionJobModel(**values)

    return _build


@pytest.fixture
def login_as(client):
    """Authenticate every request of ``client`` as the given actor."""

    def _login(actor: Actor) -> Actor:
        client.app.dependency_overrides[get_current_actor] = lambda: actor
        return actor

    return _login
