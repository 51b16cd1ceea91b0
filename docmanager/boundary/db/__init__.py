"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - UserModel, DocumentModel, IngestionJobModel: Core domain entities
  - user_crud, document_crud, ingestion_job_crud: CRUD operation singletons

Dependencies: sqlalchemy, docmanager.configs
System role: Database adapter providing persistent storage for users,
documents, and ingestion jobs.
"""

from docmanager.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docmanager.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from docmanager.boundary.db.models import (
    DocumentModel,
    DocumentStatus,
    IngestionJobModel,
    IngestionStatus,
    UserModel,
)
from docmanager.boundary.db.CRUD import (
    BaseCRUD,
    DocumentCRUD,
    IngestionJobCRUD,
    UserCRUD,
    document_crud,
    ingestion_job_crud,
    user_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "UserModel",
    "DocumentModel",
    "DocumentStatus",
    "IngestionJobModel",
    "IngestionStatus",
    # CRUD classes
    "BaseCRUD",
    "UserCRUD",
    "DocumentCRUD",
    "IngestionJobCRUD",
    # CRUD singletons
    "user_crud",
    "document_crud",
    "ingestion_job_crud",
]
