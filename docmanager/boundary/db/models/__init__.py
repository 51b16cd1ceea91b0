"""
Database models package.

Exports:
  - UserModel: User account ORM model
  - DocumentModel, DocumentStatus: Document ORM model and status enum
  - IngestionJobModel, IngestionStatus: Ingestion job ORM model and status enum

Dependencies: sqlalchemy, docmanager.boundary.db.base
System role: Database model definitions for domain entities
"""

from docmanager.boundary.db.models.user_model import UserModel
from docmanager.boundary.db.models.document_model import DocumentModel, DocumentStatus
from docmanager.boundary.db.models.ingestion_job_model import (
    IngestionJobModel,
    IngestionStatus,
)

__all__ = [
    "UserModel",
    "DocumentModel",
    "DocumentStatus",
    "IngestionJobModel",
    "IngestionStatus",
]
