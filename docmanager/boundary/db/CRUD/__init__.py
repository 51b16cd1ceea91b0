"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from docmanager.boundary.db.CRUD import document_crud, ingestion_job_crud

    document = await document_crud.get_by_id(db, document_id)
"""

from docmanager.boundary.db.CRUD.base_crud import BaseCRUD
from docmanager.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from docmanager.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from docmanager.boundary.db.CRUD.ingestion_job_crud import (
    IngestionJobCRUD,
    ingestion_job_crud,
)

__all__ = [
    "BaseCRUD",
    "UserCRUD",
    "user_crud",
    "DocumentCRUD",
    "document_crud",
    "IngestionJobCRUD",
    "ingestion_job_crud",
]
