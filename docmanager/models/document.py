"""
Document domain models and schemas.

Request/response schemas for document operations.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field

from docmanager.core.document_state import DocumentStatus
from docmanager.models.common import CamelModel


class DocumentResponse(CamelModel):
    """Response schema for document operations."""

    id: uuid.UUID
    filename: str
    original_name: str
    mime_type: str
    size: int
    file_path: str
    status: DocumentStatus
    description: str | None = None
    metadata: dict[str, Any] | None = None
    uploaded_by_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, document) -> "DocumentResponse":
        """Build from a DocumentModel (its JSON column is ``doc_metadata``)."""
        return cls(
            id=document.id,
            filename=document.filename,
            original_name=document.original_name,
            mime_type=document.mime_type,
            size=document.size,
            file_path=document.file_path,
            status=document.status,
            description=document.description,
            metadata=document.doc_metadata,
            uploaded_by_id=document.uploaded_by_id,
            created_at=document.created_at,
            updated_at=document.updated_at,
        )


class UpdateDocumentRequest(CamelModel):
    """Metadata update; ``status`` is accepted from admins only."""

    description: str | None = Field(None, max_length=4096)
    metadata: dict[str, Any] | None = None
    status: DocumentStatus | None = None


class UpdateDocumentStatusRequest(CamelModel):
    status: DocumentStatus
