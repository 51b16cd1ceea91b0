"""
Ingestion job schemas.

Request/response schemas for job creation, admin updates and processor
webhooks. ``config`` and ``result`` are opaque JSON objects.

Dependencies: pydantic
System role: Ingestion API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field

from docmanager.core.ingestion_state import IngestionStatus
from docmanager.models.common import CamelModel


class CreateIngestionJobRequest(CamelModel):
    """Request schema for submitting a document for ingestion."""

    document_id: uuid.UUID = Field(..., description="Document to ingest")
    config: dict[str, Any] | None = Field(None, description="Processing options")


class UpdateIngestionJobRequest(CamelModel):
    """Partial job update; only provided fields are merged."""

    status: IngestionStatus | None = None
    error_message: str | None = None
    result: dict[str, Any] | None = None


class IngestionWebhookRequest(UpdateIngestionJobRequest):
    """Status report pushed by an external processor."""

    pass


class IngestionJobResponse(CamelModel):
    """Response schema for ingestion job operations."""

    id: uuid.UUID
    document_id: uuid.UUID
    status: IngestionStatus
    error_message: str | None = None
    result: dict[str, Any] | None = None
    config: dict[str, Any] | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
