"""
Ingestion job ORM model.

Tracks one submission of a document to the (simulated) ingestion pipeline.

Dependencies: sqlalchemy, docmanager.boundary.db.base
System role: Ingestion job persistence for polling and webhook updates
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docmanager.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docmanager.core.ingestion_state import IngestionStatus


class IngestionJobModel(Base, UUIDMixin, TimestampMixin):
    """
    Ingestion job ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        document_id: Document being ingested (ON DELETE CASCADE)
        status: PENDING / RUNNING / COMPLETED / FAILED / CANCELLED
        error_message: Failure details, null unless reported
        result: Processor output payload (opaque JSON)
        config: Client-supplied processing options (opaque JSON)
        started_at: First entry into RUNNING, set once
        completed_at: First entry into a terminal state, set once
        created_at: Job creation timestamp (UTC)
        updated_at: Last status update timestamp (UTC)

    Workflow:
        1. Client creates job → PENDING, document → PROCESSING
        2. Simulated processor or webhook → RUNNING
        3. Processor/webhook/admin → COMPLETED or FAILED, document follows
        4. Owner or admin may cancel while PENDING/RUNNING → document UPLOADED
    """

    __tablename__ = "ingestion_jobs"

    document_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    status: Mapped[IngestionStatus] = mapped_column(
        Enum(IngestionStatus, native_enum=False),
        nullable=False,
        default=IngestionStatus.PENDING,
    )

    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    result: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    config: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Relationships
    document = relationship("DocumentModel", back_populates="ingestion_jobs")
