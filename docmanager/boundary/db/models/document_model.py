"""
Document ORM model.

Represents uploaded documents with processing status and metadata.
Tracks document ingestion lifecycle from upload to processed/failed.

Dependencies: sqlalchemy, docmanager.boundary.db.base
System role: Document persistence for upload and ingestion tracking
"""

import uuid

from sqlalchemy import JSON, BigInteger, Enum, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docmanager.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docmanager.core.document_state import DocumentStatus


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model tracking upload and ingestion state.

    Lifecycle: Upload (UPLOADED) → ingestion job created (PROCESSING) →
    job completes (PROCESSED) or fails (FAILED). A cancelled job reverts the
    document to UPLOADED.

    Attributes:
        id: UUID primary key (auto-generated)
        filename: Generated storage name ("<uuid4>-<original name>"), unique
        original_name: Filename as uploaded by the client
        mime_type: Client-declared media type
        size: Byte size of the stored blob
        file_path: Blob store path or key
        status: Current processing state
        description: Optional free text
        doc_metadata: Optional free-form JSON ("metadata" column)
        uploaded_by_id: Owning user (ON DELETE CASCADE)
        created_at: Upload timestamp (UTC)
        updated_at: Last change timestamp (UTC)

    Relationships:
        uploaded_by: Owning UserModel
        ingestion_jobs: Jobs submitted for this document
    """

    __tablename__ = "documents"

    filename: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)

    original_name: Mapped[str] = mapped_column(String(255), nullable=False)

    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)

    size: Mapped[int] = mapped_column(BigInteger, nullable=False)

    file_path: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        doc="Local path or S3 key of the stored blob",
    )

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False),
        nullable=False,
        default=DocumentStatus.UPLOADED,
    )

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    doc_metadata: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)

    uploaded_by_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    uploaded_by = relationship("UserModel", back_populates="documents")
    ingestion_jobs = relationship(
        "IngestionJobModel",
        back_populates="document",
        cascade="all, delete-orphan",
    )
