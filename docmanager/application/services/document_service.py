"""
Document service orchestrator.

Coordinates document upload, retrieval, metadata updates, status changes
and deletion. Record and blob are written and removed together.

Dependencies: docmanager.boundary.db.CRUD, docmanager.boundary.storage,
docmanager.core.authorization
System role: Document use case orchestration
"""

import logging
import uuid
from pathlib import PurePosixPath
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from docmanager.boundary.db.CRUD.document_crud import document_crud
from docmanager.boundary.db.CRUD.ingestion_job_crud import ingestion_job_crud
from docmanager.boundary.db.models.document_model import DocumentModel, DocumentStatus
from docmanager.boundary.storage.blob_store import BlobStore
from docmanager.core.authorization import Action, Actor, authorize, owner_scope
from docmanager.core.exceptions import BadRequestError, NotFoundError, PayloadTooLargeError
from docmanager.core.scheduler import IngestionScheduler

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024


def _base_name(original_name: str) -> str:
    """Last path component of a client filename (either separator style)."""
    name = PurePosixPath(original_name.replace("\\", "/")).name
    return name or "upload"


class DocumentService:
    """
    Document service orchestrator.

    Owns document records and their blobs. Status writes go through
    ``set_document_status`` (admin) or the ingestion cascade.
    """

    def __init__(
        self,
        db: AsyncSession,
        blob_store: BlobStore,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        scheduler: IngestionScheduler | None = None,
    ) -> None:
        """
        Initialize document service.

        Args:
            db: Async SQLAlchemy session
            blob_store: Storage for raw document bytes
            max_file_size: Upload size limit in bytes
            scheduler: Simulated ingestion scheduler, used to stop pending
                progress for jobs removed with their document
        """
        self.db = db
        self.blob_store = blob_store
        self.max_file_size = max_file_size
        self.scheduler = scheduler

    async def upload_document(
        self,
        actor: Actor,
        original_name: str,
        mime_type: str,
        content: bytes,
        description: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> DocumentModel:
        """
        Store an uploaded file and create its document record.

        Args:
            actor: Uploading user (becomes the owner)
            original_name: Client filename; directory components are dropped
            mime_type: Client-declared media type
            content: File bytes
            description: Optional free text
            metadata: Optional free-form JSON object

        Returns:
            DocumentModel: Created document with status UPLOADED

        Raises:
            BadRequestError: If the upload is empty
            PayloadTooLargeError: If the upload exceeds the size limit
        """
        if not content:
            raise BadRequestError("No file provided")
        if len(content) > self.max_file_size:
            raise PayloadTooLargeError(
                self.max_file_size, details={"size": len(content)}
            )

        original_name = _base_name(original_name)
        filename = f"{uuid.uuid4()}-{original_name}"
        file_path = await self.blob_store.write(filename, content)

        try:
            document = await document_crud.create(
                self.db,
                filename=filename,
                original_name=original_name,
                mime_type=mime_type,
                size=len(content),
                file_path=file_path,
                status=DocumentStatus.UPLOADED,
                description=description,
                doc_metadata=metadata,
                uploaded_by_id=actor.id,
            )
            await self.db.commit()
        except Exception as e:
            logger.error(
                "Failed to create document record, removing blob",
                extra={"error": str(e), "file_path": file_path},
            )
            await self.blob_store.delete(file_path)
            raise

        logger.info(
            "Document uploaded",
            extra={
                "document_id": str(document.id),
                "original_name": original_name,
                "size": len(content),
                "actor_id": str(actor.id),
            },
        )
        return document

    async def list_documents(self, actor: Actor) -> Sequence[DocumentModel]:
        """List documents visible to the actor (admins see all), newest first."""
        return await document_crud.get_by_owner(self.db, owner_scope(actor))

    async def find_document(self, document_id: UUID, actor: Actor) -> DocumentModel:
        """
        Get a document the actor may view.

        Raises:
            NotFoundError: If the document does not exist
            ForbiddenError: If the actor is neither owner nor admin
        """
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise NotFoundError("Document", document_id)
        authorize(actor, Action.READ_DOCUMENT, document.uploaded_by_id)
        return document

    async def read_document_content(
        self, document_id: UUID, actor: Actor
    ) -> tuple[DocumentModel, bytes]:
        """
        Load a document together with its stored bytes.

        Raises:
            NotFoundError: Unknown document, or its blob is missing
            ForbiddenError: If the actor is neither owner nor admin
        """
        document = await self.find_document(document_id, actor)
        if not await self.blob_store.exists(document.file_path):
            raise NotFoundError("File", document.id)
        content = await self.blob_store.read(document.file_path)
        return document, content

    async def update_document(
        self,
        document_id: UUID,
        changes: dict[str, Any],
        actor: Actor,
    ) -> DocumentModel:
        """
        Update description, metadata and (admins only) status.

        Args:
            document_id: Document UUID
            changes: Provided fields among description, metadata, status
            actor: Authenticated user

        Returns:
            DocumentModel: Updated document

        Raises:
            NotFoundError: If the document does not exist
            ForbiddenError: Non-owner non-admin, or a status change by a
                non-admin
        """
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise NotFoundError("Document", document_id)
        authorize(actor, Action.UPDATE_DOCUMENT, document.uploaded_by_id)

        fields: dict[str, Any] = {}
        if "description" in changes:
            fields["description"] = changes["description"]
        if "metadata" in changes:
            fields["doc_metadata"] = changes["metadata"]
        if changes.get("status") is not None:
            authorize(actor, Action.SET_DOCUMENT_STATUS, document.uploaded_by_id)
            fields["status"] = DocumentStatus(changes["status"])

        if not fields:
            return document

        updated = await document_crud.update_by_id(self.db, document.id, **fields)
        await self.db.commit()
        logger.info(
            "Document updated",
            extra={
                "document_id": str(document.id),
                "fields": sorted(fields),
                "actor_id": str(actor.id),
            },
        )
        return updated

    async def set_document_status(
        self,
        document_id: UUID,
        status: DocumentStatus,
        actor: Actor,
    ) -> DocumentModel:
        """
        Set a document's status directly (admin only).

        Raises:
            NotFoundError: If the document does not exist
            ForbiddenError: If the actor is not an admin
        """
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise NotFoundError("Document", document_id)
        authorize(actor, Action.SET_DOCUMENT_STATUS, document.uploaded_by_id)

        updated = await document_crud.update_status(self.db, document.id, status)
        await self.db.commit()
        logger.info(
            "Document status set",
            extra={
                "document_id": str(document.id),
                "status": status.value,
                "actor_id": str(actor.id),
            },
        )
        return updated

    async def delete_document(self, document_id: UUID, actor: Actor) -> None:
        """
        Delete a document record, its blob and its ingestion jobs.

        Raises:
            NotFoundError: If the document does not exist
            ForbiddenError: If the actor is neither owner nor admin
        """
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise NotFoundError("Document", document_id)
        authorize(actor, Action.DELETE_DOCUMENT, document.uploaded_by_id)

        jobs = await ingestion_job_crud.get_by_document(self.db, document.id)
        file_path = document.file_path

        if await self.blob_store.exists(file_path):
            await self.blob_store.delete(file_path)
        await document_crud.delete_by_id(self.db, document.id)
        await self.db.commit()

        if self.scheduler is not None:
            for job in jobs:
                self.scheduler.cancel(job.id)

        logger.info(
            "Document deleted",
            extra={
                "document_id": str(document_id),
                "jobs_removed": len(jobs),
                "actor_id": str(actor.id),
            },
        )
