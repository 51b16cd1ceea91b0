"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel
with owner-scoped listing and the atomic processing claim used to keep
one active ingestion job per document.

Dependencies: sqlalchemy, docmanager.boundary.db.models.document_model
System role: Document persistence operations for upload and ingestion tracking
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from docmanager.boundary.db.base import utc_now
from docmanager.boundary.db.CRUD.base_crud import BaseCRUD
from docmanager.boundary.db.models.document_model import DocumentModel, DocumentStatus


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with owner filtering and status transitions.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_owner(
        self,
        session: AsyncSession,
        owner_id: UUID | None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents uploaded by a user, newest first.

        Args:
            session: Async database session
            owner_id: Uploader UUID, or None for every document
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Sequence of DocumentModels
        """
        if owner_id is None:
            return await self.get_all(session, limit=limit, offset=offset)

        stmt = (
            select(DocumentModel)
            .where(DocumentModel.uploaded_by_id == owner_id)
            .order_by(DocumentModel.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_status(
        self,
        session: AsyncSession,
        id: UUID,
        status: DocumentStatus,
    ) -> DocumentModel | None:
        """
        Update document processing status.

        Args:
            session: Async database session
            id: Document UUID
            status: New processing status

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        return await self.update_by_id(session, id, status=status)

    async def claim_for_processing(self, session: AsyncSession, id: UUID) -> bool:
        """
        Atomically move a document into PROCESSING.

        Single conditional UPDATE: succeeds only when the document exists and
        is not already PROCESSING, so two concurrent job submissions for the
        same document cannot both win.

        Args:
            session: Async database session
            id: Document UUID

        Returns:
            True if this call claimed the document, False otherwise
        """
        stmt = (
            update(DocumentModel)
            .where(
                DocumentModel.id == id,
                DocumentModel.status != DocumentStatus.PROCESSING,
            )
            .values(status=DocumentStatus.PROCESSING, updated_at=utc_now())
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


document_crud = DocumentCRUD()
