"""
Ingestion job CRUD operations.

Provides Create, Read, Update, Delete operations for IngestionJobModel.
Jobs are owned through their document, so owner-scoped queries join
on documents.

Dependencies: sqlalchemy, docmanager.boundary.db.models
System role: Ingestion job persistence for the job engine
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from docmanager.boundary.db.base import utc_now
from docmanager.boundary.db.CRUD.base_crud import BaseCRUD
from docmanager.boundary.db.models.document_model import DocumentModel
from docmanager.boundary.db.models.ingestion_job_model import IngestionJobModel
from docmanager.core.ingestion_state import TERMINAL_STATUSES


class IngestionJobCRUD(BaseCRUD[IngestionJobModel]):
    """CRUD operations for IngestionJobModel."""

    def __init__(self) -> None:
        """Initialize IngestionJobCRUD with IngestionJobModel."""
        super().__init__(IngestionJobModel)

    async def get_with_document(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> IngestionJobModel | None:
        """
        Retrieve a job with its document eagerly loaded.

        The document carries the owner (uploaded_by_id) needed for
        authorization decisions.

        Args:
            session: Async database session
            id: Job UUID

        Returns:
            IngestionJobModel with ``document`` populated, None if not found
        """
        stmt = (
            select(IngestionJobModel)
            .options(selectinload(IngestionJobModel.document))
            .where(IngestionJobModel.id == id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_owner(
        self,
        session: AsyncSession,
        owner_id: UUID | None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[IngestionJobModel]:
        """
        Retrieve jobs whose document belongs to a user, newest first.

        Args:
            session: Async database session
            owner_id: Document uploader UUID, or None for every job
            limit: Maximum number of jobs to return
            offset: Number of jobs to skip

        Returns:
            Sequence of IngestionJobModels
        """
        stmt = select(IngestionJobModel)
        if owner_id is not None:
            stmt = stmt.join(
                DocumentModel, IngestionJobModel.document_id == DocumentModel.id
            ).where(DocumentModel.uploaded_by_id == owner_id)
        stmt = stmt.order_by(IngestionJobModel.created_at.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_by_document(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[IngestionJobModel]:
        stmt = (
            select(IngestionJobModel)
            .where(IngestionJobModel.document_id == document_id)
            .order_by(IngestionJobModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_unless_terminal(
        self,
        session: AsyncSession,
        id: UUID,
        **values,
    ) -> bool:
        """
        Conditionally update a job that has not reached a terminal status.

        Single UPDATE guarded on the stored status, so a cancel or terminal
        update committed after the caller read the job is never overwritten.

        Args:
            session: Async database session
            id: Job UUID
            **values: Column values to write

        Returns:
            True if the job was updated, False if it is missing or terminal
        """
        stmt = (
            update(IngestionJobModel)
            .where(
                IngestionJobModel.id == id,
                IngestionJobModel.status.not_in(list(TERMINAL_STATUSES)),
            )
            .values(updated_at=utc_now(), **values)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


ingestion_job_crud = IngestionJobCRUD()
