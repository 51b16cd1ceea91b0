"""
Ingestion job service orchestrator.

Owns ingestion job records: creation with the one-active-job guard, owner
scoped reads, admin updates, cancellation, deletion and processor webhooks.
Every status change goes through the state machine in
``docmanager.core.ingestion_state`` and cascades the document status in the
same transaction. Newly created jobs can be driven by the in-process
simulated processor (``IngestionScheduler``).

Dependencies: docmanager.boundary.db.CRUD, docmanager.core.ingestion_state,
docmanager.core.scheduler, docmanager.core.authorization
System role: Ingestion job engine
"""

import logging
from datetime import datetime, timezone
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docmanager.boundary.db.CRUD.document_crud import document_crud
from docmanager.boundary.db.CRUD.ingestion_job_crud import ingestion_job_crud
from docmanager.boundary.db.models.ingestion_job_model import IngestionJobModel
from docmanager.core.authorization import Action, Actor, authorize, owner_scope
from docmanager.core.exceptions import BadRequestError, NotFoundError
from docmanager.core.ingestion_state import (
    SIMULATED_RESULT,
    IngestionStatus,
    JobTransition,
    is_terminal,
    plan_cancel,
    plan_transition,
)
from docmanager.core.scheduler import AdvanceCallback, IngestionScheduler

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("error_message", "result")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IngestionService:
    """
    Ingestion job service orchestrator.

    Workflow:
        1. create_job claims the document (UPLOADED/PROCESSED/FAILED →
           PROCESSING) and writes a PENDING job
        2. The simulated processor, an admin update or a webhook moves the
           job forward; terminal states cascade to the document
        3. cancel_job stops a PENDING/RUNNING job and reverts the document
           to UPLOADED
    """

    def __init__(
        self,
        db: AsyncSession,
        scheduler: IngestionScheduler | None = None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        simulation_enabled: bool = True,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            db: Async SQLAlchemy session for the current request
            scheduler: Simulated progress scheduler (None disables simulation
                and task cancellation)
            session_factory: Factory for the fresh sessions used by simulated
                steps, which outlive the request session
            simulation_enabled: Schedule simulated progress for new jobs
        """
        self.db = db
        self.scheduler = scheduler
        self.session_factory = session_factory
        self.simulation_enabled = simulation_enabled

    async def _get_job_or_404(self, job_id: UUID) -> IngestionJobModel:
        job = await ingestion_job_crud.get_with_document(self.db, job_id)
        if job is None:
            raise NotFoundError("Ingestion job", job_id)
        return job

    async def create_job(
        self,
        document_id: UUID,
        actor: Actor,
        config: dict[str, Any] | None = None,
    ) -> IngestionJobModel:
        """
        Submit a document for ingestion.

        Args:
            document_id: Document to ingest
            actor: Authenticated user (must be allowed to view the document)
            config: Opaque processing options (stored as-is, default {})

        Returns:
            IngestionJobModel: Created PENDING job

        Raises:
            NotFoundError: If the document does not exist
            ForbiddenError: If the actor may not view the document
            BadRequestError: If the document is already being processed
        """
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise NotFoundError("Document", document_id)
        authorize(actor, Action.READ_DOCUMENT, document.uploaded_by_id)

        if not await document_crud.claim_for_processing(self.db, document.id):
            raise BadRequestError(
                "Document is already being processed",
                details={"document_id": str(document.id)},
            )

        job = await ingestion_job_crud.create(
            self.db,
            document_id=document.id,
            status=IngestionStatus.PENDING,
            config=config or {},
        )
        await self.db.commit()

        logger.info(
            "Ingestion job created",
            extra={
                "job_id": str(job.id),
                "document_id": str(document.id),
                "actor_id": str(actor.id),
            },
        )

        if (
            self.simulation_enabled
            and self.scheduler is not None
            and self.session_factory is not None
        ):
            self.scheduler.schedule(job.id, build_simulated_advance(self.session_factory))
        return job

    async def list_jobs(self, actor: Actor) -> Sequence[IngestionJobModel]:
        """List jobs visible to the actor (admins see all), newest first."""
        return await ingestion_job_crud.get_for_owner(self.db, owner_scope(actor))

    async def get_job(self, job_id: UUID, actor: Actor) -> IngestionJobModel:
        """
        Get a job the actor may view.

        Raises:
            NotFoundError: If the job does not exist
            ForbiddenError: If the actor does not own the job's document
        """
        job = await self._get_job_or_404(job_id)
        authorize(actor, Action.READ_JOB, job.document.uploaded_by_id)
        return job

    async def update_job(
        self,
        job_id: UUID,
        changes: dict[str, Any],
        actor: Actor,
    ) -> IngestionJobModel:
        """
        Merge status, error_message and result into a job (admin only).

        Raises:
            NotFoundError: If the job does not exist
            ForbiddenError: If the actor is not an admin
            BadRequestError: If the status change is not allowed
        """
        job = await self._get_job_or_404(job_id)
        authorize(actor, Action.UPDATE_JOB, job.document.uploaded_by_id)

        updated = await self._apply_changes(job, changes)
        logger.info(
            "Ingestion job updated",
            extra={
                "job_id": str(job_id),
                "status": updated.status.value,
                "actor_id": str(actor.id),
            },
        )
        return updated

    async def cancel_job(self, job_id: UUID, actor: Actor) -> IngestionJobModel:
        """
        Cancel a PENDING or RUNNING job; the document reverts to UPLOADED.

        Raises:
            NotFoundError: If the job does not exist
            ForbiddenError: If the actor does not own the job's document
            BadRequestError: If the job already completed, failed or was
                cancelled
        """
        job = await self._get_job_or_404(job_id)
        authorize(actor, Action.CANCEL_JOB, job.document.uploaded_by_id)

        transition = plan_cancel(
            job.status,
            started_at=job.started_at,
            completed_at=job.completed_at,
            now=_utcnow(),
        )
        cancelled = await self._apply_transition(job, transition)
        logger.info(
            "Ingestion job cancelled",
            extra={"job_id": str(job_id), "actor_id": str(actor.id)},
        )
        return cancelled

    async def delete_job(self, job_id: UUID, actor: Actor) -> None:
        """
        Delete a job record (admin only). The document is left unchanged.

        Raises:
            NotFoundError: If the job does not exist
            ForbiddenError: If the actor is not an admin
        """
        job = await self._get_job_or_404(job_id)
        authorize(actor, Action.DELETE_JOB, job.document.uploaded_by_id)

        await ingestion_job_crud.delete_by_id(self.db, job.id)
        await self.db.commit()
        if self.scheduler is not None:
            self.scheduler.cancel(job_id)

        logger.info(
            "Ingestion job deleted",
            extra={"job_id": str(job_id), "actor_id": str(actor.id)},
        )

    async def handle_webhook(
        self,
        job_id: UUID,
        changes: dict[str, Any],
    ) -> IngestionJobModel:
        """
        Apply a status report from an external processor.

        No actor: the webhook path is unauthenticated. Document status
        cascades exactly as for admin updates.

        Raises:
            NotFoundError: If the job does not exist
            BadRequestError: If the status change is not allowed
        """
        job = await self._get_job_or_404(job_id)
        updated = await self._apply_changes(job, changes)
        logger.info(
            "Ingestion webhook applied",
            extra={"job_id": str(job_id), "status": updated.status.value},
        )
        return updated

    async def advance(
        self,
        job_id: UUID,
        status: IngestionStatus,
        result: dict[str, Any] | None = None,
    ) -> bool:
        """
        Force a job forward on behalf of the simulated processor.

        Re-reads the job; a missing or terminal job is left untouched. The
        write itself is guarded on the stored status, so a cancel committed
        between the read and the write wins.

        Returns:
            bool: True if the job was advanced
        """
        job = await ingestion_job_crud.get_by_id(self.db, job_id)
        if job is None or is_terminal(job.status):
            logger.debug(
                "Simulated step skipped",
                extra={"job_id": str(job_id), "target_status": status.value},
            )
            return False

        payload = {"result": result} if result is not None else None
        transition = plan_transition(
            job.status,
            status,
            started_at=job.started_at,
            completed_at=job.completed_at,
            now=_utcnow(),
            payload=payload,
        )
        applied = await ingestion_job_crud.update_unless_terminal(
            self.db, job.id, **transition.job_changes()
        )
        if not applied:
            await self.db.rollback()
            logger.debug(
                "Simulated step lost to a terminal update",
                extra={"job_id": str(job_id), "target_status": status.value},
            )
            return False
        if transition.document_status is not None:
            await document_crud.update_status(
                self.db, job.document_id, transition.document_status
            )
        await self.db.commit()
        logger.info(
            "Simulated ingestion step applied",
            extra={"job_id": str(job_id), "status": status.value},
        )
        return True

    async def _apply_changes(
        self,
        job: IngestionJobModel,
        changes: dict[str, Any],
    ) -> IngestionJobModel:
        payload = {
            key: changes[key]
            for key in _UPDATABLE_FIELDS
            if key in changes
        }
        target = changes.get("status")
        transition = plan_transition(
            job.status,
            IngestionStatus(target) if target is not None else None,
            started_at=job.started_at,
            completed_at=job.completed_at,
            now=_utcnow(),
            payload=payload,
        )
        return await self._apply_transition(job, transition)

    async def _apply_transition(
        self,
        job: IngestionJobModel,
        transition: JobTransition,
    ) -> IngestionJobModel:
        """Write a planned transition and its document cascade in one commit."""
        changes = transition.job_changes()
        updated = job
        if changes:
            updated = await ingestion_job_crud.update_by_id(self.db, job.id, **changes)
        if transition.document_status is not None:
            await document_crud.update_status(
                self.db, job.document_id, transition.document_status
            )
        await self.db.commit()

        if (
            self.scheduler is not None
            and transition.status_changed
            and is_terminal(transition.status)
        ):
            self.scheduler.cancel(job.id)
        return updated


def build_simulated_advance(
    session_factory: async_sessionmaker[AsyncSession],
) -> AdvanceCallback:
    """
    Build the scheduler callback performing one simulated step.

    Each step opens its own session: the request that created the job has
    finished long before the timers fire.

    Args:
        session_factory: Async session factory

    Returns:
        AdvanceCallback: ``async (job_id, status) -> bool``
    """

    async def advance(job_id: UUID, status: IngestionStatus) -> bool:
        result = dict(SIMULATED_RESULT) if status == IngestionStatus.COMPLETED else None
        async with session_factory() as session:
            return await IngestionService(session).advance(job_id, status, result=result)

    return advance
