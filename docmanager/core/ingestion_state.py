"""
Ingestion job state machine.

    pending -> running -> completed | failed
    pending | running -> cancelled

Terminal states (completed, failed, cancelled) are final. started_at is
stamped on the first entry into running and completed_at on the first entry
into a terminal state; neither is ever overwritten.

The functions here are pure: they validate a requested transition and return
the field changes plus the document status cascade. Services apply the plan.

Dependencies: docmanager.core.document_state, docmanager.core.exceptions
System role: Job transition rules shared by admin updates, webhooks,
cancellation and the simulated processor
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from docmanager.core.document_state import DocumentStatus, cascade_for
from docmanager.core.exceptions import BadRequestError


class IngestionStatus(str, enum.Enum):
    """
    Ingestion job execution states.

    PENDING: Job created, simulated or external processor not started
    RUNNING: Processor picked up the job
    COMPLETED: Finished successfully; result holds the payload
    FAILED: Finished with an error; error_message holds details
    CANCELLED: Stopped by the owner or an admin
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


TERMINAL_STATUSES = frozenset(
    {IngestionStatus.COMPLETED, IngestionStatus.FAILED, IngestionStatus.CANCELLED}
)


def is_terminal(status: IngestionStatus) -> bool:
    return status in TERMINAL_STATUSES


@dataclass
class JobTransition:
    """Planned change to a job and its document."""

    status: IngestionStatus
    started_at: datetime | None = None
    completed_at: datetime | None = None
    document_status: DocumentStatus | None = None
    status_changed: bool = False
    payload: dict[str, Any] = field(default_factory=dict)

    def job_changes(self) -> dict[str, Any]:
        """Column values to write on the job row."""
        changes: dict[str, Any] = dict(self.payload)
        if self.status_changed:
            changes["status"] = self.status
        if self.started_at is not None:
            changes["started_at"] = self.started_at
        if self.completed_at is not None:
            changes["completed_at"] = self.completed_at
        return changes


def plan_transition(
    current: IngestionStatus,
    target: IngestionStatus | None,
    *,
    started_at: datetime | None,
    completed_at: datetime | None,
    now: datetime,
    payload: dict[str, Any] | None = None,
) -> JobTransition:
    """
    Validate and plan a job status change.

    Args:
        current: Job status as currently stored
        target: Requested status (None keeps the status and only merges payload)
        started_at: Stored started_at
        completed_at: Stored completed_at
        now: Timestamp to stamp on first entry
        payload: Extra fields to merge (error_message, result)

    Returns:
        JobTransition: Field changes and document cascade

    Raises:
        BadRequestError: Leaving a terminal state, or moving back to pending
    """
    payload = dict(payload or {})

    if target is None or target == current:
        return JobTransition(status=current, payload=payload)

    if is_terminal(current):
        raise BadRequestError(
            f"Ingestion job is already {current.value}",
            details={"current_status": current.value, "requested_status": target.value},
        )

    if target == IngestionStatus.PENDING:
        raise BadRequestError(
            "Cannot move an ingestion job back to pending",
            details={"current_status": current.value},
        )

    transition = JobTransition(status=target, status_changed=True, payload=payload)
    if target == IngestionStatus.RUNNING and started_at is None:
        transition.started_at = now
    if is_terminal(target):
        if completed_at is None:
            transition.completed_at = now
        transition.document_status = cascade_for(target)
    return transition


def plan_cancel(
    current: IngestionStatus,
    *,
    started_at: datetime | None,
    completed_at: datetime | None,
    now: datetime,
) -> JobTransition:
    """
    Plan cancellation of a job.

    Raises:
        BadRequestError: The job already completed, failed or was cancelled
    """
    if current in (IngestionStatus.COMPLETED, IngestionStatus.FAILED):
        raise BadRequestError(
            "Cannot cancel a completed or failed job",
            details={"current_status": current.value},
        )
    if current == IngestionStatus.CANCELLED:
        raise BadRequestError("Job is already cancelled")
    return plan_transition(
        current,
        IngestionStatus.CANCELLED,
        started_at=started_at,
        completed_at=completed_at,
        now=now,
    )


# Canned payload attached by the simulated processor.
SIMULATED_RESULT: dict[str, Any] = {
    "extractedText": "Sample extracted text from document...",
    "summary": "This is a sample summary of the document.",
    "language": "en",
    "wordCount": 150,
}
