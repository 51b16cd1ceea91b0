"""
Document status lifecycle.

  UPLOADED    initial state, and the state restored after a cancelled job
  PROCESSING  an active (non-terminal) ingestion job exists
  PROCESSED   the last ingestion job completed
  FAILED      the last ingestion job failed

Non-admins never write a status directly; it changes through the ingestion
cascade below or through an explicit admin update.

Dependencies: None
System role: Document status vocabulary and ingestion cascade rules
"""

import enum


class DocumentStatus(str, enum.Enum):
    """Document processing lifecycle states."""

    UPLOADED = "uploaded"
    PROCESSING = "processing"
    PROCESSED = "processed"
    FAILED = "failed"


# Job status (value) -> document status written when the job enters it.
# Keyed by the job status string so this module stays independent of the
# ingestion state machine.
_JOB_CASCADE: dict[str, DocumentStatus] = {
    "pending": DocumentStatus.PROCESSING,
    "completed": DocumentStatus.PROCESSED,
    "failed": DocumentStatus.FAILED,
    "cancelled": DocumentStatus.UPLOADED,
}


def cascade_for(job_status: str) -> DocumentStatus | None:
    """
    Document status implied by a job entering ``job_status``.

    Returns None when the job transition leaves the document untouched
    (entering ``running``).
    """
    return _JOB_CASCADE.get(str(getattr(job_status, "value", job_status)))
