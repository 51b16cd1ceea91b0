"""
Test suite for the ingestion job state machine.

System role: Verification of job transitions, timestamps and document cascade
"""

from datetime import datetime, timedelta, timezone

import pytest

from docmanager.core.document_state import DocumentStatus, cascade_for
from docmanager.core.exceptions import BadRequestError
from docmanager.core.ingestion_state import (
    SIMULATED_RESULT,
    IngestionStatus,
    is_terminal,
    plan_cancel,
    plan_transition,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
EARLIER = NOW - timedelta(minutes=5)


class TestPlanTransition:
    def test_pending_to_running_stamps_started_at(self) -> None:
        # Act
        plan = plan_transition(
            IngestionStatus.PENDING,
            IngestionStatus.RUNNING,
            started_at=None,
            completed_at=None,
            now=NOW,
        )

        # Assert
        assert plan.job_changes() == {"status": IngestionStatus.RUNNING, "started_at": NOW}
        assert plan.document_status is None

    def test_running_to_completed_stamps_completed_at_and_cascades(self) -> None:
        plan = plan_transition(
            IngestionStatus.RUNNING,
            IngestionStatus.COMPLETED,
            started_at=EARLIER,
            completed_at=None,
            now=NOW,
            payload={"result": {"k": "v"}},
        )

        changes = plan.job_changes()
        assert changes["status"] == IngestionStatus.COMPLETED
        assert changes["completed_at"] == NOW
        assert changes["result"] == {"k": "v"}
        assert "started_at" not in changes
        assert plan.document_status == DocumentStatus.PROCESSED

    def test_failure_cascades_failed(self) -> None:
        plan = plan_transition(
            IngestionStatus.RUNNING,
            IngestionStatus.FAILED,
            started_at=EARLIER,
            completed_at=None,
            now=NOW,
            payload={"error_message": "boom"},
        )

        assert plan.document_status == DocumentStatus.FAILED
        assert plan.job_changes()["error_message"] == "boom"

    def test_pending_can_fail_directly(self) -> None:
        plan = plan_transition(
            IngestionStatus.PENDING,
            IngestionStatus.FAILED,
            started_at=None,
            completed_at=None,
            now=NOW,
        )

        assert plan.status == IngestionStatus.FAILED
        assert "started_at" not in plan.job_changes()

    def test_same_status_only_merges_payload(self) -> None:
        plan = plan_transition(
            IngestionStatus.RUNNING,
            IngestionStatus.RUNNING,
            started_at=EARLIER,
            completed_at=None,
            now=NOW,
            payload={"result": {"partial": True}},
        )

        assert plan.job_changes() == {"result": {"partial": True}}
        assert not plan.status_changed

    def test_no_target_keeps_status(self) -> None:
        plan = plan_transition(
            IngestionStatus.COMPLETED,
            None,
            started_at=EARLIER,
            completed_at=EARLIER,
            now=NOW,
            payload={"error_message": "note"},
        )

        assert plan.job_changes() == {"error_message": "note"}

    @pytest.mark.parametrize(
        "terminal",
        [IngestionStatus.COMPLETED, IngestionStatus.FAILED, IngestionStatus.CANCELLED],
    )
    def test_leaving_terminal_state_is_rejected(self, terminal: IngestionStatus) -> None:
        with pytest.raises(BadRequestError) as exc_info:
            plan_transition(
                terminal,
                IngestionStatus.RUNNING,
                started_at=EARLIER,
                completed_at=EARLIER,
                now=NOW,
            )

        assert terminal.value in exc_info.value.message

    def test_running_back_to_pending_is_rejected(self) -> None:
        with pytest.raises(BadRequestError):
            plan_transition(
                IngestionStatus.RUNNING,
                IngestionStatus.PENDING,
                started_at=EARLIER,
                completed_at=None,
                now=NOW,
            )


class TestPlanCancel:
    @pytest.mark.parametrize("status", [IngestionStatus.PENDING, IngestionStatus.RUNNING])
    def test_active_job_is_cancelled(self, status: IngestionStatus) -> None:
        plan = plan_cancel(status, started_at=None, completed_at=None, now=NOW)

        assert plan.status == IngestionStatus.CANCELLED
        assert plan.job_changes()["completed_at"] == NOW
        assert plan.document_status == DocumentStatus.UPLOADED

    @pytest.mark.parametrize("status", [IngestionStatus.COMPLETED, IngestionStatus.FAILED])
    def test_finished_job_cannot_be_cancelled(self, status: IngestionStatus) -> None:
        with pytest.raises(BadRequestError) as exc_info:
            plan_cancel(status, started_at=EARLIER, completed_at=EARLIER, now=NOW)

        assert exc_info.value.message == "Cannot cancel a completed or failed job"

    def test_cancelled_job_cannot_be_cancelled_again(self) -> None:
        with pytest.raises(BadRequestError) as exc_info:
            plan_cancel(
                IngestionStatus.CANCELLED, started_at=None, completed_at=EARLIER, now=NOW
            )

        assert exc_info.value.message == "Job is already cancelled"


class TestDocumentCascade:
    @pytest.mark.parametrize(
        "job_status, expected",
        [
            (IngestionStatus.PENDING, DocumentStatus.PROCESSING),
            (IngestionStatus.RUNNING, None),
            (IngestionStatus.COMPLETED, DocumentStatus.PROCESSED),
            (IngestionStatus.FAILED, DocumentStatus.FAILED),
            (IngestionStatus.CANCELLED, DocumentStatus.UPLOADED),
        ],
    )
    def test_cascade_table(self, job_status, expected) -> None:
        assert cascade_for(job_status) == expected


def test_terminal_statuses() -> None:
    assert is_terminal(IngestionStatus.CANCELLED)
    assert not is_terminal(IngestionStatus.RUNNING)


def test_simulated_result_shape() -> None:
    assert SIMULATED_RESULT["language"] == "en"
    assert SIMULATED_RESULT["wordCount"] == 150
    assert set(SIMULATED_RESULT) == {"extractedText", "summary", "language", "wordCount"}
