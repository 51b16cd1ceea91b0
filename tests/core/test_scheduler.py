"""
Test suite for IngestionScheduler.

Uses millisecond delays and a recording callback in place of the
database-backed step.

System role: Verification of simulated progress timing and cancellation
"""

import asyncio
import uuid

import pytest

from docmanager.core.ingestion_state import IngestionStatus
from docmanager.core.scheduler import IngestionScheduler


class Recorder:
    """Advance callback recording every step."""

    def __init__(self, results: dict[IngestionStatus, bool] | None = None) -> None:
        self.calls: list[tuple[uuid.UUID, IngestionStatus]] = []
        self.results = results or {}

    async def __call__(self, job_id: uuid.UUID, status: IngestionStatus) -> bool:
        self.calls.append((job_id, status))
        return self.results.get(status, True)


@pytest.fixture
def scheduler() -> IngestionScheduler:
    return IngestionScheduler(running_delay=0.01, completion_delay=0.01)


class TestSchedule:
    @pytest.mark.asyncio
    async def test_runs_running_then_completed(self, scheduler: IngestionScheduler) -> None:
        # Arrange
        job_id = uuid.uuid4()
        recorder = Recorder()

        # Act
        task = scheduler.schedule(job_id, recorder)
        await task

        # Assert
        assert recorder.calls == [
            (job_id, IngestionStatus.RUNNING),
            (job_id, IngestionStatus.COMPLETED),
        ]
        assert not scheduler.is_scheduled(job_id)

    @pytest.mark.asyncio
    async def test_stops_when_running_step_is_skipped(
        self, scheduler: IngestionScheduler
    ) -> None:
        job_id = uuid.uuid4()
        recorder = Recorder({IngestionStatus.RUNNING: False})

        await scheduler.schedule(job_id, recorder)

        assert recorder.calls == [(job_id, IngestionStatus.RUNNING)]

    @pytest.mark.asyncio
    async def test_step_errors_are_logged_not_raised(
        self, scheduler: IngestionScheduler
    ) -> None:
        async def failing(job_id, status):
            raise RuntimeError("database unavailable")

        task = scheduler.schedule(uuid.uuid4(), failing)
        await task

        assert task.exception() is None

    @pytest.mark.asyncio
    async def test_rescheduling_replaces_previous_task(self) -> None:
        scheduler = IngestionScheduler(running_delay=0.5, completion_delay=0.01)
        job_id = uuid.uuid4()

        first = scheduler.schedule(job_id, Recorder())
        second = scheduler.schedule(job_id, Recorder())
        await asyncio.sleep(0.01)

        assert first.cancelled()
        assert scheduler.pending_count == 1
        second.cancel()


class TestCancel:
    @pytest.mark.asyncio
    async def test_cancel_prevents_any_step(self) -> None:
        # Arrange
        scheduler = IngestionScheduler(running_delay=0.05, completion_delay=0.05)
        job_id = uuid.uuid4()
        recorder = Recorder()
        task = scheduler.schedule(job_id, recorder)

        # Act
        cancelled = scheduler.cancel(job_id)
        with pytest.raises(asyncio.CancelledError):
            await task

        # Assert
        assert cancelled is True
        assert recorder.calls == []
        assert not scheduler.is_scheduled(job_id)

    @pytest.mark.asyncio
    async def test_cancel_between_steps(self) -> None:
        scheduler = IngestionScheduler(running_delay=0.01, completion_delay=0.5)
        job_id = uuid.uuid4()
        recorder = Recorder()
        task = scheduler.schedule(job_id, recorder)

        await asyncio.sleep(0.1)
        scheduler.cancel(job_id)
        with pytest.raises(asyncio.CancelledError):
            await task

        assert recorder.calls == [(job_id, IngestionStatus.RUNNING)]

    def test_cancel_unknown_job_returns_false(self, scheduler: IngestionScheduler) -> None:
        assert scheduler.cancel(uuid.uuid4()) is False

    @pytest.mark.asyncio
    async def test_step_cancelling_its_own_job_keeps_running(self) -> None:
        scheduler = IngestionScheduler(running_delay=0.01, completion_delay=0.01)
        job_id = uuid.uuid4()
        calls = []

        async def advance(jid, status):
            calls.append(status)
            scheduler.cancel(jid)
            return True

        await scheduler.schedule(job_id, advance)

        assert calls == [IngestionStatus.RUNNING, IngestionStatus.COMPLETED]


class TestShutdown:
    @pytest.mark.asyncio
    async def test_shutdown_cancels_everything(self) -> None:
        scheduler = IngestionScheduler(running_delay=1.0, completion_delay=1.0)
        recorder = Recorder()
        for _ in range(3):
            scheduler.schedule(uuid.uuid4(), recorder)

        await scheduler.shutdown()

        assert scheduler.pending_count == 0
        assert recorder.calls == []
