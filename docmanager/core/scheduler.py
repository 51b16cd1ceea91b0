"""
Cancellable scheduler for simulated ingestion progress.

Each scheduled job gets one asyncio task that sleeps, advances the job to
RUNNING, sleeps again and advances it to COMPLETED. Tasks are keyed by job
id so cancelling, deleting or externally finishing a job deregisters the
pending timers. Tasks live only in this process: a restart drops them and
the affected jobs stay where they were.

Dependencies: asyncio, docmanager.core.ingestion_state
System role: In-process timer registry for the ingestion engine
"""

import asyncio
import logging
from typing import Awaitable, Callable
from uuid import UUID

from docmanager.core.ingestion_state import IngestionStatus

logger = logging.getLogger(__name__)

# (job_id, target status) -> True when the job was advanced, False when it
# was missing or already terminal
AdvanceCallback = Callable[[UUID, IngestionStatus], Awaitable[bool]]


class IngestionScheduler:
    """Registry of simulated-progress tasks keyed by job id."""

    def __init__(self, running_delay: float, completion_delay: float) -> None:
        """
        Initialize scheduler.

        Args:
            running_delay: Seconds before a job is advanced to RUNNING
            completion_delay: Seconds between RUNNING and COMPLETED
        """
        self.running_delay = running_delay
        self.completion_delay = completion_delay
        self._tasks: dict[UUID, asyncio.Task] = {}

    def schedule(self, job_id: UUID, advance: AdvanceCallback) -> asyncio.Task:
        """
        Schedule simulated progress for a job.

        Replaces any task already registered for the same job id.
        Must be called from a running event loop.

        Args:
            job_id: Ingestion job UUID
            advance: Callback performing one forced transition

        Returns:
            asyncio.Task: The registered task
        """
        self.cancel(job_id)
        task = asyncio.create_task(
            self._run(job_id, advance), name=f"ingestion-sim-{job_id}"
        )
        self._tasks[job_id] = task
        task.add_done_callback(lambda t: self._forget(job_id, t))
        logger.debug("Simulated ingestion scheduled", extra={"job_id": str(job_id)})
        return task

    def cancel(self, job_id: UUID) -> bool:
        """
        Deregister the pending task for a job.

        Returns:
            bool: True if a pending task was cancelled
        """
        task = self._tasks.pop(job_id, None)
        if task is None or task.done():
            return False
        # A step calling back into the engine never cancels itself
        if task is asyncio.current_task():
            return False
        task.cancel()
        logger.info("Simulated ingestion cancelled", extra={"job_id": str(job_id)})
        return True

    def is_scheduled(self, job_id: UUID) -> bool:
        task = self._tasks.get(job_id)
        return task is not None and not task.done()

    @property
    def pending_count(self) -> int:
        return sum(1 for task in self._tasks.values() if not task.done())

    async def shutdown(self) -> None:
        """Cancel every pending task and wait for them to unwind."""
        tasks = [task for task in self._tasks.values() if not task.done()]
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Ingestion scheduler stopped", extra={"cancelled_tasks": len(tasks)})

    def _forget(self, job_id: UUID, task: asyncio.Task) -> None:
        if self._tasks.get(job_id) is task:
            del self._tasks[job_id]

    async def _run(self, job_id: UUID, advance: AdvanceCallback) -> None:
        try:
            await asyncio.sleep(self.running_delay)
            if not await advance(job_id, IngestionStatus.RUNNING):
                return
            await asyncio.sleep(self.completion_delay)
            await advance(job_id, IngestionStatus.COMPLETED)
        except asyncio.CancelledError:
            logger.debug("Simulated ingestion task stopped", extra={"job_id": str(job_id)})
            raise
        except Exception as e:
            # No caller to report to; failures only reach the log
            logger.exception(
                "Error in simulated ingestion process",
                extra={"job_id": str(job_id), "error": str(e)},
            )
