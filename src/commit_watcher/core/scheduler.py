from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from commit_watcher.observability import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ScheduledJob:
    job_id: str
    interval_seconds: float
    callback: Callable[[str], Awaitable[object] | object]


class FeedScheduler:
    """Runs each job in its own task, so one job never overlaps itself."""

    def __init__(self) -> None:
        self._jobs: dict[str, ScheduledJob] = {}
        self._tasks: dict[str, asyncio.Task[None]] = {}
        self._stop_event = asyncio.Event()
        self._running = False

    @property
    def job_ids(self) -> list[str]:
        return list(self._jobs)

    def schedule(self, job_id: str, interval_seconds: float, callback: Callable[[str], Awaitable[object] | object]) -> None:
        if interval_seconds <= 0:
            msg = "interval_seconds must be positive"
            raise ValueError(msg)
        if not callable(callback):
            msg = "callback must be callable"
            raise TypeError(msg)
        if job_id in self._jobs:
            return

        job = ScheduledJob(job_id=job_id, interval_seconds=interval_seconds, callback=callback)
        self._jobs[job_id] = job
        logger.debug("job_scheduled", job_id=job_id, interval_seconds=interval_seconds)
        if self._running:
            self._start_job(job)

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._stop_event.clear()
        for job in self._jobs.values():
            self._start_job(job)

    async def shutdown(self) -> None:
        if not self._running:
            return
        self._running = False
        self._stop_event.set()
        await asyncio.gather(*self._tasks.values())
        self._tasks.clear()

    def _start_job(self, job: ScheduledJob) -> None:
        task = self._tasks.get(job.job_id)
        if task is not None and not task.done():
            return
        self._tasks[job.job_id] = asyncio.create_task(self._run(job), name=f"poll-{job.job_id}")

    async def _run(self, job: ScheduledJob) -> None:
        while not self._stop_event.is_set():
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(self._stop_event.wait(), timeout=job.interval_seconds)
            if self._stop_event.is_set():
                break
            try:
                await self._maybe_await(job.callback(job.job_id))
            except Exception:
                logger.exception("job_failed", job_id=job.job_id)

    async def _maybe_await(self, result: Awaitable[object] | object) -> None:
        if asyncio.iscoroutine(result):
            await result
