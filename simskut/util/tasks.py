"""Fire-and-forget background jobs and the post-commit outbox feeding them.

Side effects such as mention fan-out must never delay or fail the write that
triggered them. Jobs run on the event loop as tracked tasks, each inside its
own dependency scope so they do not share the triggering request's database
session, which may already be closed by the time they run.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import logfire
from dishka import AsyncContainer

Job = Callable[[AsyncContainer], Awaitable[Any]]


class BackgroundDispatcher:
    """Schedules jobs as detached asyncio tasks.

    Failures are logged once and never retried or re-raised.
    """

    def __init__(self, container: AsyncContainer) -> None:
        """Initialize dispatcher.

        Args:
            container: Container used to open a fresh scope per job
        """
        self.container = container
        self._tasks: set[asyncio.Task] = set()

    def dispatch(self, name: str, job: Job) -> asyncio.Task:
        """Schedule a job without awaiting it.

        Args:
            name: Job name used in logs
            job: Coroutine function receiving a scoped container

        Returns:
            The scheduled task
        """
        task = asyncio.create_task(self._run(name, job), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, name: str, job: Job) -> None:
        with logfire.span("background.job", job=name):
            try:
                async with self.container() as scoped:
                    await job(scoped)
            except Exception as e:
                logfire.error("Background job failed", job=name, error=str(e))

    @property
    def pending(self) -> int:
        """Number of jobs still running."""
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every scheduled job to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


class JobOutbox:
    """Jobs held back until the request's writes are committed.

    Request-scoped. The scope finalizer releases the jobs to the dispatcher
    once the transaction commits and discards them when it rolls back, so a
    job never observes rows that were not persisted.
    """

    def __init__(self, dispatcher: BackgroundDispatcher) -> None:
        """Initialize outbox.

        Args:
            dispatcher: Dispatcher receiving the jobs on release
        """
        self.dispatcher = dispatcher
        self._jobs: list[tuple[str, Job]] = []

    def add(self, name: str, job: Job) -> None:
        """Queue a job to run after commit."""
        self._jobs.append((name, job))

    @property
    def pending(self) -> int:
        """Number of jobs waiting for the commit."""
        return len(self._jobs)

    def release(self) -> int:
        """Dispatch every queued job.

        Returns:
            Number of jobs dispatched
        """
        jobs, self._jobs = self._jobs, []
        for name, job in jobs:
            self.dispatcher.dispatch(name, job)
        return len(jobs)

    def discard(self) -> int:
        """Drop every queued job without running it.

        Returns:
            Number of jobs dropped
        """
        jobs, self._jobs = self._jobs, []
        if jobs:
            logfire.warn(
                "Discarding background jobs after rollback",
                jobs=[name for name, _ in jobs],
            )
        return len(jobs)
