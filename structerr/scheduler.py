"""Deferred task scheduling.

Construction defers part of its event emission to "the next turn": after the
constructor has returned and the caller holds the instance. This module
provides that primitive.

- Scheduler: Protocol for deferred task queues (injectable for tests)
- EventLoopScheduler: Uses the running asyncio loop, buffers otherwise
- ManualScheduler: Buffers until ``run_pending()`` is called

Tasks run in FIFO order. Scheduled tasks cannot be cancelled.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Callable
from typing import Protocol, runtime_checkable

import structlog

from structerr.core.config import SchedulerKind

logger = structlog.get_logger(__name__)

__all__ = [
    "Task",
    "DEFAULT_MAX_BUFFERED",
    "Scheduler",
    "EventLoopScheduler",
    "ManualScheduler",
    "make_scheduler",
    "get_scheduler",
    "set_scheduler",
    "run_deferred",
]

type Task = Callable[[], object]

DEFAULT_MAX_BUFFERED = 10_000


@runtime_checkable
class Scheduler(Protocol):
    """Protocol for deferred task queues."""

    def schedule(self, task: Task) -> None:
        """Queue ``task`` to run after the current synchronous code."""
        ...

    def run_pending(self) -> int:
        """Run every buffered task, including tasks queued while draining.

        Returns:
            Number of tasks run.
        """
        ...


class ManualScheduler:
    """Scheduler that only runs tasks when asked.

    Use this in tests, or in synchronous programs that drain deferred
    work at well-defined points.
    """

    def __init__(self) -> None:
        self._pending: deque[Task] = deque()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def schedule(self, task: Task) -> None:
        self._pending.append(task)

    def run_pending(self) -> int:
        count = 0
        while self._pending:
            task = self._pending.popleft()
            task()
            count += 1
        return count


class EventLoopScheduler(ManualScheduler):
    """Scheduler backed by the running asyncio event loop.

    Inside a running loop, tasks go to ``loop.call_soon`` and run on the
    loop's next iteration. Without a running loop they are buffered and run
    by ``run_pending()``; buffered tasks are flushed ahead of any new task
    scheduled once a loop is running, so FIFO order holds across both paths.

    A synchronous program may never drain the buffer, so it holds at most
    ``max_buffered`` tasks; past that the oldest are dropped and a warning is
    logged once per overflow.
    """

    def __init__(self, max_buffered: int = DEFAULT_MAX_BUFFERED) -> None:
        if max_buffered < 1:
            raise ValueError(f"max_buffered must be positive, got {max_buffered}")
        super().__init__()
        self.max_buffered = max_buffered
        self._dropped = 0

    def schedule(self, task: Task) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._buffer(task)
            return
        if self.pending:
            loop.call_soon(self.run_pending)
        loop.call_soon(task)

    def run_pending(self) -> int:
        self._dropped = 0
        return super().run_pending()

    def _buffer(self, task: Task) -> None:
        if self.pending >= self.max_buffered:
            self._pending.popleft()
            self._dropped += 1
            if self._dropped == 1:
                logger.warning("deferred_tasks_dropped", max_buffered=self.max_buffered)
        super().schedule(task)


def make_scheduler(kind: SchedulerKind) -> Scheduler:
    """Create the scheduler named by a settings value."""
    if kind == "manual":
        return ManualScheduler()
    return EventLoopScheduler()


_active: Scheduler = EventLoopScheduler()


def get_scheduler() -> Scheduler:
    """Return the scheduler used for newly constructed instances."""
    return _active


def set_scheduler(scheduler: Scheduler) -> Scheduler:
    """Install ``scheduler``, returning the previous one.

    Tasks still buffered in the previous scheduler stay there; drain it
    first if they matter.
    """
    global _active
    previous = _active
    _active = scheduler
    return previous


def run_deferred() -> int:
    """Drain the active scheduler's buffered tasks."""
    return get_scheduler().run_pending()
