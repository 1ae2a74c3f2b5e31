"""Recurring-task schedulers and clocks.

Periodic work (log ingestion, metrics sampling) is registered as named
recurring tasks on a scheduler. AsyncioScheduler runs them on the event
loop; VirtualScheduler fires them when a VirtualClock is advanced, so
tests can step through ticks without waiting on real timers.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from streamdash.core.exceptions import SchedulerError
from streamdash.core.models import utcnow

logger = logging.getLogger(__name__)


class SystemClock:
    """Real clock: time.monotonic() and the current UTC instant."""

    def now(self) -> float:
        return time.monotonic()

    def utcnow(self) -> datetime:
        return utcnow()


class VirtualClock:
    """Manually advanced clock for deterministic tests.

    Args:
        start: Wall-clock instant at virtual time 0 (default 2024-01-01 UTC).
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._start = start or datetime(2024, 1, 1, tzinfo=UTC)
        self._elapsed = 0.0

    def now(self) -> float:
        return self._elapsed

    def utcnow(self) -> datetime:
        return self._start + timedelta(seconds=self._elapsed)

    def set(self, elapsed: float) -> None:
        """Move to an absolute virtual time; time never goes backwards."""
        if elapsed < self._elapsed:
            raise ValueError("VirtualClock cannot move backwards")
        self._elapsed = elapsed

    def advance(self, seconds: float) -> None:
        """Move forward by the given number of seconds."""
        self.set(self._elapsed + seconds)


@dataclass
class RecurringTask:
    """A named callback fired every `interval` seconds.

    Attributes:
        name: Task name, used in logs.
        interval: Seconds between firings.
        callback: Zero-argument callable run on each tick.
        runs: Number of completed firings.
    """

    name: str
    interval: float
    callback: Callable[[], object]
    runs: int = 0
    next_due: float = 0.0


class SchedulerPort(Protocol):
    """Interface shared by the schedulers."""

    def every(
        self, name: str, interval: float, callback: Callable[[], object]
    ) -> RecurringTask: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def clear(self) -> None: ...

    @property
    def running(self) -> bool: ...


class _BaseScheduler:
    def __init__(self) -> None:
        self._tasks: list[RecurringTask] = []
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def tasks(self) -> tuple[RecurringTask, ...]:
        return tuple(self._tasks)

    def every(
        self, name: str, interval: float, callback: Callable[[], object]
    ) -> RecurringTask:
        """Register a recurring task.

        The first firing happens one interval after start().

        Raises:
            ValueError: If interval is not positive.
            SchedulerError: If the scheduler is already running.
        """
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        if self._running:
            raise SchedulerError("Cannot register tasks on a running scheduler")
        task = RecurringTask(name=name, interval=interval, callback=callback)
        self._tasks.append(task)
        return task

    def clear(self) -> None:
        """Remove all registered tasks.

        Raises:
            SchedulerError: If the scheduler is running.
        """
        if self._running:
            raise SchedulerError("Cannot remove tasks from a running scheduler")
        self._tasks.clear()


class VirtualScheduler(_BaseScheduler):
    """Scheduler driven by a VirtualClock.

    Tasks fire only inside advance(). Exceptions raised by callbacks
    propagate to the caller of advance().

    Args:
        clock: Virtual clock to drive (default: a new VirtualClock).
    """

    def __init__(self, clock: VirtualClock | None = None) -> None:
        super().__init__()
        self.clock = clock or VirtualClock()

    def start(self) -> None:
        if self._running:
            return
        now = self.clock.now()
        for task in self._tasks:
            task.next_due = now + task.interval
        self._running = True

    def stop(self) -> None:
        self._running = False

    def advance(self, seconds: float) -> int:
        """Advance the clock, firing every task that falls due.

        Tasks fire in due-time order; tasks due at the same instant fire in
        registration order. A task may fire several times in one advance.

        Returns:
            Number of callbacks fired.
        """
        if seconds < 0:
            raise ValueError("Cannot advance by a negative amount")
        target = self.clock.now() + seconds
        fired = 0
        while self._running:
            due = [t for t in self._tasks if t.next_due <= target]
            if not due:
                break
            task = min(due, key=lambda t: t.next_due)
            self.clock.set(max(self.clock.now(), task.next_due))
            task.next_due += task.interval
            task.callback()
            task.runs += 1
            fired += 1
        self.clock.set(max(self.clock.now(), target))
        return fired


class AsyncioScheduler(_BaseScheduler):
    """Scheduler running each task as an asyncio task on the running loop.

    A callback that raises is logged and the task keeps running.
    """

    def __init__(self) -> None:
        super().__init__()
        self._handles: list[asyncio.Task[None]] = []

    async def _run(self, task: RecurringTask) -> None:
        while True:
            await asyncio.sleep(task.interval)
            try:
                task.callback()
            except Exception:
                logger.exception("Recurring task %s failed", task.name)
            task.runs += 1

    def start(self) -> None:
        """Start all tasks. Must be called with an event loop running."""
        if self._running:
            return
        loop = asyncio.get_running_loop()
        self._handles = [
            loop.create_task(self._run(task), name=f"streamdash:{task.name}")
            for task in self._tasks
        ]
        self._running = True

    def stop(self) -> None:
        """Cancel all running tasks."""
        for handle in self._handles:
            handle.cancel()
        self._handles = []
        self._running = False
