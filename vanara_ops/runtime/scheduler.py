"""Cancelable periodic and one-shot tasks on the asyncio event loop.

Every cadence of the simulation is one named ScheduledTask.  Callbacks are
plain synchronous functions, so the event loop runs at most one of them
at a time; that serialisation is what lets tick functions share the
simulation state without locks.

Rules:
    - Scheduling a name that is already pending cancels the old task first.
    - Once cancelled, a task never invokes its callback again.
    - A callback that raises is logged; periodic tasks keep running.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)

TickCallback = Callable[[], object]


class ScheduledTask:
    """One named timer.  ``repeat=False`` makes it a one-shot."""

    def __init__(self, name: str, interval: float, callback: TickCallback, repeat: bool = True) -> None:
        if interval <= 0:
            raise ValueError(f"interval for task '{name}' must be positive")
        self.name = name
        self.interval = interval
        self.repeat = repeat
        self.runs: int = 0
        self._callback = callback
        self._cancelled = False
        self._task: asyncio.Task | None = None

    def start(self) -> None:
        if self._task is not None:
            raise RuntimeError(f"task '{self.name}' already started")
        self._task = asyncio.get_running_loop().create_task(self._run(), name=f"vanara:{self.name}")

    def cancel(self) -> None:
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    async def wait(self) -> None:
        """Wait for the underlying asyncio task to finish (cancelled or not)."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        while not self._cancelled:
            await asyncio.sleep(self.interval)
            if self._cancelled:
                return
            self.runs += 1
            try:
                self._callback()
            except Exception:
                logger.exception("Task '%s' callback failed", self.name)
            if not self.repeat:
                return


class Scheduler:
    """Registry of named ScheduledTasks.

    Usage:
        scheduler = Scheduler()
        scheduler.every("fleet", 5.0, lambda: simulator.tick(state))
        scheduler.after("anomaly", 10.0, fire)
        await scheduler.shutdown()
    """

    def __init__(self) -> None:
        self._tasks: dict[str, ScheduledTask] = {}

    def every(self, name: str, interval: float, callback: TickCallback) -> ScheduledTask:
        return self._schedule(ScheduledTask(name, interval, callback, repeat=True))

    def after(self, name: str, delay: float, callback: TickCallback) -> ScheduledTask:
        return self._schedule(ScheduledTask(name, delay, callback, repeat=False))

    def cancel(self, name: str) -> bool:
        """Cancel the task called *name*.  Returns False if none was pending."""
        task = self._tasks.pop(name, None)
        if task is None:
            return False
        task.cancel()
        logger.debug("Cancelled task '%s'", name)
        return True

    def cancel_all(self) -> None:
        for name in list(self._tasks):
            self.cancel(name)

    async def shutdown(self) -> None:
        """Cancel every task and wait until none of them can still run."""
        tasks = list(self._tasks.values())
        self.cancel_all()
        for task in tasks:
            await task.wait()

    def get(self, name: str) -> ScheduledTask | None:
        return self._tasks.get(name)

    def is_scheduled(self, name: str) -> bool:
        task = self._tasks.get(name)
        return task is not None and not task.done and not task.cancelled

    @property
    def names(self) -> list[str]:
        return [n for n in self._tasks if self.is_scheduled(n)]

    def _schedule(self, task: ScheduledTask) -> ScheduledTask:
        self.cancel(task.name)
        self._tasks[task.name] = task
        task.start()
        logger.debug("Scheduled task '%s' every %.2fs (repeat=%s)", task.name, task.interval, task.repeat)
        return task
