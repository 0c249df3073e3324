# sitwatch/watchers/scheduler.py
# "Fire now, then every interval" task on an asyncio loop.

from __future__ import annotations
import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

LOG = logging.getLogger("sitwatch.scheduler")


class RepeatingTask:
    """Runs ``action`` once immediately and then every ``interval`` seconds.

    Each run is spawned as its own task, so a slow run never delays the
    timer; overlap control belongs to the action. ``cancel()`` stops future
    runs but leaves runs already in progress alone.
    """

    def __init__(
        self,
        action: Callable[[], Awaitable[None]],
        interval: float,
        *,
        name: str = "repeating-task",
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._action = action
        self._interval = interval
        self._name = name
        self._loop = loop
        self._timer: Optional[asyncio.Task] = None
        self._runs: Set[asyncio.Task] = set()
        self._cancelled = False

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def started(self) -> bool:
        return self._timer is not None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def pending_runs(self) -> int:
        return len(self._runs)

    def start(self) -> None:
        if self._timer is not None or self._cancelled:
            return
        loop = self._loop or asyncio.get_running_loop()
        self._loop = loop
        self._fire()
        self._timer = loop.create_task(self._every(), name=f"{self._name}:timer")

    def cancel(self) -> None:
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    async def _every(self) -> None:
        while not self._cancelled:
            await asyncio.sleep(self._interval)
            if self._cancelled:
                return
            self._fire()

    def _fire(self) -> None:
        task = self._loop.create_task(self._action(), name=f"{self._name}:run")
        self._runs.add(task)
        task.add_done_callback(self._on_run_done)

    def _on_run_done(self, task: asyncio.Task) -> None:
        self._runs.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            LOG.error("%s run raised", self._name, exc_info=exc)
