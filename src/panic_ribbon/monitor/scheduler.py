"""Fixed-rate scheduler fanning out one health check per service per tick."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 10.0

CheckFn = Callable[[int], Awaitable[Any]]


class Scheduler:
    """Dispatches checks without ever waiting for them.

    Ticks do not wait for the previous tick's checks, so two checks for the
    same service may be in flight at once. ``stop`` only cancels future ticks;
    in-flight checks run to completion.
    """

    def __init__(self, check: CheckFn, service_count: int, interval: float = DEFAULT_INTERVAL) -> None:
        self._check = check
        self._service_count = service_count
        self._interval = interval
        self._timer: asyncio.Task[None] | None = None
        self._pending: set[asyncio.Task[Any]] = set()

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def in_flight(self) -> int:
        return len(self._pending)

    def start(self) -> None:
        """Start ticking. Must be called on the event loop thread."""
        if self.running:
            return
        self._timer = asyncio.create_task(self._run(), name="scheduler-timer")

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def tick(self) -> list[asyncio.Task[Any]]:
        return [self.dispatch(index) for index in range(self._service_count)]

    def dispatch(self, index: int) -> asyncio.Task[Any]:
        """Start one check for *index*. Also used for manual refreshes."""
        task = asyncio.create_task(self._check(index), name=f"health-check-{index}")
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Health check task %s failed: %r", task.get_name(), exc)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_fire = loop.time()
        while True:
            self.tick()
            next_fire = max(next_fire + self._interval, loop.time())
            await asyncio.sleep(max(0.0, next_fire - loop.time()))
