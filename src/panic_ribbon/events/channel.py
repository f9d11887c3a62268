"""Render invalidation channel from check tasks to the display thread."""

from __future__ import annotations

import queue
from dataclasses import dataclass


@dataclass(frozen=True)
class Invalidation:
    """A status cell changed and the ribbon should be redrawn."""

    index: int


class RenderChannel:
    """Thread-safe queue of invalidations.

    Producers (health check tasks on the asyncio thread) call ``notify``.
    The display owner polls ``drain`` on its own thread and redraws
    everything once if anything was pending.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Invalidation] = queue.SimpleQueue()

    def notify(self, index: int) -> None:
        self._queue.put(Invalidation(index))

    def drain(self) -> list[Invalidation]:
        pending: list[Invalidation] = []
        while True:
            try:
                pending.append(self._queue.get_nowait())
            except queue.Empty:
                return pending
