"""Latest health status per service.

Each cell holds one frozen ``ServiceStatus`` and swaps it under its own lock,
so readers always see a complete (healthy, latency) pair. There is no lock
across cells.

Overlapping checks for the same service are allowed to race. Whichever
update physically completes last is the value that stays visible; this is
accepted behaviour, not a bug.
"""

from __future__ import annotations

import threading

from panic_ribbon.config.models import ServiceSpec
from panic_ribbon.registry.models import ServiceStatus
from panic_ribbon.registry.registry import ServiceRegistry


class StatusCell:
    """A single service's status, replaced atomically."""

    def __init__(self, spec: ServiceSpec) -> None:
        self.spec = spec
        self._value = ServiceStatus.UNHEALTHY
        self._lock = threading.Lock()

    def get(self) -> ServiceStatus:
        with self._lock:
            return self._value

    def set(self, value: ServiceStatus) -> None:
        with self._lock:
            self._value = value


class StatusStore:
    """Index-aligned status cells for every service in a registry."""

    def __init__(self, registry: ServiceRegistry) -> None:
        self._cells: tuple[StatusCell, ...] = tuple(StatusCell(spec) for spec in registry)

    def __len__(self) -> int:
        return len(self._cells)

    def update(self, index: int, healthy: bool, latency_ms: int) -> ServiceStatus:
        status = ServiceStatus(healthy=healthy, latency_ms=latency_ms)
        self._cells[index].set(status)
        return status

    def read(self, index: int) -> ServiceStatus:
        return self._cells[index].get()

    def spec(self, index: int) -> ServiceSpec:
        return self._cells[index].spec

    def snapshot(self) -> list[ServiceStatus]:
        """Read every cell once. Cells are not read under a common lock."""
        return [cell.get() for cell in self._cells]
