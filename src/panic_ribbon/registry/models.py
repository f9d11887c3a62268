"""Data models for service health and status."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

NO_LATENCY = -1


@dataclass
class HealthResult:
    """Result of a single health check."""

    healthy: bool
    status_code: Optional[int] = None
    latency_ms: int = NO_LATENCY
    error: Optional[str] = None

    def to_status(self) -> ServiceStatus:
        if not self.healthy:
            return ServiceStatus.UNHEALTHY
        return ServiceStatus(healthy=True, latency_ms=self.latency_ms)


@dataclass(frozen=True)
class ServiceStatus:
    """Latest observed state of a service. Replaced as a whole, never mutated."""

    UNHEALTHY: ClassVar[ServiceStatus]

    healthy: bool = False
    latency_ms: int = NO_LATENCY

    @property
    def has_latency(self) -> bool:
        return self.latency_ms != NO_LATENCY

    @property
    def latency_label(self) -> str:
        return f"{self.latency_ms}ms" if self.has_latency else "N/A"


# "Not checked yet" and "failed" share one representation.
ServiceStatus.UNHEALTHY = ServiceStatus(healthy=False, latency_ms=NO_LATENCY)
