"""Async health check utilities."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence

import httpx

from panic_ribbon.config.models import ServiceSpec
from panic_ribbon.monitor.context import MonitorContext
from panic_ribbon.registry.models import NO_LATENCY, HealthResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


async def check_health(spec: ServiceSpec, timeout: float = DEFAULT_TIMEOUT) -> HealthResult:
    """Check health of a single service with one GET to its health URL.

    Only a 200 response counts as healthy. Latency is reported for healthy
    results only; every failure carries the ``-1`` sentinel.
    """
    start = time.monotonic()
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            # httpx times each phase separately; wait_for bounds the whole exchange
            resp = await asyncio.wait_for(client.get(spec.health_check_url), timeout)
            latency = _elapsed_ms(start)
            if resp.status_code == 200:
                return HealthResult(healthy=True, status_code=200, latency_ms=latency)
            return HealthResult(
                healthy=False,
                status_code=resp.status_code,
                latency_ms=NO_LATENCY,
                error=f"HTTP {resp.status_code}",
            )
    except (httpx.TimeoutException, asyncio.TimeoutError):
        return HealthResult(healthy=False, error="Timeout")
    except httpx.ConnectError as exc:
        return HealthResult(healthy=False, error=f"Connection refused: {exc}")
    except Exception as exc:
        return HealthResult(healthy=False, error=str(exc) or type(exc).__name__)


async def check_all_services(
    services: Sequence[ServiceSpec],
    timeout: float = DEFAULT_TIMEOUT,
) -> list[HealthResult]:
    """Run health checks for all services concurrently, in registry order."""
    results = await asyncio.gather(
        *(check_health(spec, timeout=timeout) for spec in services),
        return_exceptions=True,
    )
    out: list[HealthResult] = []
    for result in results:
        if isinstance(result, BaseException):
            out.append(HealthResult(healthy=False, error=str(result)))
        else:
            out.append(result)
    return out


class HealthChecker:
    """Probes one service and publishes the observation to the store."""

    def __init__(self, context: MonitorContext, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._context = context
        self._timeout = timeout

    async def run(self, index: int) -> HealthResult:
        spec = self._context.registry[index]
        result = await check_health(spec, timeout=self._timeout)
        status = result.to_status()
        self._context.store.update(index, status.healthy, status.latency_ms)
        _log_result(spec, result)
        self._context.channel.notify(index)
        return result


def _log_result(spec: ServiceSpec, result: HealthResult) -> None:
    if result.status_code is not None:
        logger.info(
            "Health check: %s - %s (%d) - %s",
            spec.name,
            "HEALTHY" if result.healthy else "UNHEALTHY",
            result.status_code,
            f"{result.latency_ms}ms" if result.healthy else "N/A",
        )
    elif result.error == "Timeout":
        logger.warning("Health check timeout: %s", spec.name)
    else:
        logger.warning("Health check error: %s - %s", spec.name, result.error)
