"""Tests for health checks and the HealthChecker store update."""

from __future__ import annotations

import asyncio
import logging
import time
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from panic_ribbon.config.models import ServiceSpec
from panic_ribbon.monitor.context import MonitorContext
from panic_ribbon.monitor.health import HealthChecker, check_all_services, check_health
from panic_ribbon.registry.models import HealthResult, ServiceStatus


def _mock_client(mock_cls, *, response=None, error=None):
    mock_client = AsyncMock()
    if error is not None:
        mock_client.get.side_effect = error
    else:
        mock_client.get.return_value = response
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_cls.return_value = mock_client
    return mock_client


SPEC = ServiceSpec(name="API", health_check_url="http://localhost:8080/health", restart_command="true")

# ─── check_health tests ───


class TestCheckHealth:
    @pytest.mark.asyncio
    async def test_healthy_service(self):
        with patch("panic_ribbon.monitor.health.httpx.AsyncClient") as mock_cls:
            client = _mock_client(mock_cls, response=httpx.Response(200, json={"status": "ok"}))
            result = await check_health(SPEC)
        assert result.healthy
        assert result.status_code == 200
        assert result.latency_ms >= 0
        client.get.assert_awaited_once_with("http://localhost:8080/health")

    @pytest.mark.asyncio
    async def test_uses_five_second_timeout(self):
        with patch("panic_ribbon.monitor.health.httpx.AsyncClient") as mock_cls:
            _mock_client(mock_cls, response=httpx.Response(200))
            await check_health(SPEC)
        mock_cls.assert_called_once_with(timeout=5.0)

    @pytest.mark.asyncio
    async def test_non_200_is_unhealthy(self):
        with patch("panic_ribbon.monitor.health.httpx.AsyncClient") as mock_cls:
            _mock_client(mock_cls, response=httpx.Response(204))
            result = await check_health(SPEC)
        assert not result.healthy
        assert result.status_code == 204
        assert result.latency_ms == -1

    @pytest.mark.asyncio
    async def test_server_error(self):
        with patch("panic_ribbon.monitor.health.httpx.AsyncClient") as mock_cls:
            _mock_client(mock_cls, response=httpx.Response(500))
            result = await check_health(SPEC)
        assert not result.healthy
        assert result.status_code == 500
        assert result.latency_ms == -1

    @pytest.mark.asyncio
    async def test_connection_error(self):
        with patch("panic_ribbon.monitor.health.httpx.AsyncClient") as mock_cls:
            _mock_client(mock_cls, error=httpx.ConnectError("Connection refused"))
            result = await check_health(SPEC)
        assert not result.healthy
        assert result.latency_ms == -1
        assert "Connection refused" in result.error

    @pytest.mark.asyncio
    async def test_timeout(self):
        with patch("panic_ribbon.monitor.health.httpx.AsyncClient") as mock_cls:
            _mock_client(mock_cls, error=httpx.ReadTimeout("Timeout"))
            result = await check_health(SPEC)
        assert not result.healthy
        assert result.latency_ms == -1
        assert result.error == "Timeout"

    @pytest.mark.asyncio
    async def test_slow_response_bounded_by_overall_timeout(self):
        async def _drip(url):
            await asyncio.sleep(5)
            return httpx.Response(200)

        with patch("panic_ribbon.monitor.health.httpx.AsyncClient") as mock_cls:
            client = _mock_client(mock_cls)
            client.get.side_effect = _drip
            started = time.monotonic()
            result = await check_health(SPEC, timeout=0.05)
        assert time.monotonic() - started < 2
        assert not result.healthy
        assert result.latency_ms == -1
        assert result.error == "Timeout"

    @pytest.mark.asyncio
    async def test_invalid_url(self):
        with patch("panic_ribbon.monitor.health.httpx.AsyncClient") as mock_cls:
            _mock_client(mock_cls, error=httpx.UnsupportedProtocol("Request URL is missing a scheme"))
            result = await check_health(SPEC)
        assert not result.healthy
        assert result.latency_ms == -1
        assert "scheme" in result.error

    @pytest.mark.asyncio
    async def test_unexpected_error(self):
        with patch("panic_ribbon.monitor.health.httpx.AsyncClient") as mock_cls:
            _mock_client(mock_cls, error=RuntimeError())
            result = await check_health(SPEC)
        assert not result.healthy
        assert result.error == "RuntimeError"

    @pytest.mark.asyncio
    async def test_real_transport_over_mock_server(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200))
        real_client = httpx.AsyncClient

        def _client(**kwargs):
            return real_client(transport=transport, **kwargs)

        with patch("panic_ribbon.monitor.health.httpx.AsyncClient", side_effect=_client):
            result = await check_health(SPEC)
        assert result.healthy
        assert result.latency_ms >= 0


# ─── check_all_services tests ───


class TestCheckAllServices:
    @pytest.mark.asyncio
    async def test_results_in_order(self):
        services = [
            ServiceSpec(name="A", health_check_url="http://a/health"),
            ServiceSpec(name="B", health_check_url="http://b/health"),
        ]

        async def fake_check(spec, timeout=5.0):
            return HealthResult(healthy=spec.name == "A", status_code=200 if spec.name == "A" else 503)

        with patch("panic_ribbon.monitor.health.check_health", side_effect=fake_check):
            results = await check_all_services(services)
        assert [r.healthy for r in results] == [True, False]

    @pytest.mark.asyncio
    async def test_exception_becomes_unhealthy(self):
        services = [ServiceSpec(name="A", health_check_url="http://a/health")]
        with patch("panic_ribbon.monitor.health.check_health", side_effect=RuntimeError("boom")):
            results = await check_all_services(services)
        assert not results[0].healthy
        assert results[0].error == "boom"


# ─── HealthChecker tests ───


class TestHealthChecker:
    @pytest.mark.asyncio
    async def test_success_updates_store_and_notifies(self, context: MonitorContext):
        checker = HealthChecker(context)
        ok = HealthResult(healthy=True, status_code=200, latency_ms=7)
        with patch("panic_ribbon.monitor.health.check_health", AsyncMock(return_value=ok)):
            await checker.run(1)
        assert context.store.read(1) == ServiceStatus(healthy=True, latency_ms=7)
        assert context.store.read(0) == ServiceStatus.UNHEALTHY
        assert [i.index for i in context.channel.drain()] == [1]

    @pytest.mark.asyncio
    async def test_failure_resets_to_sentinel(self, context: MonitorContext):
        context.store.update(0, True, 12)
        checker = HealthChecker(context)
        failed = HealthResult(healthy=False, error="Timeout")
        with patch("panic_ribbon.monitor.health.check_health", AsyncMock(return_value=failed)):
            await checker.run(0)
        assert context.store.read(0) == ServiceStatus(healthy=False, latency_ms=-1)

    @pytest.mark.asyncio
    async def test_passes_timeout(self, context: MonitorContext):
        checker = HealthChecker(context, timeout=2.5)
        with patch(
            "panic_ribbon.monitor.health.check_health",
            AsyncMock(return_value=HealthResult(healthy=True, status_code=200, latency_ms=1)),
        ) as mock_check:
            await checker.run(2)
        mock_check.assert_awaited_once_with(context.registry[2], timeout=2.5)

    @pytest.mark.asyncio
    async def test_logs_results(self, context: MonitorContext, caplog):
        checker = HealthChecker(context)
        results = [
            HealthResult(healthy=True, status_code=200, latency_ms=9),
            HealthResult(healthy=False, status_code=503),
            HealthResult(healthy=False, error="Timeout"),
        ]
        with caplog.at_level(logging.INFO, logger="panic_ribbon"):
            with patch("panic_ribbon.monitor.health.check_health", AsyncMock(side_effect=results)):
                await checker.run(0)
                await checker.run(1)
                await checker.run(2)
        assert "Health check: API Gateway - HEALTHY (200) - 9ms" in caplog.text
        assert "Health check: Billing - UNHEALTHY (503) - N/A" in caplog.text
        assert "Health check timeout: Search" in caplog.text

    @pytest.mark.asyncio
    async def test_refresh_with_unchanged_endpoint_is_stable(self, context: MonitorContext):
        checker = HealthChecker(context)
        first = HealthResult(healthy=True, status_code=200, latency_ms=10)
        second = HealthResult(healthy=True, status_code=200, latency_ms=14)
        with patch("panic_ribbon.monitor.health.check_health", AsyncMock(side_effect=[first, second])):
            await checker.run(0)
            before = context.store.read(0)
            await checker.run(0)
            after = context.store.read(0)
        assert before.healthy == after.healthy
        assert after.latency_ms >= 0
