"""Shared fixtures for Panic Ribbon tests."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from panic_ribbon.config.models import RibbonConfig, ServiceSpec
from panic_ribbon.monitor.context import MonitorContext
from panic_ribbon.ui.renderer import DrawInstruction
from panic_ribbon.ui.surface import MenuItem


SAMPLE_CONFIG: Dict[str, Any] = {
    "poll_interval": 10,
    "check_timeout": 5,
    "services": [
        {
            "name": "API Gateway",
            "healthCheckUrl": "http://localhost:8080/health",
            "restartScriptPath": "systemctl restart gateway",
        },
        {
            "name": "Billing",
            "healthCheckUrl": "http://localhost:8081/health",
            "restartScriptPath": "./scripts/restart-billing.sh",
        },
        {
            "name": "Search",
            "health_check_url": "http://localhost:9200/_cluster/health",
            "restart_command": "docker restart search",
        },
    ],
}


class RecordingSurface:
    """In-memory RibbonSurface that records every call."""

    def __init__(self) -> None:
        self.drawn: list[list[DrawInstruction]] = []
        self.tooltip: tuple[int, int, str] | None = None
        self.menus: list[tuple[int, int, list[MenuItem]]] = []
        self.closed = False

    def draw(self, instructions: Sequence[DrawInstruction]) -> None:
        self.drawn.append(list(instructions))

    def show_tooltip(self, x: int, y: int, text: str) -> None:
        self.tooltip = (x, y, text)

    def hide_tooltip(self) -> None:
        self.tooltip = None

    def show_menu(self, x: int, y: int, items: Sequence[MenuItem]) -> None:
        self.menus.append((x, y, list(items)))

    def close(self) -> None:
        self.tooltip = None
        self.closed = True


class RecordingActions:
    """RibbonActions stand-in that records requested commands."""

    def __init__(self) -> None:
        self.restarted: list[ServiceSpec] = []
        self.refreshed: list[int] = []
        self.logs_viewed = 0
        self.exited = 0

    def restart(self, spec: ServiceSpec) -> None:
        self.restarted.append(spec)

    def refresh(self, index: int) -> None:
        self.refreshed.append(index)

    def view_logs(self) -> None:
        self.logs_viewed += 1

    def exit(self) -> None:
        self.exited += 1


@pytest.fixture()
def sample_config() -> RibbonConfig:
    """Return a parsed RibbonConfig from sample data."""
    return RibbonConfig(**SAMPLE_CONFIG)


@pytest.fixture()
def sample_config_dict() -> Dict[str, Any]:
    """Return raw sample config dict."""
    return dict(SAMPLE_CONFIG)


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    """Write sample config to a temp services.yaml and return the path."""
    path = tmp_path / "services.yaml"
    with path.open("w") as fh:
        yaml.dump(SAMPLE_CONFIG, fh)
    return path


@pytest.fixture()
def context(sample_config: RibbonConfig) -> MonitorContext:
    return MonitorContext.from_config(sample_config)


@pytest.fixture()
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture()
def actions() -> RecordingActions:
    return RecordingActions()


@pytest.fixture()
def restore_logger():
    """Drop handlers installed by configure_logging and re-enable propagation."""
    yield
    root = logging.getLogger("panic_ribbon")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = True
    root.setLevel(logging.NOTSET)
