"""Pointer events to tooltips, restarts and menu commands."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from panic_ribbon.config.models import ServiceSpec
from panic_ribbon.monitor.context import MonitorContext
from panic_ribbon.ui.geometry import SegmentGeometry
from panic_ribbon.ui.surface import MenuItem, RibbonSurface

logger = logging.getLogger(__name__)


class RibbonActions(Protocol):
    """Commands the interaction layer can trigger. Must not block."""

    def restart(self, spec: ServiceSpec) -> None: ...
    def refresh(self, index: int) -> None: ...
    def view_logs(self) -> None: ...
    def exit(self) -> None: ...


def tooltip_text(spec: ServiceSpec, latency_label: str) -> str:
    return f"{spec.name}\nLatency: {latency_label}"


class InteractionHandler:
    """Runs on the display thread. Every click acts; repeats are not merged."""

    def __init__(
        self,
        context: MonitorContext,
        geometry: SegmentGeometry,
        surface: RibbonSurface,
        actions: RibbonActions,
    ) -> None:
        self._context = context
        self.geometry = geometry
        self._surface = surface
        self._actions = actions
        self.hovered: Optional[int] = None

    def on_hover(self, y: int, screen_x: int, screen_y: int) -> None:
        index = self.geometry.select(y)
        if index is None:
            self.on_leave()
            return
        self.hovered = index
        status = self._context.store.read(index)
        spec = self._context.store.spec(index)
        self._surface.show_tooltip(screen_x, screen_y, tooltip_text(spec, status.latency_label))

    def on_leave(self) -> None:
        self.hovered = None
        self._surface.hide_tooltip()

    def on_primary_click(self, y: int) -> None:
        index = self.geometry.select(y)
        if index is None:
            return
        if self._context.store.read(index).healthy:
            return
        self._actions.restart(self._context.store.spec(index))

    def on_secondary_click(self, y: int, screen_x: int, screen_y: int) -> None:
        index = self.geometry.select(y)
        if index is None:
            return
        self._surface.show_menu(screen_x, screen_y, self.menu_items(index))

    def menu_items(self, index: int) -> list[MenuItem]:
        spec = self._context.store.spec(index)

        def _refresh() -> None:
            logger.info("Manual refresh requested for: %s", spec.name)
            self._actions.refresh(index)

        def _view_logs() -> None:
            logger.info("View logs requested for: %s", spec.name)
            self._actions.view_logs()

        return [
            MenuItem("Refresh Now", _refresh),
            MenuItem("View Logs", _view_logs),
            MenuItem("Exit", self._actions.exit),
        ]
