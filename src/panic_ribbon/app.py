"""Ribbon application: wires the monitor, the async runtime and the overlay."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from panic_ribbon.config.models import RibbonConfig, ServiceSpec
from panic_ribbon.errors import DisplayUnavailableError
from panic_ribbon.monitor.context import MonitorContext
from panic_ribbon.monitor.health import HealthChecker
from panic_ribbon.monitor.runtime import AsyncRuntime
from panic_ribbon.monitor.scheduler import Scheduler
from panic_ribbon.remediation.restart import RestartExecutor
from panic_ribbon.ui.geometry import SegmentGeometry
from panic_ribbon.ui.interaction import InteractionHandler
from panic_ribbon.ui.renderer import render
from panic_ribbon.ui.surface import RibbonSurface

logger = logging.getLogger(__name__)

POLL_MS = 100


class RibbonApp:
    """Owns the monitor context and implements the RibbonActions protocol.

    Health checks and restarts run on the AsyncRuntime thread. Everything
    that touches the surface runs on the display thread, which learns about
    status changes only by draining the render channel.
    """

    def __init__(
        self,
        config: RibbonConfig,
        runtime: Optional[AsyncRuntime] = None,
        restarter: Optional[RestartExecutor] = None,
        log_file: Optional[Path] = None,
    ) -> None:
        self.config = config
        self.context = MonitorContext.from_config(config)
        self.runtime = runtime or AsyncRuntime()
        self.checker = HealthChecker(self.context, timeout=config.check_timeout)
        self.scheduler = Scheduler(self.checker.run, self.context.service_count, config.poll_interval)
        self.restarter = restarter or RestartExecutor()
        self.log_file = log_file or Path(config.log_file)

        self.surface: Optional[RibbonSurface] = None
        self.geometry: Optional[SegmentGeometry] = None
        self.handler: Optional[InteractionHandler] = None
        self._closed = False

    # ─── RibbonActions ───

    def restart(self, spec: ServiceSpec) -> None:
        self.runtime.submit(self.restarter.launch(spec))

    def refresh(self, index: int) -> None:
        self.runtime.call(self.scheduler.dispatch, index)

    def view_logs(self) -> None:
        try:
            rc = typer.launch(str(self.log_file.resolve()))
        except OSError as exc:
            logger.error("Could not open log file %s: %s", self.log_file, exc)
            return
        if rc != 0:
            logger.warning("Log viewer exited with code %s for %s", rc, self.log_file)

    def exit(self) -> None:
        self.shutdown()

    # ─── Display side ───

    def attach(self, surface: RibbonSurface, height: int) -> InteractionHandler:
        self.surface = surface
        self.geometry = SegmentGeometry(height, self.context.service_count)
        self.handler = InteractionHandler(self.context, self.geometry, surface, self)
        return self.handler

    def redraw(self) -> None:
        if self.surface is None or self.geometry is None:
            return
        self.surface.draw(render(self.context.store.snapshot(), self.geometry, self.config.ribbon_width))

    def pump(self) -> bool:
        """Redraw once if any invalidation is pending. Returns whether it drew."""
        if not self.context.channel.drain():
            return False
        self.redraw()
        return True

    # ─── Lifecycle ───

    def start_monitoring(self) -> None:
        self.runtime.start()
        self.runtime.call(self.scheduler.start)

    def run(self) -> None:
        """Create the overlay and block in its main loop until exit."""
        try:
            from panic_ribbon.ui.overlay import RibbonOverlay
        except ImportError as exc:
            raise DisplayUnavailableError(f"tkinter is not available: {exc}") from exc

        overlay = RibbonOverlay(self.config.ribbon_width, self.config.opacity, on_close=self.shutdown)
        handler = self.attach(overlay, overlay.height)
        overlay.bind(handler)
        self.redraw()
        self.start_monitoring()

        def _poll() -> None:
            if self._closed:
                return
            self.pump()
            overlay.schedule(POLL_MS, _poll)

        overlay.schedule(POLL_MS, _poll)
        overlay.run()

    def shutdown(self) -> None:
        if self._closed:
            return
        self._closed = True
        logger.info("Shutting down application")
        if self.runtime.running:
            self.runtime.call(self.scheduler.stop)
        if self.surface is not None:
            self.surface.close()
        self.runtime.stop()
