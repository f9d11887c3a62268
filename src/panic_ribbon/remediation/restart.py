"""Fire-and-forget restart command execution."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from panic_ribbon.config.models import ServiceSpec

logger = logging.getLogger(__name__)


class RestartExecutor:
    """Launches a service's restart command through the platform shell.

    ``launch`` returns once the process is spawned. The exit code is awaited
    by a separate task only so it can be logged.
    """

    def __init__(self, cwd: Path | None = None) -> None:
        self._cwd = cwd
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def launch(self, spec: ServiceSpec) -> asyncio.Task[None] | None:
        logger.info("Executing restart script for: %s (%s)", spec.name, spec.restart_command)
        try:
            process = await asyncio.create_subprocess_shell(
                spec.restart_command,
                cwd=str(self._cwd or Path.cwd()),
                stdin=asyncio.subprocess.DEVNULL,
            )
        except OSError as exc:
            logger.error("Error executing restart script for %s: %s", spec.name, exc)
            return None

        task = asyncio.create_task(
            self._watch(spec, process),
            name=f"restart-{spec.name}",
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _watch(self, spec: ServiceSpec, process: asyncio.subprocess.Process) -> None:
        """Await the exit code for logging. All exceptions caught and logged."""
        try:
            exit_code = await process.wait()
            logger.info("Restart script completed for %s with exit code: %s", spec.name, exit_code)
        except asyncio.CancelledError:
            logger.info("Restart script interrupted for: %s", spec.name)
            raise
        except Exception:
            logger.exception("Error waiting for restart script of %s", spec.name)
