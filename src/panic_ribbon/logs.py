"""Logging setup: one ``[timestamp] message`` line to the log file and stdout."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

LOG_FORMAT = "[%(asctime)s] %(message)s"


class IsoFormatter(logging.Formatter):
    """Formats ``asctime`` as a local ISO-8601 timestamp."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return datetime.fromtimestamp(record.created).isoformat(timespec="milliseconds")


def configure_logging(log_file: Path | None, level: int = logging.INFO) -> logging.Logger:
    """Attach stdout and file handlers to the ``panic_ribbon`` logger.

    Safe to call again; previously installed handlers are replaced. A log file
    that cannot be opened is reported on stderr and skipped.
    """
    root = logging.getLogger("panic_ribbon")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
    root.propagate = False

    formatter = IsoFormatter(LOG_FORMAT)

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(formatter)
    root.addHandler(stream)

    if log_file is not None:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            print(f"Error writing to log file: {exc}", file=sys.stderr)
        else:
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    return root
