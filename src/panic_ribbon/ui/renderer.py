"""Turns a status snapshot into draw instructions for the ribbon surface."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from panic_ribbon.registry.models import ServiceStatus
from panic_ribbon.ui.geometry import SegmentGeometry

HEALTHY_COLOR = "#00ff00"
UNHEALTHY_COLOR = "#ff0000"
SEPARATOR_COLOR = "#000000"


@dataclass(frozen=True)
class FillRect:
    """Filled rectangle covering rows ``[top, bottom)`` and columns ``[0, width)``."""

    top: int
    bottom: int
    width: int
    color: str


@dataclass(frozen=True)
class Line:
    """One-pixel horizontal line across the ribbon at row ``y``."""

    y: int
    width: int
    color: str


DrawInstruction = Union[FillRect, Line]


def segment_color(status: ServiceStatus) -> str:
    return HEALTHY_COLOR if status.healthy else UNHEALTHY_COLOR


def render(
    statuses: Sequence[ServiceStatus],
    geometry: SegmentGeometry,
    width: int,
) -> list[DrawInstruction]:
    """Full redraw of every segment, with separators between neighbours."""
    instructions: list[DrawInstruction] = []
    last = len(statuses) - 1
    for index, status in enumerate(statuses):
        top, bottom = geometry.segment_bounds(index)
        instructions.append(FillRect(top=top, bottom=bottom, width=width, color=segment_color(status)))
        if index < last:
            instructions.append(Line(y=bottom - 1, width=width, color=SEPARATOR_COLOR))
    return instructions
