"""Mapping between ribbon pixel rows and service indices."""

from __future__ import annotations

from typing import Optional


class SegmentGeometry:
    """Splits a vertical extent into equal segments, one per service.

    ``segment_height`` is floor division; the remainder rows at the bottom
    belong to no service.
    """

    def __init__(self, total_height: int, service_count: int) -> None:
        if service_count < 1:
            raise ValueError("service_count must be at least 1")
        self.total_height = total_height
        self.service_count = service_count
        self.segment_height = total_height // service_count

    @property
    def used_height(self) -> int:
        return self.service_count * self.segment_height

    def segment_bounds(self, index: int) -> tuple[int, int]:
        """Half-open ``[top, bottom)`` rows of segment *index*."""
        return index * self.segment_height, (index + 1) * self.segment_height

    def index_for_coordinate(self, y: int) -> int:
        """Raw ``floor(y / segment_height)``; not range-checked."""
        return y // self.segment_height

    def select(self, y: int) -> Optional[int]:
        """Index under row *y*, or None outside the used extent."""
        if self.segment_height <= 0 or y < 0 or y >= self.used_height:
            return None
        return self.index_for_coordinate(y)
