"""Render invalidation events for Panic Ribbon."""

from __future__ import annotations

from panic_ribbon.events.channel import Invalidation, RenderChannel

__all__ = [
    "Invalidation",
    "RenderChannel",
]
