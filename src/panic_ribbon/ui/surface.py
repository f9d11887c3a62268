"""Display surface protocol used by the interaction and render paths."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from panic_ribbon.ui.renderer import DrawInstruction


@dataclass(frozen=True)
class MenuItem:
    """One entry of the ribbon's context menu."""

    label: str
    action: Callable[[], None]


class RibbonSurface(Protocol):
    """Single-owner display surface. Only call from the display thread."""

    def draw(self, instructions: Sequence[DrawInstruction]) -> None: ...
    def show_tooltip(self, x: int, y: int, text: str) -> None: ...
    def hide_tooltip(self) -> None: ...
    def show_menu(self, x: int, y: int, items: Sequence[MenuItem]) -> None: ...
    def close(self) -> None: ...
