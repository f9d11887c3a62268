"""Tkinter ribbon window, tooltip and context menu."""

from __future__ import annotations

import logging
import sys
import tkinter as tk
from collections.abc import Callable, Sequence
from typing import Optional

from panic_ribbon.errors import DisplayUnavailableError
from panic_ribbon.ui.interaction import InteractionHandler
from panic_ribbon.ui.renderer import DrawInstruction, FillRect, Line
from panic_ribbon.ui.surface import MenuItem

logger = logging.getLogger(__name__)

TOOLTIP_BG = "#ffffc8"
TOOLTIP_OFFSET = (15, -10)


class RibbonOverlay:
    """Undecorated, always-on-top strip along the right edge of the screen.

    Implements the RibbonSurface protocol. Must be created and used on the
    thread that runs ``mainloop``.
    """

    def __init__(self, width: int, opacity: float, on_close: Callable[[], None]) -> None:
        try:
            self.root = tk.Tk()
        except tk.TclError as exc:
            raise DisplayUnavailableError(f"Could not open the ribbon window: {exc}") from exc
        self.root.title("Panic Ribbon")
        self.root.overrideredirect(True)
        self.root.attributes("-topmost", True)
        self.root.resizable(False, False)

        self.width = width
        self.height = self.root.winfo_screenheight()
        screen_width = self.root.winfo_screenwidth()
        self.root.geometry(f"{width}x{self.height}+{screen_width - width}+0")

        try:
            self.root.attributes("-alpha", opacity)
        except tk.TclError as exc:
            logger.warning("Could not set opacity: %s (continuing without opacity)", exc)

        self.canvas = tk.Canvas(
            self.root,
            width=width,
            height=self.height,
            bg="black",
            highlightthickness=0,
            bd=0,
            takefocus=0,
        )
        self.canvas.pack(fill=tk.BOTH, expand=True)
        self.root.protocol("WM_DELETE_WINDOW", on_close)

        self._tooltip: Optional[tk.Toplevel] = None
        self._tooltip_label: Optional[tk.Label] = None

    def bind(self, handler: InteractionHandler) -> None:
        self.canvas.bind("<Motion>", lambda e: handler.on_hover(e.y, e.x_root, e.y_root))
        self.canvas.bind("<Leave>", lambda e: handler.on_leave())
        self.canvas.bind("<Button-1>", lambda e: handler.on_primary_click(e.y))
        # macOS reports the secondary button as Button-2
        secondary = "<Button-2>" if sys.platform == "darwin" else "<Button-3>"
        self.canvas.bind(secondary, lambda e: handler.on_secondary_click(e.y, e.x_root, e.y_root))

    def draw(self, instructions: Sequence[DrawInstruction]) -> None:
        self.canvas.delete("all")
        for item in instructions:
            if isinstance(item, FillRect):
                self.canvas.create_rectangle(0, item.top, item.width, item.bottom, fill=item.color, outline="")
            elif isinstance(item, Line):
                self.canvas.create_line(0, item.y, item.width, item.y, fill=item.color)

    def show_tooltip(self, x: int, y: int, text: str) -> None:
        if self._tooltip is None:
            top = tk.Toplevel(self.root)
            top.overrideredirect(True)
            top.attributes("-topmost", True)
            label = tk.Label(
                top,
                text=text,
                bg=TOOLTIP_BG,
                fg="black",
                justify=tk.LEFT,
                font=("TkDefaultFont", 9),
                padx=4,
                pady=2,
            )
            label.pack()
            self._tooltip = top
            self._tooltip_label = label
        elif self._tooltip_label is not None:
            self._tooltip_label.configure(text=text)
        dx, dy = TOOLTIP_OFFSET
        self._tooltip.geometry(f"+{x + dx}+{y + dy}")

    def hide_tooltip(self) -> None:
        if self._tooltip is not None:
            self._tooltip.destroy()
            self._tooltip = None
            self._tooltip_label = None

    def show_menu(self, x: int, y: int, items: Sequence[MenuItem]) -> None:
        menu = tk.Menu(self.root, tearoff=False)
        for item in items:
            menu.add_command(label=item.label, command=item.action)
        try:
            menu.tk_popup(x, y)
        finally:
            menu.grab_release()

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.root.after(delay_ms, callback)

    def run(self) -> None:
        self.root.mainloop()

    def close(self) -> None:
        self.hide_tooltip()
        self.root.destroy()
