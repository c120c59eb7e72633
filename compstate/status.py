"""Status displays for the Robot/Object center readouts.

Both expose `add_label(initial_text) -> handle` with `handle.set_text(text)`.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk


class _TkLabelHandle:
    def __init__(self, widget: ttk.Label) -> None:
        self.widget = widget

    def set_text(self, text: str) -> None:
        self.widget.configure(text=text)

    def text(self) -> str:
        return str(self.widget.cget("text"))


class TkStatusBox(ttk.LabelFrame):
    """Stack of monospace labels inside a Tk frame."""

    def __init__(self, parent: tk.Misc, title: str = "Tracking") -> None:
        super().__init__(parent, text=title, padding=6)
        self._handles: list[_TkLabelHandle] = []

    def add_label(self, initial_text: str) -> _TkLabelHandle:
        widget = ttk.Label(self, text=initial_text, font=("Space Mono", 11))
        widget.grid(row=len(self._handles), column=0, sticky="w", pady=2)
        handle = _TkLabelHandle(widget)
        self._handles.append(handle)
        return handle


class _ConsoleLabelHandle:
    def __init__(self, box: "ConsoleStatusBox", text: str) -> None:
        self._box = box
        self._text = text

    def set_text(self, text: str) -> None:
        self._text = text
        if self._box.verbose:
            print(f"[Status] {text}")

    def text(self) -> str:
        return self._text


class ConsoleStatusBox:
    """Headless stand-in that keeps the latest text and optionally echoes it."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = bool(verbose)
        self.labels: list[_ConsoleLabelHandle] = []

    def add_label(self, initial_text: str) -> _ConsoleLabelHandle:
        handle = _ConsoleLabelHandle(self, initial_text)
        self.labels.append(handle)
        return handle
