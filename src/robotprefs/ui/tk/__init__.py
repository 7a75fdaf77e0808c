"""Tk based view for :mod:`robotprefs`.

:class:`App` binds a :class:`~robotprefs.ui.core.RobotPreferencesWidget`
to a small tkinter window: a searchable property sheet plus "Add" and
"Remove" buttons.  All state lives in the widget core; this module only
turns core events into Tk widgets and Tk events into core calls.
"""

from __future__ import annotations

import logging
import os

try:  # pragma: no cover - tkinter availability depends on the env
    import tkinter as tk
    from tkinter import ttk
except Exception:  # pragma: no cover - fallback when tkinter missing
    tk = None  # type: ignore
    ttk = None  # type: ignore

from ...config import WidgetConfig
from ...sources import DataSource
from ..core import RobotPreferencesWidget
from ..theme import apply_theme
from .dialogs import NewPreferenceEntryDialog, RemovePreferenceEntryDialog, show_alert
from .dispatch import TkDispatcher
from .property_sheet import PropertySheet

logger = logging.getLogger("robotprefs.gui")
if os.environ.get("ROBOTPREFS_GUI_DEBUG") and not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
    root_logger = logging.getLogger("robotprefs")
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)


class App:
    """Window hosting the robot preferences widget."""

    def __init__(
        self,
        master: tk.Misc | None = None,
        *,
        widget: RobotPreferencesWidget | None = None,
        config: WidgetConfig | None = None,
    ) -> None:
        if tk is None:  # pragma: no cover - environment without tkinter
            raise RuntimeError("tkinter is required for App")

        owns_root = master is None
        self.root = master if master is not None else tk.Tk()
        self.config = config or (widget.config if widget is not None else WidgetConfig())
        self.widget = widget or RobotPreferencesWidget(config=self.config)
        self.dispatcher = TkDispatcher(self.root, interval_ms=self.config.poll_ms)

        if owns_root:
            self.root.geometry("520x480")
            self.root.minsize(360, 240)
        apply_theme(self.root)
        self.root.title("Robot Preferences")

        self._build()
        self.widget.events.on_alert.append(self.show_alert)
        self._unlisten_search = self.widget.search_box_visible.add_listener(
            lambda _p, visible: self.sheet.set_search_visible(visible)
        )
        self.sheet.set_search_visible(self.widget.search_box_visible.value)
        self.dispatcher.start()

    def _build(self) -> None:
        frame = ttk.Frame(self.root, padding=12)
        frame.pack(fill="both", expand=True)

        self.sheet = PropertySheet(frame, self.widget.view, on_alert=self.show_alert)
        self.sheet.pack(fill="both", expand=True)

        buttons = ttk.Frame(frame)
        buttons.pack(fill="x", pady=(8, 0))
        self.add_button = ttk.Button(buttons, text="Add", command=self.open_add_dialog)
        self.add_button.pack(side="left")
        self.remove_button = ttk.Button(
            buttons, text="Remove", command=self.open_remove_dialog
        )
        self.remove_button.pack(side="left", padx=(6, 0))

    # ------------------------------------------------------------------
    # Source binding
    # ------------------------------------------------------------------
    def bind_source(self, source: DataSource) -> None:
        """Bind *source*, routing its change notifications through Tk."""

        if hasattr(source, "dispatch"):
            source.dispatch = self.dispatcher  # type: ignore[attr-defined]
        self.widget.bind_source(source)
        self.root.title(f"Robot Preferences - {source.name}")

    # ------------------------------------------------------------------
    # Dialogs
    # ------------------------------------------------------------------
    def open_add_dialog(self) -> None:  # pragma: no cover - GUI interactions
        entries = self.widget.entries
        dialog = NewPreferenceEntryDialog(self.root, entries.new_entry_form(), self.widget.channel)
        entry = dialog.show()
        if entry is not None:
            entries.add_entry(entry)

    def open_remove_dialog(self) -> None:  # pragma: no cover - GUI interactions
        entries = self.widget.entries
        dialog = RemovePreferenceEntryDialog(self.root, entries.remove_entry_form())
        key = dialog.show()
        if key is not None:
            entries.remove_entry(key)

    def show_alert(self, title: str, message: str) -> None:
        show_alert(self.root, title, message)

    def close(self) -> None:
        self.dispatcher.stop()
        self._unlisten_search()
        self.widget.close()


def launch(config: WidgetConfig, source: DataSource) -> None:
    """Convenience helper to launch the tkinter UI bound to *source*."""

    app = App(config=config)
    app.bind_source(source)
    try:
        app.root.mainloop()
    finally:
        app.close()


__all__ = ["App", "launch"]
