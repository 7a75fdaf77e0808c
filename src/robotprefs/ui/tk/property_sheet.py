"""Searchable, sorted property sheet of preference editors."""

from __future__ import annotations

from collections.abc import Callable

try:  # pragma: no cover - tkinter may be missing
    import tkinter as tk
    from tkinter import ttk
except Exception:  # pragma: no cover
    tk = None  # type: ignore
    ttk = None  # type: ignore

from ...errors import CodecError
from ...values import PreferenceType, PreferenceValue
from ...view import CellEditor, PropertySheetItem, ViewBinder

AlertCallback = Callable[[str, str], None]


class EditorRow(ttk.Frame):  # type: ignore[misc]
    """Label plus editor for a single :class:`PropertySheetItem`.

    A row is created once per item and lives as long as the item does; the
    sheet only re-grids rows when the item list changes shape.
    """

    def __init__(
        self,
        master: tk.Widget,
        item: PropertySheetItem,
        *,
        on_alert: AlertCallback | None = None,
        on_retype: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(master, style="Card.TFrame", padding=(6, 2))
        self.item = item
        self._on_alert = on_alert
        self._on_retype = on_retype
        self.is_bool = item.type is PreferenceType.BOOLEAN
        self.label = ttk.Label(self, text=item.key, style="CardKey.TLabel", width=28)
        self.label.grid(row=0, column=0, sticky="w")
        self.columnconfigure(1, weight=1)

        self.editor: CellEditor | None = None
        self._remove_listener = item.cell.add_listener(self._on_cell_changed)
        if self.is_bool:
            self.var: tk.Variable = tk.BooleanVar(master=self, value=bool(item.value.payload))
            self.widget = ttk.Checkbutton(
                self, variable=self.var, command=self._on_toggle, style="Card.TCheckbutton"
            )
        else:
            self.editor = CellEditor(item.cell, on_refresh=self._on_refresh)
            self.var = tk.StringVar(master=self, value=self.editor.draft)
            self.widget = ttk.Entry(self, textvariable=self.var)
            self.widget.bind("<KeyRelease>", self._on_key)
            self.widget.bind("<Return>", self._on_commit)
            self.widget.bind("<FocusOut>", self._on_commit)
            self.widget.bind("<Escape>", self._on_revert)
        self.widget.grid(row=0, column=1, sticky="ew", padx=(8, 0))

    @property
    def key(self) -> str:
        return self.item.key

    def _on_cell_changed(self, _previous: PreferenceValue, current: PreferenceValue) -> None:
        if (current.type is PreferenceType.BOOLEAN) != self.is_bool:
            if self._on_retype is not None:
                self.after_idle(self._on_retype, self.key)
        elif self.is_bool:
            self.var.set(bool(current.payload))

    # boolean editor ---------------------------------------------------
    def _on_toggle(self) -> None:
        self.item.cell.set(PreferenceValue(PreferenceType.BOOLEAN, bool(self.var.get())))

    # text editor ------------------------------------------------------
    def _on_key(self, _event: object = None) -> None:
        if self.editor is not None:
            self.editor.type(self.var.get())

    def _on_commit(self, _event: object = None) -> None:
        if self.editor is None or not self.editor.dirty:
            return
        try:
            self.editor.commit()
        except CodecError as exc:
            self.widget.configure(style="Invalid.TEntry")
            if self._on_alert is not None:
                self._on_alert(exc.title, str(exc))
            return
        self.widget.configure(style="TEntry")

    def _on_revert(self, _event: object = None) -> None:
        if self.editor is not None:
            self.editor.revert()
        self.widget.configure(style="TEntry")

    def _on_refresh(self, text: str) -> None:
        self.var.set(text)
        self.widget.configure(style="TEntry")

    def destroy(self) -> None:
        if self.editor is not None:
            self.editor.close()
        self._remove_listener()
        super().destroy()


class PropertySheet(ttk.Frame):  # type: ignore[misc]
    """Scrollable list of :class:`EditorRow` widgets mirroring a view binder."""

    def __init__(
        self,
        master: tk.Widget,
        view: ViewBinder,
        *,
        on_alert: AlertCallback | None = None,
    ) -> None:
        super().__init__(master)
        self.view = view
        self._on_alert = on_alert
        self.rows: dict[str, EditorRow] = {}

        self.search_var = tk.StringVar(master=self, value="")
        self.search_entry = ttk.Entry(self, textvariable=self.search_var)
        self.search_var.trace_add("write", lambda *_: self.refresh())
        self.search_entry.pack(fill="x", pady=(0, 6))

        body = ttk.Frame(self)
        body.pack(fill="both", expand=True)
        self.canvas = tk.Canvas(body, highlightthickness=0, borderwidth=0)
        scrollbar = ttk.Scrollbar(body, orient="vertical", command=self.canvas.yview)
        self.canvas.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side="right", fill="y")
        self.canvas.pack(side="left", fill="both", expand=True)
        self.container = ttk.Frame(self.canvas, style="Card.TFrame")
        self._window = self.canvas.create_window((0, 0), window=self.container, anchor="nw")
        self.container.bind(
            "<Configure>",
            lambda _e: self.canvas.configure(scrollregion=self.canvas.bbox("all")),
        )
        self.canvas.bind(
            "<Configure>", lambda e: self.canvas.itemconfigure(self._window, width=e.width)
        )
        self.container.columnconfigure(0, weight=1)

        self.empty_label = ttk.Label(
            self.container, text="No preferences", style="CardMuted.TLabel", padding=8
        )
        view.on_items_changed.append(lambda _items: self.refresh())
        self.refresh()

    def set_search_visible(self, visible: bool) -> None:
        if visible:
            if not self.search_entry.winfo_manager():
                self.search_entry.pack(fill="x", pady=(0, 6), before=self.canvas.master)
        else:
            self.search_var.set("")
            self.search_entry.pack_forget()

    def visible_keys(self) -> list[str]:
        return [i.key for i in self.view.filter(self.search_var.get())]

    def _make_row(self, item: PropertySheetItem) -> EditorRow:
        return EditorRow(
            self.container, item, on_alert=self._on_alert, on_retype=self._rebuild_row
        )

    def _rebuild_row(self, key: str) -> None:
        row = self.rows.pop(key, None)
        if row is not None:
            row.destroy()
        self.refresh()

    def refresh(self) -> None:
        """Sync rows with the view binder without recreating existing editors."""

        keys = set(self.view.keys())
        for key in list(self.rows):
            if key not in keys:
                self.rows.pop(key).destroy()
        for item in self.view.items:
            if item.key not in self.rows:
                self.rows[item.key] = self._make_row(item)

        shown = self.view.filter(self.search_var.get())
        shown_keys = {i.key for i in shown}
        for key, row in self.rows.items():
            if key not in shown_keys:
                row.grid_remove()
        for index, item in enumerate(shown):
            self.rows[item.key].grid(row=index, column=0, sticky="ew")
        if self.rows:
            self.empty_label.grid_remove()
        else:
            self.empty_label.grid(row=0, column=0, sticky="w")


__all__ = ["EditorRow", "PropertySheet"]
