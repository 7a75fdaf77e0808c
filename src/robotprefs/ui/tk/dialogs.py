"""Dialog windows used by :mod:`robotprefs.ui.tk`."""

from __future__ import annotations

from collections.abc import Callable

try:  # pragma: no cover - importing tkinter is environment dependent
    import tkinter as tk
    from tkinter import messagebox, ttk
except Exception:  # pragma: no cover - fallback when tkinter missing
    tk = None  # type: ignore
    messagebox = None  # type: ignore
    ttk = None  # type: ignore

from ...channel import PreferencesChannel
from ...values import PreferenceType
from ..entries import NewEntryForm, NewPreferenceEntry, RemoveEntryForm
from ..theme import get_palette


def show_alert(parent: tk.Misc | None, title: str, message: str) -> None:
    """Modal error box with a single-line *message*."""

    if messagebox is None:  # pragma: no cover - environment without tkinter
        return
    messagebox.showerror(title, message, parent=parent)


class _ModalDialog(tk.Toplevel):  # type: ignore[misc]
    def __init__(self, master: tk.Misc, title: str) -> None:
        super().__init__(master)
        self.title(title)
        self.transient(master)
        self.resizable(False, False)
        self.configure(bg=get_palette()["bg"])  # type: ignore[call-arg]
        self.protocol("WM_DELETE_WINDOW", self.cancel)
        self.bind("<Escape>", lambda _e: self.cancel())
        self.body = ttk.Frame(self, padding=(10, 20, 150, 10))
        self.body.pack(fill="both", expand=True)
        self.buttons = ttk.Frame(self, padding=(10, 0, 10, 10))
        self.buttons.pack(fill="x")

    def show(self):
        """Block until the dialog closes and return its result."""

        self.grab_set()
        self.wait_window(self)
        return getattr(self, "result", None)

    def cancel(self) -> None:
        self.result = None
        self.destroy()


class NewPreferenceEntryDialog(_ModalDialog):
    """Key / type / value form for a new preference.

    The Add button is enabled only while the key is non-empty and absent
    from the channel's current snapshot; remote updates re-evaluate it.
    """

    def __init__(self, master: tk.Misc, form: NewEntryForm, channel: PreferencesChannel) -> None:
        super().__init__(master, "New Preference Entry")
        self.form = form
        self.result: NewPreferenceEntry | None = None

        self.key_var = tk.StringVar(master=self, value=form.key)
        self.type_var = tk.StringVar(master=self, value=form.type.value)
        self.value_var = tk.StringVar(master=self, value=form.value)

        ttk.Label(self.body, text="Key:").grid(row=0, column=0, sticky="w", padx=(0, 10), pady=5)
        self.key_entry = ttk.Entry(self.body, textvariable=self.key_var)
        self.key_entry.grid(row=0, column=1, sticky="ew", pady=5)
        ttk.Label(self.body, text="Type:").grid(row=1, column=0, sticky="w", padx=(0, 10), pady=5)
        self.type_box = ttk.Combobox(
            self.body,
            textvariable=self.type_var,
            values=[t.value for t in form.types],
            state="readonly",
        )
        self.type_box.grid(row=1, column=1, sticky="ew", pady=5)
        ttk.Label(self.body, text="Value:").grid(row=2, column=0, sticky="w", padx=(0, 10), pady=5)
        self.value_entry = ttk.Entry(self.body, textvariable=self.value_var)
        self.value_entry.grid(row=2, column=1, sticky="ew", pady=5)

        self.add_button = ttk.Button(self.buttons, text="Add", command=self.submit)
        self.add_button.pack(side="right")
        ttk.Button(self.buttons, text="Cancel", command=self.cancel).pack(
            side="right", padx=(0, 6)
        )

        self.key_var.trace_add("write", lambda *_: self._sync())
        self.type_var.trace_add("write", lambda *_: self._sync())
        self.value_var.trace_add("write", lambda *_: self._sync())
        self._unlisten: Callable[[], None] = channel.add_listener(
            lambda _p, _c: self._update_button()
        )
        self._update_button()
        self.key_entry.focus_set()

    def _sync(self) -> None:
        self.form.key = self.key_var.get()
        self.form.type = PreferenceType.from_name(self.type_var.get())
        self.form.value = self.value_var.get()
        self._update_button()

    def _update_button(self) -> None:
        self.add_button.state(["!disabled"] if self.form.can_submit else ["disabled"])

    def submit(self) -> None:
        if not self.form.can_submit:
            return
        self.result = self.form.result()
        self.destroy()

    def destroy(self) -> None:
        self._unlisten()
        super().destroy()


class RemovePreferenceEntryDialog(_ModalDialog):
    """Combo box of removable keys."""

    def __init__(self, master: tk.Misc, form: RemoveEntryForm) -> None:
        super().__init__(master, "Remove Preference Entry")
        self.form = form
        self.result: str | None = None

        self.key_var = tk.StringVar(master=self, value=form.selection or "")
        self.key_box = ttk.Combobox(
            self.body, textvariable=self.key_var, values=form.keys, state="readonly"
        )
        self.key_box.pack(fill="x")
        self.key_box.bind("<<ComboboxSelected>>", lambda _e: self._sync())

        self.remove_button = ttk.Button(self.buttons, text="Remove", command=self.submit)
        self.remove_button.pack(side="right")
        ttk.Button(self.buttons, text="Cancel", command=self.cancel).pack(
            side="right", padx=(0, 6)
        )
        self._sync()

    def _sync(self) -> None:
        self.form.selection = self.key_var.get() or None
        self.remove_button.state(["!disabled"] if self.form.can_submit else ["disabled"])

    def submit(self) -> None:
        if not self.form.can_submit:
            return
        self.result = self.form.selection
        self.destroy()


__all__ = ["NewPreferenceEntryDialog", "RemovePreferenceEntryDialog", "show_alert"]
