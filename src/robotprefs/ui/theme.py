"""ttk theme for the preferences editor."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

try:  # pragma: no cover - importing tkinter is environment dependent
    import tkinter as tk
    from tkinter import ttk
except Exception:  # pragma: no cover - fallback when tkinter missing
    tk = None  # type: ignore
    ttk = None  # type: ignore


@dataclass(frozen=True)
class ThemeSpec:
    """Description of a theme that can be applied to a tkinter UI."""

    name: str
    ttk_theme: str
    palette: Mapping[str, object]


_PALETTE: dict[str, object] = {
    "bg": "#2B313B",
    "card": "#EEF3FA",
    "card_edge": "#D4DEEE",
    "hdr_fg": "#F4F8FF",
    "ink": "#0E1724",
    "ink_muted": "#586A84",
    "field": "#FFFFFF",
    "field_bd": "#C8D3E6",
    "primary": "#365DC6",
    "error": "#b91c1c",
}

THEME = ThemeSpec(name="robotprefs", ttk_theme="clam", palette=_PALETTE)

_ACTIVE_PALETTE: dict[str, object] = {}


def get_palette() -> dict[str, object]:
    """Return the palette of the applied theme (or the default one)."""

    return _ACTIVE_PALETTE or dict(_PALETTE)


def apply_theme(
    root: tk.Misc,
    theme: ThemeSpec = THEME,
    *,
    palette_override: Mapping[str, object] | None = None,
) -> None:
    """Apply *theme* to *root* with an optional palette override."""

    global _ACTIVE_PALETTE

    colors: dict[str, object] = dict(palette_override or theme.palette)
    _ACTIVE_PALETTE = colors

    if ttk is None:  # pragma: no cover - ttk unavailable in some environments
        return

    style = ttk.Style(root)
    try:  # pragma: no branch - prefer requested ttk theme but fall back silently
        style.theme_use(theme.ttk_theme)
    except tk.TclError:  # pragma: no cover - best effort on unsupported themes
        pass

    root.configure(bg=colors["bg"])  # type: ignore[call-arg]

    style.configure("TFrame", background=colors["bg"])
    style.configure("TLabel", background=colors["bg"], foreground=colors["hdr_fg"])
    style.configure("Card.TFrame", background=colors["card"])
    style.configure(
        "CardKey.TLabel",
        background=colors["card"],
        foreground=colors["ink"],
        font=(None, 10, "bold"),
    )
    style.configure(
        "CardMuted.TLabel", background=colors["card"], foreground=colors["ink_muted"]
    )
    style.configure(
        "Card.TCheckbutton",
        background=colors["card"],
        foreground=colors["ink"],
        indicatorcolor=colors["card_edge"],
    )
    style.map(
        "Card.TCheckbutton",
        indicatorcolor=[("selected", colors["primary"]), ("!selected", colors["card_edge"])],
        background=[("active", colors["card_edge"])],
    )
    style.configure(
        "TButton",
        background=colors["card"],
        foreground=colors["ink"],
        bordercolor=colors["field_bd"],
        borderwidth=1,
        relief="solid",
    )
    style.map(
        "TButton",
        background=[("active", colors["card_edge"])],
        foreground=[("disabled", colors["ink_muted"])],
    )
    style.configure(
        "TEntry",
        padding=4,
        foreground=colors["ink"],
        fieldbackground=colors["field"],
        bordercolor=colors["field_bd"],
    )
    style.configure(
        "Invalid.TEntry",
        padding=4,
        foreground=colors["error"],
        fieldbackground=colors["field"],
        bordercolor=colors["error"],
    )


__all__ = ["THEME", "ThemeSpec", "apply_theme", "get_palette"]
