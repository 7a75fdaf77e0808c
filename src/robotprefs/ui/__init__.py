"""User interface layer for robotprefs.

:mod:`robotprefs.ui.core` holds the toolkit independent widget and
:mod:`robotprefs.ui.tk` a tkinter front-end bound to it.
"""

from __future__ import annotations

__all__ = ["core", "entries", "events", "tk"]
