from __future__ import annotations

import logging
from collections.abc import Callable

from ..reconciler import Delta

logger = logging.getLogger(__name__)


class EventBus:
    """Simple callback based pub/sub system."""

    def __init__(self) -> None:
        self.on_alert: list[Callable[[str, str], None]] = []
        self.on_reconciled: list[Callable[[Delta], None]] = []

    def emit_alert(self, title: str, message: str) -> None:
        if not self.on_alert:
            logger.warning("%s: %s", title, message)
        for cb in list(self.on_alert):
            cb(title, message)

    def emit_reconciled(self, delta: Delta) -> None:
        for cb in list(self.on_reconciled):
            cb(delta)


__all__ = ["EventBus"]
