from __future__ import annotations

import logging
import queue
from collections.abc import Callable

try:  # pragma: no cover - tkinter availability depends on the env
    import tkinter as tk
except Exception:  # pragma: no cover - fallback when tkinter missing
    tk = None  # type: ignore

logger = logging.getLogger(__name__)


class TkDispatcher:
    """Run callables on the Tk thread.

    Table listeners fire on the client library's threads; they enqueue work
    here and the queue is drained from ``after`` callbacks.
    """

    def __init__(self, root: tk.Misc, *, interval_ms: int = 50) -> None:
        self.root = root
        self.interval_ms = interval_ms
        self._queue: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()
        self._job: str | None = None

    def __call__(self, fn: Callable[[], None]) -> None:
        self._queue.put(fn)

    def start(self) -> None:
        if self._job is None:
            self._job = self.root.after(self.interval_ms, self._drain)

    def stop(self) -> None:
        if self._job is not None:
            self.root.after_cancel(self._job)
            self._job = None

    def drain(self) -> int:
        """Run everything queued so far and return how many callables ran."""

        count = 0
        while True:
            try:
                fn = self._queue.get_nowait()
            except queue.Empty:
                return count
            try:
                fn()
            except Exception:
                logger.exception("dispatched callback failed")
            count += 1

    def _drain(self) -> None:
        self.drain()
        self._job = self.root.after(self.interval_ms, self._drain)


__all__ = ["TkDispatcher"]
