from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from .values import EMPTY, PreferencesSnapshot

logger = logging.getLogger(__name__)

Transition = Callable[[PreferencesSnapshot | None, PreferencesSnapshot], None]


class SnapshotSink(Protocol):
    """Receiver of locally edited snapshots (normally the bound source)."""

    def publish(
        self, previous: PreferencesSnapshot, current: PreferencesSnapshot
    ) -> None:
        ...


class PreferencesChannel:
    """Holds the widget's current snapshot and announces transitions.

    ``set_data`` is the local-edit path: listeners hear about the snapshot and
    then it is forwarded upstream to the sink.  ``receive`` is the remote path
    and never writes back.
    """

    def __init__(
        self,
        initial: PreferencesSnapshot | None = None,
        *,
        sink: SnapshotSink | None = None,
    ) -> None:
        self._current = initial if initial is not None else EMPTY
        self.sink = sink
        self._listeners: list[Transition] = []

    @property
    def current(self) -> PreferencesSnapshot:
        return self._current

    def add_listener(self, listener: Transition) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def set_data(self, snapshot: PreferencesSnapshot) -> None:
        previous = self._current
        self._update(previous, snapshot)
        if self.sink is not None:
            self.sink.publish(previous, snapshot)

    def receive(self, snapshot: PreferencesSnapshot) -> None:
        self._update(self._current, snapshot)

    def _update(
        self, previous: PreferencesSnapshot, current: PreferencesSnapshot
    ) -> None:
        if current == previous:
            self._current = current
            return
        self._current = current
        for cb in list(self._listeners):
            cb(previous, current)


__all__ = ["PreferencesChannel", "SnapshotSink"]
