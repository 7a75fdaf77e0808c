from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

T = TypeVar("T")

Listener = Callable[[T, T], None]


class Observable(Generic[T]):
    """Value holder notifying ``(previous, current)`` listeners on change."""

    def __init__(self, value: T) -> None:
        self._value = value
        self._listeners: list[Listener[T]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> bool:
        """Store *value*; return ``True`` when listeners were notified."""

        previous = self._value
        if previous is value or previous == value:
            return False
        self._value = value
        for cb in list(self._listeners):
            cb(previous, value)
        return True

    def add_listener(self, listener: Listener[T]) -> Callable[[], None]:
        """Register *listener* and return a callable removing it again."""

        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove


class BindingCell(Observable[T]):
    """Stable, observable holder of the current value of one preference.

    Editors bind to a cell rather than to snapshot entries so the editor
    survives every remote update of its key.  Writes coming from the remote
    side are wrapped in :meth:`applying_remote` so that the local-edit
    listener can tell them apart from user edits.
    """

    def __init__(self, key: str, value: T) -> None:
        super().__init__(value)
        self.key = key
        self._remote_depth = 0
        self.disposed = False

    @property
    def is_applying_remote(self) -> bool:
        return self._remote_depth > 0

    @contextmanager
    def applying_remote(self) -> Iterator[BindingCell[T]]:
        self._remote_depth += 1
        try:
            yield self
        finally:
            self._remote_depth -= 1

    def dispose(self) -> None:
        self.disposed = True
        self._listeners.clear()

    def __repr__(self) -> str:
        return f"BindingCell({self.key!r}, {self._value!r})"


__all__ = ["BindingCell", "Observable"]
