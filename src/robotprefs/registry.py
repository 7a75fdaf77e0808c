from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from .cells import BindingCell
from .errors import ReconcilerInvariantError
from .values import PreferenceValue

logger = logging.getLogger(__name__)

CellHook = Callable[[str, BindingCell[PreferenceValue]], None]


class BindingRegistry:
    """Map of preference keys to their :class:`BindingCell`.

    Cells are created once per key and reused until the key disappears.
    ``on_create`` runs for every new cell before any structural listener is
    told about it, which is where the local-edit listener gets installed.
    """

    def __init__(self, on_create: Callable[[BindingCell[PreferenceValue]], None] | None = None) -> None:
        self._cells: dict[str, BindingCell[PreferenceValue]] = {}
        self._on_create = on_create
        self.on_added: list[CellHook] = []
        self.on_removed: list[CellHook] = []

    def __contains__(self, key: object) -> bool:
        return key in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[str]:
        return iter(self._cells)

    def keys(self) -> set[str]:
        return set(self._cells)

    def get(self, key: str) -> BindingCell[PreferenceValue] | None:
        return self._cells.get(key)

    def get_or_create(self, key: str, initial: PreferenceValue) -> BindingCell[PreferenceValue]:
        cell = self._cells.get(key)
        if cell is not None:
            return cell
        cell = BindingCell(key, initial)
        if self._on_create is not None:
            self._on_create(cell)
        self._cells[key] = cell
        logger.debug("created cell for %s", key)
        for cb in list(self.on_added):
            cb(key, cell)
        return cell

    def set(self, key: str, value: PreferenceValue) -> bool:
        """Write a remote *value* into the existing cell for *key*."""

        cell = self._cells.get(key)
        if cell is None or cell.disposed:
            raise ReconcilerInvariantError(f"no live cell for key {key!r}")
        with cell.applying_remote():
            return cell.set(value)

    def remove(self, key: str) -> BindingCell[PreferenceValue] | None:
        cell = self._cells.pop(key, None)
        if cell is None:
            return None
        logger.debug("removed cell for %s", key)
        for cb in list(self.on_removed):
            cb(key, cell)
        cell.dispose()
        return cell


__all__ = ["BindingRegistry"]
