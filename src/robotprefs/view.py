"""View-model for the property sheet.

:class:`ViewBinder` mirrors the binding registry as a sorted list of
:class:`PropertySheetItem` objects.  The list only changes shape when a cell
is created or removed; value updates flow through the cells themselves and
never reorder anything.

:class:`CellEditor` is the toolkit independent half of an editor.  It keeps
the text the user is typing as a draft and only replaces the draft when its
cell actually changes, so remote updates of other keys (or identical updates
of the same key) never disturb an edit in progress.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .cells import BindingCell
from .codec import decode_for_edit, encode_for_display
from .ordering import item_sort_key
from .registry import BindingRegistry
from .values import PreferenceType, PreferenceValue


@dataclass(frozen=True, eq=False)
class PropertySheetItem:
    key: str
    cell: BindingCell[PreferenceValue]

    @property
    def name(self) -> str:
        return self.key

    @property
    def type(self) -> PreferenceType:
        return self.cell.value.type

    @property
    def value(self) -> PreferenceValue:
        return self.cell.value


ItemsListener = Callable[[list[PropertySheetItem]], None]


class ViewBinder:
    def __init__(self, registry: BindingRegistry) -> None:
        self.items: list[PropertySheetItem] = []
        self.on_items_changed: list[ItemsListener] = []
        registry.on_added.append(self._on_added)
        registry.on_removed.append(self._on_removed)
        for key in registry:
            cell = registry.get(key)
            if cell is not None:
                self.items.append(PropertySheetItem(key, cell))
        self._sort()

    def item(self, key: str) -> PropertySheetItem | None:
        for item in self.items:
            if item.key == key:
                return item
        return None

    def keys(self) -> list[str]:
        return [i.key for i in self.items]

    def filter(self, query: str) -> list[PropertySheetItem]:
        """Return the items whose name contains *query*, ignoring case."""

        needle = query.strip().casefold()
        if not needle:
            return list(self.items)
        return [i for i in self.items if needle in i.name.casefold()]

    # registry callbacks ----------------------------------------------
    def _on_added(self, key: str, cell: BindingCell[PreferenceValue]) -> None:
        self.items.append(PropertySheetItem(key, cell))
        self._sort()
        self._emit()

    def _on_removed(self, key: str, _cell: BindingCell[PreferenceValue]) -> None:
        self.items = [i for i in self.items if i.key != key]
        self._emit()

    def _sort(self) -> None:
        self.items.sort(key=lambda i: item_sort_key(i.name))

    def _emit(self) -> None:
        for cb in list(self.on_items_changed):
            cb(self.items)


class CellEditor:
    """Draft text bound to a :class:`BindingCell`."""

    def __init__(
        self,
        cell: BindingCell[PreferenceValue],
        on_refresh: Callable[[str], None] | None = None,
    ) -> None:
        self.cell = cell
        self.draft = encode_for_display(cell.value)
        self.on_refresh = on_refresh
        self._remove = cell.add_listener(self._on_cell_changed)

    @property
    def dirty(self) -> bool:
        return self.draft != encode_for_display(self.cell.value)

    def type(self, text: str) -> None:
        self.draft = text

    def commit(self) -> bool:
        """Decode the draft with the cell's type and write it to the cell.

        Raises :class:`~robotprefs.errors.CodecError` for invalid text; the
        draft is left untouched so the user can correct it.
        """
        value = decode_for_edit(self.draft, self.cell.value.type)
        changed = self.cell.set(value)
        self.draft = encode_for_display(self.cell.value)
        return changed

    def revert(self) -> None:
        self.draft = encode_for_display(self.cell.value)
        if self.on_refresh is not None:
            self.on_refresh(self.draft)

    def close(self) -> None:
        self._remove()

    def _on_cell_changed(self, _previous: PreferenceValue, current: PreferenceValue) -> None:
        self.draft = encode_for_display(current)
        if self.on_refresh is not None:
            self.on_refresh(self.draft)


__all__ = ["CellEditor", "PropertySheetItem", "ViewBinder"]
