"""Typed preference values and immutable preference snapshots.

A :class:`PreferencesSnapshot` is the unit of exchange between the remote
table and the editor: every change produces a new snapshot, the previous one
is never mutated.  Values are stored as :class:`PreferenceValue` instances so
the editor always knows which type tag a key carries.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any


class PreferenceType(str, Enum):
    """Type tags understood by the editor."""

    BOOLEAN = "Boolean"
    NUMBER = "Number"
    STRING = "String"
    BOOLEAN_ARRAY = "BooleanArray"
    NUMBER_ARRAY = "NumberArray"
    STRING_ARRAY = "StringArray"

    @classmethod
    def from_name(cls, name: str | PreferenceType) -> PreferenceType:
        if isinstance(name, PreferenceType):
            return name
        for member in cls:
            if member.value.lower() == name.lower():
                return member
        raise ValueError(f"unknown preference type: {name!r}")


# Tags offered by the "new entry" dialog.
ADDABLE_TYPES: tuple[PreferenceType, ...] = (
    PreferenceType.BOOLEAN,
    PreferenceType.NUMBER,
    PreferenceType.STRING,
)

_ARRAY_ELEMENT = {
    PreferenceType.BOOLEAN_ARRAY: PreferenceType.BOOLEAN,
    PreferenceType.NUMBER_ARRAY: PreferenceType.NUMBER,
    PreferenceType.STRING_ARRAY: PreferenceType.STRING,
}


def element_type(tag: PreferenceType) -> PreferenceType | None:
    """Return the element tag for array tags, ``None`` for scalars."""

    return _ARRAY_ELEMENT.get(tag)


def _scalar_type(obj: object) -> PreferenceType:
    # bool is checked first since it is an int subclass
    if isinstance(obj, bool):
        return PreferenceType.BOOLEAN
    if isinstance(obj, (int, float)):
        return PreferenceType.NUMBER
    if isinstance(obj, str):
        return PreferenceType.STRING
    raise TypeError(f"unsupported preference payload: {obj!r}")


def _same_scalar(a: object, b: object) -> bool:
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b


@dataclass(frozen=True, eq=False)
class PreferenceValue:
    """A payload tagged with its :class:`PreferenceType`."""

    type: PreferenceType
    payload: Any

    @classmethod
    def of(cls, obj: object) -> PreferenceValue:
        """Infer the tag for a plain Python payload."""

        if isinstance(obj, PreferenceValue):
            return obj
        if isinstance(obj, (list, tuple)):
            items = tuple(obj)
            if not items:
                return cls(PreferenceType.STRING_ARRAY, ())
            tag = _scalar_type(items[0])
            if any(_scalar_type(i) is not tag for i in items):
                raise TypeError(f"mixed array payload: {obj!r}")
            if tag is PreferenceType.NUMBER:
                items = tuple(float(i) for i in items)
            array_tag = next(k for k, v in _ARRAY_ELEMENT.items() if v is tag)
            return cls(array_tag, items)
        tag = _scalar_type(obj)
        if tag is PreferenceType.NUMBER:
            obj = float(obj)  # type: ignore[arg-type]
        return cls(tag, obj)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PreferenceValue):
            return NotImplemented
        if self.type is not other.type:
            return False
        if element_type(self.type) is None:
            return _same_scalar(self.payload, other.payload)
        if len(self.payload) != len(other.payload):
            return False
        return all(_same_scalar(a, b) for a, b in zip(self.payload, other.payload))

    def __hash__(self) -> int:
        # NaN payloads compare equal, so only the tag is hashed
        return hash(self.type)


class PreferencesSnapshot(Mapping[str, PreferenceValue]):
    """Immutable mapping of preference keys to typed values."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, object] | None = None) -> None:
        self._data = MappingProxyType(
            {str(k): PreferenceValue.of(v) for k, v in (data or {}).items()}
        )

    # Mapping protocol -------------------------------------------------
    def __getitem__(self, key: str) -> PreferenceValue:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PreferencesSnapshot):
            return dict(self._data) == dict(other._data)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(f"{k!r}: {v.payload!r}" for k, v in self._data.items())
        return f"PreferencesSnapshot({{{inner}}})"

    # Snapshot operations ---------------------------------------------
    def as_map(self) -> Mapping[str, PreferenceValue]:
        return self._data

    def contains_key(self, key: str) -> bool:
        return key in self._data

    def put(self, key: str, value: object) -> PreferencesSnapshot:
        """Return a new snapshot with *key* set to *value*."""

        data = dict(self._data)
        data[key] = PreferenceValue.of(value)
        return PreferencesSnapshot(data)

    def without(self, key: str) -> PreferencesSnapshot:
        """Return a new snapshot lacking *key*."""

        data = dict(self._data)
        data.pop(key, None)
        return PreferencesSnapshot(data)

    def changes_from(
        self, previous: PreferencesSnapshot | None
    ) -> dict[str, PreferenceValue]:
        """Return the entries that are new or different relative to *previous*."""

        if previous is None:
            return dict(self._data)
        return {
            k: v
            for k, v in self._data.items()
            if k not in previous._data or previous._data[k] != v
        }


EMPTY = PreferencesSnapshot()


__all__ = [
    "ADDABLE_TYPES",
    "EMPTY",
    "PreferenceType",
    "PreferenceValue",
    "PreferencesSnapshot",
    "element_type",
]
