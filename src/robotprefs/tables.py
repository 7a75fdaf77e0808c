"""Remote key/value tables.

The editor only needs a handful of table operations: list keys, read and
write typed values, delete a key and be told about changes.  Two
implementations are provided: :class:`MemoryTableInstance`, an in-process
table used for local sessions and tests, and :class:`NtcoreTableInstance`,
a thin adapter over the ``ntcore`` NetworkTables client.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any, Protocol

from .errors import TableUnavailableError
from .values import PreferenceValue, PreferencesSnapshot

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"
METADATA_PREFIXES: tuple[str, ...] = (".", "~")

KeyListener = Callable[[str], None]


def normalize_key(key: str, with_leading_slash: bool = True) -> str:
    """Collapse repeated separators in *key*.

    >>> normalize_key("//Preferences///sub", False)
    'Preferences/sub'
    """
    parts = [p for p in key.split(PATH_SEPARATOR) if p]
    joined = PATH_SEPARATOR.join(parts)
    if with_leading_slash:
        return PATH_SEPARATOR + joined
    return joined


def is_metadata(key: str, prefixes: Iterable[str] = METADATA_PREFIXES) -> bool:
    """Return ``True`` for transport bookkeeping keys such as ``.type``."""

    prefixes = tuple(prefixes)
    if not prefixes:
        return False
    return any(part.startswith(prefixes) for part in key.split(PATH_SEPARATOR) if part)


class Table(Protocol):
    def keys(self) -> list[str]: ...

    def get(self, key: str) -> PreferenceValue | None: ...

    def put(self, key: str, value: PreferenceValue) -> None: ...

    def delete(self, key: str) -> None: ...

    def add_listener(self, listener: KeyListener) -> Callable[[], None]: ...


class TableInstance(Protocol):
    def get_table(self, path: str) -> Table: ...


def snapshot_of(table: Table) -> PreferencesSnapshot:
    """Read every entry of *table* into a snapshot."""

    data: dict[str, PreferenceValue] = {}
    for key in table.keys():
        value = table.get(key)
        if value is not None:
            data[key] = value
    return PreferencesSnapshot(data)


# ---------------------------------------------------------------------------
# In-process tables
# ---------------------------------------------------------------------------


class MemoryTable:
    """Thread-safe in-process table."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._values: dict[str, PreferenceValue] = {}
        self._listeners: list[KeyListener] = []
        self._lock = threading.RLock()

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._values)

    def get(self, key: str) -> PreferenceValue | None:
        with self._lock:
            return self._values.get(key)

    def put(self, key: str, value: object) -> None:
        value = PreferenceValue.of(value)
        with self._lock:
            if self._values.get(key) == value:
                return
            self._values[key] = value
        self._notify(key)

    def delete(self, key: str) -> None:
        with self._lock:
            if key not in self._values:
                return
            del self._values[key]
        logger.debug("deleted %s from %s", key, self.path)
        self._notify(key)

    def add_listener(self, listener: KeyListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def remove() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return remove

    def _notify(self, key: str) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for cb in listeners:
            cb(key)


class MemoryTableInstance:
    """Collection of :class:`MemoryTable` objects keyed by normalised path."""

    def __init__(self) -> None:
        self._tables: dict[str, MemoryTable] = {}
        self._lock = threading.Lock()

    def get_table(self, path: str) -> MemoryTable:
        norm = normalize_key(path, with_leading_slash=False)
        with self._lock:
            table = self._tables.get(norm)
            if table is None:
                table = self._tables[norm] = MemoryTable(norm)
            return table


# ---------------------------------------------------------------------------
# NetworkTables (ntcore)
# ---------------------------------------------------------------------------


def _require_ntcore():
    try:
        import ntcore  # type: ignore
    except ModuleNotFoundError as exc:
        raise TableUnavailableError(
            "pyntcore is required for NetworkTables sources"
        ) from exc
    return ntcore


class NtcoreTable:  # pragma: no cover - requires a NetworkTables server
    def __init__(self, table: Any, ntcore: Any) -> None:
        self._table = table
        self._ntcore = ntcore

    def keys(self) -> list[str]:
        return list(self._table.getKeys())

    def get(self, key: str) -> PreferenceValue | None:
        raw = self._table.getValue(key, None)
        if raw is None:
            return None
        try:
            return PreferenceValue.of(raw)
        except TypeError:
            logger.debug("skipping %s with unsupported payload %r", key, raw)
            return None

    def put(self, key: str, value: PreferenceValue) -> None:
        payload = value.payload
        if isinstance(payload, tuple):
            payload = list(payload)
        self._table.putValue(key, payload)

    def delete(self, key: str) -> None:
        entry = self._table.getEntry(key)
        entry.clearPersistent()
        entry.unpublish()

    def add_listener(self, listener: KeyListener) -> Callable[[], None]:
        flags = self._ntcore.EventFlags
        handle = self._table.addListener(
            flags.kValueAll | flags.kUnpublish,
            lambda _table, key, _event: listener(key),
        )
        return lambda: self._table.removeListener(handle)


class NtcoreTableInstance:  # pragma: no cover - requires a NetworkTables server
    """Adapter exposing an ``ntcore.NetworkTableInstance`` as a table instance."""

    def __init__(self, instance: Any | None = None) -> None:
        self._ntcore = _require_ntcore()
        self._inst = instance or self._ntcore.NetworkTableInstance.getDefault()

    def start_client(self, server: str, client_name: str) -> None:
        logger.info("connecting to NetworkTables at %s as %s", server, client_name)
        self._inst.setServer(server)
        self._inst.startClient4(client_name)

    def is_connected(self) -> bool:
        return bool(self._inst.isConnected())

    def get_table(self, path: str) -> NtcoreTable:
        return NtcoreTable(self._inst.getTable(path), self._ntcore)


# ---------------------------------------------------------------------------
# Default instance
# ---------------------------------------------------------------------------

_DEFAULT: TableInstance | None = None


def get_default_instance() -> TableInstance:
    """Return the process-wide table instance, creating an in-process one."""

    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = MemoryTableInstance()
    return _DEFAULT


def set_default_instance(instance: TableInstance | None) -> None:
    global _DEFAULT
    _DEFAULT = instance


__all__ = [
    "METADATA_PREFIXES",
    "MemoryTable",
    "MemoryTableInstance",
    "NtcoreTableInstance",
    "Table",
    "TableInstance",
    "get_default_instance",
    "is_metadata",
    "normalize_key",
    "set_default_instance",
    "snapshot_of",
]
