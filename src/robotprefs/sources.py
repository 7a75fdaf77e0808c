from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from .errors import SourceMismatchError
from .tables import Table, TableInstance, normalize_key, snapshot_of
from .values import PreferencesSnapshot

logger = logging.getLogger(__name__)

NETWORK_TABLES = "NetworkTables"

Dispatch = Callable[[Callable[[], None]], None]


def _immediate(fn: Callable[[], None]) -> None:
    fn()


@dataclass(frozen=True)
class SourceType:
    name: str


@dataclass(frozen=True)
class DataType:
    name: str
    is_complex: bool = False


ROBOT_PREFERENCES = DataType("RobotPreferences", is_complex=True)


class DataSource(ABC):
    """Bound source of preference snapshots."""

    type: SourceType = SourceType("Static")
    data_type: DataType = ROBOT_PREFERENCES

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def snapshot(self) -> PreferencesSnapshot:
        """Return the source's current preferences."""

    def publish(
        self, previous: PreferencesSnapshot, current: PreferencesSnapshot
    ) -> None:
        """Push a locally edited snapshot upstream."""

    def subscribe(self, callback: Callable[[PreferencesSnapshot], None]) -> Callable[[], None]:
        return lambda: None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class StaticSource(DataSource):
    """Source backed by a fixed snapshot, e.g. a seed file.

    Local edits are kept in :attr:`data`; nothing is written anywhere.
    """

    def __init__(self, name: str, data: PreferencesSnapshot | None = None) -> None:
        super().__init__(name)
        self.data = data if data is not None else PreferencesSnapshot()

    def snapshot(self) -> PreferencesSnapshot:
        return self.data

    def publish(
        self, previous: PreferencesSnapshot, current: PreferencesSnapshot
    ) -> None:
        self.data = current


class NetworkTableSource(DataSource):
    """Source mirroring one table of a :class:`~robotprefs.tables.TableInstance`.

    Table change notifications may arrive on any thread; they are handed to
    ``dispatch`` so a front-end can marshal them onto its own thread before
    the new snapshot is delivered.
    """

    type = SourceType(NETWORK_TABLES)

    def __init__(
        self,
        name: str,
        instance: TableInstance,
        *,
        dispatch: Dispatch = _immediate,
    ) -> None:
        super().__init__(name)
        self.instance = instance
        self.dispatch = dispatch

    @property
    def table(self) -> Table:
        return self.instance.get_table(normalize_key(self.name, with_leading_slash=False))

    def snapshot(self) -> PreferencesSnapshot:
        return snapshot_of(self.table)

    def publish(
        self, previous: PreferencesSnapshot, current: PreferencesSnapshot
    ) -> None:
        table = self.table
        for key, value in current.changes_from(previous).items():
            logger.debug("publishing %s to %s", key, self.name)
            table.put(key, value)

    def subscribe(self, callback: Callable[[PreferencesSnapshot], None]) -> Callable[[], None]:
        def on_key(_key: str) -> None:
            self.dispatch(lambda: callback(self.snapshot()))

        return self.table.add_listener(on_key)


def delete_preference(source: DataSource | None, key: str, instance: TableInstance) -> None:
    """Delete *key* from the remote table behind *source*.

    Only complex-typed NetworkTables sources can be deleted from; anything
    else raises :class:`SourceMismatchError`.
    """
    if (
        source is None
        or source.type.name != NETWORK_TABLES
        or not source.data_type.is_complex
    ):
        raise SourceMismatchError(f"cannot delete {key!r} from {source!r}")
    path = normalize_key(source.name, with_leading_slash=False)
    instance.get_table(path).delete(key)


__all__ = [
    "DataSource",
    "DataType",
    "NETWORK_TABLES",
    "NetworkTableSource",
    "ROBOT_PREFERENCES",
    "SourceType",
    "StaticSource",
    "delete_preference",
]
