"""Add / remove entry flows behind the widget's two dialogs.

The forms are plain objects so any toolkit can drive them.  Both re-read
the channel's *current* snapshot whenever they are asked a question:
reconciliation keeps running while a dialog is open.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..channel import PreferencesChannel
from ..codec import decode_for_edit
from ..errors import CodecError, DuplicateKeyError, InvalidKeyError, SourceMismatchError
from ..ordering import item_sort_key
from ..sources import DataSource, delete_preference
from ..tables import TableInstance, get_default_instance, is_metadata as default_is_metadata
from ..values import ADDABLE_TYPES, PreferenceType
from .events import EventBus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewPreferenceEntry:
    key: str
    type: PreferenceType
    value: str


class NewEntryForm:
    """State of the "New Preference Entry" dialog."""

    def __init__(self, channel: PreferencesChannel) -> None:
        self._channel = channel
        self.types: tuple[PreferenceType, ...] = ADDABLE_TYPES
        self.key = ""
        self.type = self.types[0]
        self.value = ""

    @property
    def can_submit(self) -> bool:
        return bool(self.key) and not self._channel.current.contains_key(self.key)

    def result(self) -> NewPreferenceEntry:
        return NewPreferenceEntry(self.key, self.type, self.value)


class RemoveEntryForm:
    """State of the "Remove Preference Entry" dialog."""

    def __init__(self, keys: list[str]) -> None:
        self.keys = keys
        self.selection: str | None = keys[0] if keys else None

    @property
    def can_submit(self) -> bool:
        return self.selection is not None


class EntryController:
    def __init__(
        self,
        channel: PreferencesChannel,
        events: EventBus,
        *,
        source: Callable[[], DataSource | None] = lambda: None,
        instance: Callable[[], TableInstance] = get_default_instance,
        is_metadata: Callable[[str], bool] = default_is_metadata,
    ) -> None:
        self.channel = channel
        self.events = events
        self._source = source
        self._instance = instance
        self._is_metadata = is_metadata

    # --- add ----------------------------------------------------------
    def new_entry_form(self) -> NewEntryForm:
        return NewEntryForm(self.channel)

    def add_entry(self, entry: NewPreferenceEntry) -> bool:
        """Validate *entry* and write it; alert and return ``False`` on error."""

        try:
            if self.channel.current.contains_key(entry.key):
                raise DuplicateKeyError(
                    f"An entry with the key {entry.key} already exists"
                )
            self.put_string(entry.key, entry.value, entry.type)
        except (DuplicateKeyError, InvalidKeyError, CodecError) as exc:
            logger.debug("rejected new entry %r: %s", entry.key, exc)
            self.events.emit_alert(exc.title, str(exc))
            return False
        return True

    def put_string(self, key: str, raw: str, type: PreferenceType | str) -> None:
        if not key:
            raise InvalidKeyError("The key cannot be empty")
        value = decode_for_edit(raw, type)
        logger.info("adding preference %s (%s)", key, value.type.value)
        self.channel.set_data(self.channel.current.put(key, value))

    # --- remove -------------------------------------------------------
    def remove_entry_form(self) -> RemoveEntryForm:
        keys = [k for k in self.channel.current.as_map() if not self._is_metadata(k)]
        keys.sort(key=item_sort_key)
        return RemoveEntryForm(keys)

    def remove_entry(self, key: str | None) -> bool:
        """Ask the remote table to delete *key*.

        The local view follows once the table publishes a snapshot without
        the key.  Sources that cannot delete are ignored.
        """
        if key is None:
            return False
        source = self._source()
        try:
            delete_preference(source, key, self._instance())
        except SourceMismatchError as exc:
            logger.debug("remove ignored: %s", exc)
            return False
        logger.info("requested deletion of %s", key)
        return True


__all__ = [
    "EntryController",
    "NewEntryForm",
    "NewPreferenceEntry",
    "RemoveEntryForm",
]
