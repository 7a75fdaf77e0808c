from __future__ import annotations

import logging

from .cells import BindingCell
from .channel import PreferencesChannel
from .values import PreferenceValue

logger = logging.getLogger(__name__)


class LocalEditPropagator:
    """Write user edits of a :class:`BindingCell` back into the channel."""

    def __init__(self, channel: PreferencesChannel) -> None:
        self.channel = channel

    def attach(self, cell: BindingCell[PreferenceValue]) -> None:
        def on_change(_previous: PreferenceValue, current: PreferenceValue) -> None:
            if cell.is_applying_remote:
                return
            logger.debug("local edit %s=%r", cell.key, current.payload)
            self.channel.set_data(self.channel.current.put(cell.key, current))

        cell.add_listener(on_change)


__all__ = ["LocalEditPropagator"]
