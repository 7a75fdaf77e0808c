"""Framework agnostic widget core.

:class:`RobotPreferencesWidget` wires the pieces of the editor together:
snapshots arriving on the :class:`~robotprefs.channel.PreferencesChannel`
are reconciled into the binding registry, the view binder mirrors the
registry as sorted property-sheet items and user edits of a cell travel back
through the local-edit propagator.  Nothing in here knows about a widget
toolkit; front-ends subscribe to :class:`EventBus` and to the view binder.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial

from ..cells import Observable
from ..channel import PreferencesChannel
from ..config import WidgetConfig
from ..propagator import LocalEditPropagator
from ..reconciler import Reconciler
from ..registry import BindingRegistry
from ..sources import DataSource
from ..tables import TableInstance, get_default_instance, is_metadata
from ..values import PreferencesSnapshot
from ..view import ViewBinder
from .entries import EntryController
from .events import EventBus

logger = logging.getLogger(__name__)

SEARCH_BOX_VISIBLE = "Show search box"


# ---------------------------------------------------------------------------
# Widget
# ---------------------------------------------------------------------------


class RobotPreferencesWidget:
    """Editable property sheet over a live preferences table."""

    def __init__(
        self,
        channel: PreferencesChannel | None = None,
        *,
        source: DataSource | None = None,
        config: WidgetConfig | None = None,
        events: EventBus | None = None,
        instance: Callable[[], TableInstance] = get_default_instance,
    ) -> None:
        self.config = config or WidgetConfig()
        self.events = events or EventBus()
        self.channel = channel or PreferencesChannel()
        self.source: DataSource | None = None
        self._metadata = partial(is_metadata, prefixes=self.config.metadata_prefixes)

        self.propagator = LocalEditPropagator(self.channel)
        self.registry = BindingRegistry(on_create=self.propagator.attach)
        self.reconciler = Reconciler(self.registry, is_metadata=self._metadata)
        self.view = ViewBinder(self.registry)
        self.entries = EntryController(
            self.channel,
            self.events,
            source=lambda: self.source,
            instance=instance,
            is_metadata=self._metadata,
        )
        self.search_box_visible: Observable[bool] = Observable(
            self.config.search_box_visible
        )

        self._unsubscribe: Callable[[], None] | None = None
        self.channel.add_listener(self._on_data_changed)
        self._on_data_changed(None, self.channel.current)
        if source is not None:
            self.bind_source(source)

    # --- data ----------------------------------------------------------
    @property
    def data(self) -> PreferencesSnapshot:
        return self.channel.current

    def set_data(self, snapshot: PreferencesSnapshot) -> None:
        self.channel.set_data(snapshot)

    def _on_data_changed(
        self, previous: PreferencesSnapshot | None, current: PreferencesSnapshot
    ) -> None:
        delta = self.reconciler.apply(previous, current)
        if delta:
            self.events.emit_reconciled(delta)

    # --- source binding ------------------------------------------------
    def bind_source(self, source: DataSource) -> None:
        """Attach *source*: local edits go to it and its updates come back."""

        self.unbind_source()
        self.source = source
        self.channel.sink = source
        # subscribe first; the table may change while the snapshot is read
        self._unsubscribe = source.subscribe(self.channel.receive)
        self.channel.receive(source.snapshot())
        logger.info("bound to %r", source)

    def unbind_source(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.channel.sink = None
        self.source = None

    # --- properties ----------------------------------------------------
    def export_properties(self) -> dict[str, Observable[bool]]:
        """User-configurable properties shown by the hosting dashboard."""

        return {SEARCH_BOX_VISIBLE: self.search_box_visible}

    def close(self) -> None:
        self.unbind_source()


__all__ = ["RobotPreferencesWidget", "SEARCH_BOX_VISIBLE"]
