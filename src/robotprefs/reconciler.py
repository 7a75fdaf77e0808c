"""Patch the binding registry from ``(previous, current)`` snapshot pairs.

The registry is never rebuilt.  Keys that vanished lose their cell, keys
whose value changed get the new value written into the existing cell and
only keys seen for the first time get a new cell.  Editors therefore keep
their widget (and focus) across every remote update of their key.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from .errors import ReconcilerInvariantError
from .registry import BindingRegistry
from .tables import is_metadata as default_is_metadata
from .values import PreferencesSnapshot

logger = logging.getLogger(__name__)


@dataclass
class Delta:
    """Keys touched by a single reconciliation."""

    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.added or self.updated or self.removed)


class Reconciler:
    def __init__(
        self,
        registry: BindingRegistry,
        *,
        is_metadata: Callable[[str], bool] = default_is_metadata,
    ) -> None:
        self.registry = registry
        self.is_metadata = is_metadata

    def apply(
        self, previous: PreferencesSnapshot | None, current: PreferencesSnapshot
    ) -> Delta:
        delta = Delta()
        if previous is not None:
            for key in previous.as_map():
                if not current.contains_key(key) and key in self.registry:
                    self.registry.remove(key)
                    delta.removed.append(key)

        for key, value in current.changes_from(previous).items():
            if self.is_metadata(key):
                if key in self.registry:
                    # the metadata predicate changed underneath us
                    self.registry.remove(key)
                    delta.removed.append(key)
                continue
            if key in self.registry:
                try:
                    if self.registry.set(key, value):
                        delta.updated.append(key)
                except ReconcilerInvariantError as exc:
                    logger.error("%s; recreating cell", exc)
                    self.registry.remove(key)
                    self.registry.get_or_create(key, value)
                    delta.added.append(key)
            else:
                self.registry.get_or_create(key, value)
                delta.added.append(key)

        if delta:
            logger.debug(
                "reconciled: +%d ~%d -%d",
                len(delta.added),
                len(delta.updated),
                len(delta.removed),
            )
        return delta


__all__ = ["Delta", "Reconciler"]
