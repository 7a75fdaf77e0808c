from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path

from ..errors import BackendLoadError
from ..values import PreferencesSnapshot


def _flatten(src: Mapping[str, object], prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in src.items():
        key = f"{prefix}{k}"
        if isinstance(v, Mapping):
            out.update(_flatten(v, key + "/"))
        else:
            out[key] = v
    return out


class BaseBackend(ABC):
    """Abstract seed file loader."""

    suffixes: tuple[str, ...] = ()

    @abstractmethod
    def read(self, path: Path) -> object:
        """Return the parsed document at *path*."""

    def load(self, path: Path) -> PreferencesSnapshot:
        path = Path(path)
        if not path.exists():
            raise BackendLoadError(f"{path} does not exist")
        data = self.read(path)
        if data is None:
            return PreferencesSnapshot()
        if not isinstance(data, Mapping):
            raise BackendLoadError(f"Root of {path.name} must be a mapping")
        try:
            # nested mappings become sub-table keys, e.g. drive/kP
            return PreferencesSnapshot(_flatten(data))
        except (TypeError, OverflowError) as exc:
            raise BackendLoadError(f"{path.name}: {exc}") from exc
