from __future__ import annotations

from pathlib import Path

import yaml

from ..errors import BackendLoadError
from . import register_backend
from .base import BaseBackend


@register_backend
class YamlBackend(BaseBackend):
    """YAML seed files."""

    suffixes = (".yaml", ".yml")

    def read(self, path: Path) -> object:
        raw = path.read_text(encoding="utf-8")
        if raw.strip() == "":
            return None
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise BackendLoadError(str(exc)) from exc
