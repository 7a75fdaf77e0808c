from __future__ import annotations

import json
from pathlib import Path

from ..errors import BackendLoadError
from . import register_backend
from .base import BaseBackend


@register_backend
class JsonBackend(BaseBackend):
    """JSON seed files."""

    suffixes = (".json",)

    def read(self, path: Path) -> object:
        raw = path.read_text(encoding="utf-8")
        if raw.strip() == "":
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise BackendLoadError(str(exc)) from exc
