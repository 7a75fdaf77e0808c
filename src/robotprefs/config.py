from __future__ import annotations

import configparser
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from .paths import settings_file
from .tables import METADATA_PREFIXES

logger = logging.getLogger(__name__)

SECTION = "robotprefs"
ENV_PREFIX = "ROBOTPREFS_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class WidgetConfig:
    """Settings for the preferences editor."""

    search_box_visible: bool = True
    metadata_prefixes: tuple[str, ...] = METADATA_PREFIXES
    source: str = "local"
    table: str = "/Preferences"
    server: str = "localhost"
    client_name: str = "robotprefs"
    poll_ms: int = 50
    seed: Path | None = field(default=None)


def _coerce(name: str, raw: str) -> Any:
    if name == "search_box_visible":
        lower = raw.strip().lower()
        if lower in _TRUE:
            return True
        if lower in _FALSE:
            return False
        raise ValueError(f"invalid boolean for {name}: {raw!r}")
    if name == "metadata_prefixes":
        return tuple(p.strip() for p in raw.split(",") if p.strip())
    if name == "poll_ms":
        value = int(raw)
        if value <= 0:
            raise ValueError(f"{name} must be positive")
        return value
    if name == "seed":
        return Path(raw).expanduser() if raw.strip() else None
    if name == "source":
        value = raw.strip().lower()
        if value not in {"local", "nt"}:
            raise ValueError(f"unknown source {raw!r}; expected local or nt")
        return value
    return raw.strip()


def _apply(cfg: WidgetConfig, values: Mapping[str, str], origin: str) -> WidgetConfig:
    known = {f.name for f in fields(WidgetConfig)}
    changes: dict[str, Any] = {}
    for name, raw in values.items():
        if name not in known:
            logger.warning("Unknown setting %s in %s", name, origin)
            continue
        try:
            changes[name] = _coerce(name, raw)
        except ValueError as exc:
            logger.warning("Ignoring setting %s from %s: %s", name, origin, exc)
    return replace(cfg, **changes)


def read_ini(path: Path) -> dict[str, str]:
    parser = configparser.ConfigParser()
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error as exc:
        logger.warning("Failed to read config %s: %s", path, exc)
        return {}
    if not parser.has_section(SECTION):
        return {}
    return dict(parser.items(SECTION))


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    environ = os.environ if environ is None else environ
    out: dict[str, str] = {}
    for f in fields(WidgetConfig):
        key = ENV_PREFIX + f.name.upper()
        if key in environ:
            out[f.name] = environ[key]
    return out


def load(
    path: Path | None = None, *, environ: Mapping[str, str] | None = None
) -> WidgetConfig:
    """Return settings from the INI file overlaid with environment variables."""

    path = path or settings_file()
    cfg = WidgetConfig()
    if path.exists():
        cfg = _apply(cfg, read_ini(path), str(path))
    return _apply(cfg, env_overrides(environ), "environment")


def init_config(path: Path | None = None) -> Path:
    """Create a commented settings file if none exists."""

    path = path or settings_file()
    if path.exists():
        return path
    path.parent.mkdir(parents=True, exist_ok=True)
    defaults = WidgetConfig()
    lines = [f"[{SECTION}]"]
    lines.append(f"# search_box_visible = {str(defaults.search_box_visible).lower()}")
    lines.append(f"# metadata_prefixes = {','.join(defaults.metadata_prefixes)}")
    lines.append(f"# source = {defaults.source}")
    lines.append(f"# table = {defaults.table}")
    lines.append(f"# server = {defaults.server}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


__all__ = ["WidgetConfig", "env_overrides", "init_config", "load", "read_ini"]
