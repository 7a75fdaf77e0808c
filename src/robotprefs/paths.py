from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir as _uc, user_log_dir as _ul

APP_NAME = "robotprefs"


def _app_name(default: str) -> str:
    return os.getenv("ROBOTPREFS_APP_NAME", default)


def user_config_dir(app_name: str = APP_NAME) -> Path:
    return Path(_uc(appname=_app_name(app_name))).resolve()


def user_log_dir(app_name: str = APP_NAME) -> Path:
    return Path(_ul(appname=_app_name(app_name))).resolve()


def settings_file(app_name: str = APP_NAME) -> Path:
    """Return the INI file holding the widget settings."""

    env = os.getenv("ROBOTPREFS_CONFIG")
    if env:
        return Path(env).expanduser().resolve()
    return user_config_dir(app_name) / "settings.ini"


__all__ = ["APP_NAME", "settings_file", "user_config_dir", "user_log_dir"]
