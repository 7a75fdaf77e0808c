from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from functools import partial
from pathlib import Path

from . import config as cfg
from .backends import load_snapshot
from .codec import encode_for_display
from .errors import RobotPrefsError
from .ordering import item_sort_key
from .paths import settings_file, user_config_dir, user_log_dir
from .sources import DataSource, NetworkTableSource
from .tables import (
    NtcoreTableInstance,
    TableInstance,
    get_default_instance,
    is_metadata,
    set_default_instance,
)

logger = logging.getLogger(__name__)


def build_source(config: cfg.WidgetConfig) -> DataSource:
    """Create the data source described by *config*.

    ``local`` uses the process-wide in-memory table, optionally seeded from
    ``config.seed``; ``nt`` connects to a NetworkTables server.
    """
    instance: TableInstance
    if config.source == "nt":
        nt = NtcoreTableInstance()
        nt.start_client(config.server, config.client_name)
        instance = nt
        set_default_instance(instance)
    else:
        instance = get_default_instance()
        if config.seed is not None:
            table = instance.get_table(config.table)
            for key, value in load_snapshot(config.seed).items():
                table.put(key, value)
    return NetworkTableSource(config.table, instance)


def _config_from_args(args: argparse.Namespace) -> cfg.WidgetConfig:
    config = cfg.load(Path(args.config) if args.config else None)
    changes = {}
    for name in ("source", "table", "server"):
        value = getattr(args, name, None)
        if value is not None:
            changes[name] = value
    if getattr(args, "seed", None):
        changes["seed"] = Path(args.seed)
    if getattr(args, "no_search", False):
        changes["search_box_visible"] = False
    return replace(config, **changes)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_gui(args: argparse.Namespace) -> int:  # pragma: no cover - opens a window
    from .ui.tk import launch

    config = _config_from_args(args)
    try:
        source = build_source(config)
    except RobotPrefsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    launch(config, source)
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    try:
        snapshot = load_snapshot(Path(args.file))
    except (RobotPrefsError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    hidden = partial(is_metadata, prefixes=config.metadata_prefixes)
    for key in sorted(snapshot, key=item_sort_key):
        if hidden(key):
            continue
        value = snapshot[key]
        print(f"{key} = {encode_for_display(value)} ({value.type.value})")
    return 0


def cmd_paths(args: argparse.Namespace) -> int:
    print(f"config-dir: {user_config_dir()}")
    print(f"settings: {settings_file()}")
    print(f"log-dir: {user_log_dir()}")
    return 0


def cmd_init_config(args: argparse.Namespace) -> int:
    path = cfg.init_config(Path(args.config) if args.config else None)
    print(path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="robotprefs", description="Robot preferences editor")
    parser.add_argument("--config", help="settings file (default: user config dir)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command")

    gui = sub.add_parser("gui", help="open the preferences editor")
    gui.add_argument("--source", choices=["local", "nt"])
    gui.add_argument("--table", help="table path, e.g. /Preferences")
    gui.add_argument("--server", help="NetworkTables server address")
    gui.add_argument("--seed", help="YAML or JSON file seeding a local table")
    gui.add_argument("--no-search", action="store_true", help="hide the search box")
    gui.set_defaults(func=cmd_gui)

    show = sub.add_parser("show", help="print the entries of a seed file")
    show.add_argument("file")
    show.set_defaults(func=cmd_show)

    paths = sub.add_parser("paths", help="print configuration locations")
    paths.set_defaults(func=cmd_paths)

    init = sub.add_parser("init-config", help="write a commented settings file")
    init.set_defaults(func=cmd_init_config)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s:%(name)s:%(message)s")
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 1
    try:
        return int(func(args))
    except SystemExit as exc:  # pragma: no cover - argparse may raise
        return int(exc.code)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
