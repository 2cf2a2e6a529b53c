#!/usr/bin/env python3
"""Scan configuration and logging setup shared by the command-line tools."""
from __future__ import annotations

import argparse
import logging
import os
import sqlite3
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from dispatcher import DEFAULT_WORKERS
from path_filter import DEFAULT_DENY_LIST, PathFilter
from settings_db import SETTINGS_ENV, SettingsDB

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanConfig:
    debug: bool = False
    dirty_only: bool = False
    output: Optional[Path] = None
    workers: int = DEFAULT_WORKERS
    skip_paths: Tuple[str, ...] = DEFAULT_DENY_LIST

    def path_filter(self) -> PathFilter:
        return PathFilter(deny_list=self.skip_paths)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="[%(levelname)s] %(message)s",
        stream=sys.stdout,
        force=True,
    )


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return value


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("root", nargs="?", help="Directory to scan for git repositories")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument(
        "--skip-path",
        dest="skip_paths",
        action="append",
        metavar="SUBSTR",
        help="Skip directories whose path contains SUBSTR (repeatable; replaces the default deny-list)",
    )
    parser.add_argument(
        "--settings-db",
        type=Path,
        default=None,
        help="Settings database (default: $GIT_STATUS_SCAN_DB or ~/.git-status-scan/settings.db)",
    )


def open_settings(db_path: Optional[Path], save: bool = False) -> Optional[SettingsDB]:
    """Open the settings store, or return None when it cannot be used.

    The database is only created when a location was chosen (``--settings-db``
    or ``$GIT_STATUS_SCAN_DB``) or settings are being saved. Otherwise an
    existing database is read and nothing is written.
    """
    create = save or db_path is not None or bool(os.environ.get(SETTINGS_ENV))
    try:
        return SettingsDB(db_path, create=create)
    except (OSError, sqlite3.Error) as exc:
        log.debug("Settings store unavailable, using defaults: %s", exc)
        return None


def _stored_values(settings: Optional[SettingsDB]) -> Tuple[Optional[int], Optional[List[str]]]:
    if settings is None:
        return None, None
    try:
        return settings.get_workers(), settings.get_skip_paths()
    except (OSError, sqlite3.Error) as exc:
        log.debug("Could not read %s, using defaults: %s", settings.db_path, exc)
        return None, None


def resolve_config(args: argparse.Namespace, settings: Optional[SettingsDB]) -> ScanConfig:
    """Combine CLI flags, stored settings and built-in defaults, in that order."""
    stored_workers, stored_skip_paths = _stored_values(settings)
    workers = getattr(args, "workers", None) or stored_workers or DEFAULT_WORKERS
    skip_paths = args.skip_paths
    if skip_paths is None:
        skip_paths = stored_skip_paths
    if skip_paths is None:
        skip_paths = list(DEFAULT_DENY_LIST)
    output = getattr(args, "output", None)
    return ScanConfig(
        debug=args.debug,
        dirty_only=getattr(args, "dirty_only", False),
        output=Path(output) if output else None,
        workers=workers,
        skip_paths=tuple(skip_paths),
    )


def save_settings(settings: Optional[SettingsDB], config: ScanConfig) -> bool:
    if settings is None:
        return False
    try:
        settings.set_workers(config.workers)
        settings.set_skip_paths(list(config.skip_paths))
    except (OSError, sqlite3.Error) as exc:
        log.debug("Could not save settings to %s: %s", settings.db_path, exc)
        return False
    log.debug("Saved settings to %s", settings.db_path)
    return True
