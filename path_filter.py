#!/usr/bin/env python3
"""Decide which directories the repository walk descends into."""
from __future__ import annotations

import enum
import logging
import os
from typing import Iterable, Tuple

log = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"
SKIP_NAMES: Tuple[str, ...] = ("node_modules", "vendor", "bin", "obj")
DEFAULT_DENY_LIST: Tuple[str, ...] = (
    "\\Windows\\",
    "\\Program Files\\",
    "\\Program Files (x86)\\",
)


class Decision(enum.Enum):
    DESCEND = "descend"
    SKIP = "skip"
    REPOSITORY_MARKER = "repository-marker"


class PathFilter:
    """Pure predicate over directory paths.

    A ``.git`` directory is reported as a repository marker and is never
    descended into. Hidden directories, dependency and build output folders,
    and any path containing a deny-list substring are skipped.
    """

    def __init__(
        self,
        skip_names: Iterable[str] = SKIP_NAMES,
        deny_list: Iterable[str] = DEFAULT_DENY_LIST,
    ) -> None:
        self.skip_names = frozenset(skip_names)
        self.deny_list = tuple(deny_list)

    def decide(self, path: str | os.PathLike[str]) -> Decision:
        path_str = os.fspath(path)
        base = os.path.basename(path_str.rstrip("/\\")) or path_str
        if base == GIT_DIR_NAME:
            return Decision.REPOSITORY_MARKER
        if base.startswith(".") or base in self.skip_names:
            log.debug("Skipping directory: %s", path_str)
            return Decision.SKIP
        # Trailing separator so a deny entry like "\Windows\" also matches the folder itself.
        candidate = path_str if path_str.endswith(("/", "\\")) else path_str + os.sep
        for fragment in self.deny_list:
            if fragment and fragment in candidate:
                log.debug("Skipping denied path (%s): %s", fragment, path_str)
                return Decision.SKIP
        return Decision.DESCEND
