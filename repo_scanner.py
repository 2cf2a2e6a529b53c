#!/usr/bin/env python3
"""Repository discovery."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from path_filter import GIT_DIR_NAME, Decision, PathFilter

log = logging.getLogger(__name__)


def _walk_error(exc: OSError) -> None:
    # Unreadable or vanished entries must not abort the scan.
    log.debug("Skipping (error accessing): %s (%s)", exc.filename, exc.strerror or exc)


class RepoScanner:
    """Walk a base directory and collect every git checkout below it."""

    @staticmethod
    def locate(root: Path, path_filter: Optional[PathFilter] = None) -> List[Path]:
        """Return the sorted list of directories that directly contain a ``.git`` directory.

        The walk is top-down and sorted, never enters ``.git`` directories and
        never follows directory symlinks. Directories rejected by ``path_filter``
        are pruned. The filter is not applied to ``root`` itself.
        """
        path_filter = path_filter or PathFilter()
        root = Path(root).expanduser().resolve()
        if root.name == GIT_DIR_NAME:
            log.debug("Found .git directory: %s", root)
            return [root.parent] if root.is_dir() else []

        repos: List[Path] = []
        for dirpath, dirnames, _filenames in os.walk(root, topdown=True, onerror=_walk_error):
            log.debug("Visiting: %s", dirpath)
            dirnames.sort()
            keep: List[str] = []
            for name in dirnames:
                child = os.path.join(dirpath, name)
                decision = path_filter.decide(child)
                if decision is Decision.REPOSITORY_MARKER:
                    log.debug("Found .git directory: %s", child)
                    repos.append(Path(dirpath))
                elif decision is Decision.DESCEND:
                    keep.append(name)
            dirnames[:] = keep

        return sorted(repos)
