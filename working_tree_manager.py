#!/usr/bin/env python3
"""Working tree checks."""
from __future__ import annotations

import logging
from pathlib import Path

from git_operations import GitOperations

log = logging.getLogger(__name__)

# rev-list exits 128 when @{u} cannot be resolved (no upstream configured).
NO_UPSTREAM_EXIT_CODE = 128


class WorkingTreeManager:
    """Helpers for dirty-state checks. Listing failures raise ``GitManagerError``."""

    @staticmethod
    def has_unstaged(repo: Path) -> bool:
        return bool(GitOperations.run_git(["diff", "--name-only"], cwd=repo).strip())

    @staticmethod
    def has_staged(repo: Path) -> bool:
        return bool(GitOperations.run_git(["diff", "--cached", "--name-only"], cwd=repo).strip())

    @staticmethod
    def has_untracked(repo: Path) -> bool:
        return bool(
            GitOperations.run_git(["ls-files", "--others", "--exclude-standard"], cwd=repo).strip()
        )

    @staticmethod
    def has_unpushed(repo: Path) -> bool:
        """Best-effort check for commits not on the upstream; never raises.

        Without an upstream every commit on HEAD counts as unpushed.
        """
        result = GitOperations.run(["rev-list", "--count", "@{u}..HEAD"], cwd=repo)
        if result.ok:
            return _count(result.stdout) > 0
        if result.returncode == NO_UPSTREAM_EXIT_CODE:
            total = GitOperations.run(["rev-list", "--count", "HEAD"], cwd=repo)
            if total.ok:
                return _count(total.stdout) > 0
            log.debug("Failed to count commits in %s: %s", repo, total.message)
            return False
        log.debug("Failed to check unpushed commits in %s: %s", repo, result.message)
        return False


def _count(text: str) -> int:
    try:
        return int(text.strip() or "0")
    except ValueError:
        log.debug("Unexpected rev-list output: %r", text)
        return 0
