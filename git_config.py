"""Git configuration management: ownership trust and ``safe.directory``."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from git_operations import GitManagerError, GitOperations, GitResult

log = logging.getLogger(__name__)

OWNERSHIP_MARKER = "dubious ownership"


class GitConfig:
    """Handles git configuration operations."""

    @staticmethod
    def is_ownership_rejection(text: str) -> bool:
        """Classify git error output as an ownership/trust rejection.

        Git reports no structured code for this, so the English message is
        matched. Keep every such check behind this function.
        """
        return OWNERSHIP_MARKER in text.lower()

    @staticmethod
    def safe_directory_path(repo: Path) -> str:
        return str(repo).replace("\\", "/")

    @staticmethod
    def fix_hint(repo: Path) -> str:
        return (
            "Git ownership issue - run: git config --global --add safe.directory "
            + GitConfig.safe_directory_path(repo)
        )

    @staticmethod
    def check_validity(repo: Path) -> GitResult:
        """Confirm ``repo`` is a git working tree."""
        return GitOperations.run(["rev-parse", "--git-dir"], cwd=repo)

    @staticmethod
    def has_ownership_issue(repo: Path) -> bool:
        result = GitConfig.check_validity(repo)
        return not result.ok and GitConfig.is_ownership_rejection(result.stderr)

    @staticmethod
    def trusted_directories(cwd: Path) -> List[str]:
        """Return the ``safe.directory`` entries of the global config."""
        result = GitOperations.run(["config", "--global", "--get-all", "safe.directory"], cwd=cwd)
        # Exit 1 just means the key is not set.
        if result.returncode == 1:
            return []
        if not result.ok:
            raise GitManagerError(f"Could not read safe.directory: {result.message}")
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    @staticmethod
    def add_safe_directory(repo: Path) -> bool:
        """Register ``repo`` as trusted in the global config.

        Returns False when the path was already listed, so re-running never
        duplicates the entry.
        """
        entry = GitConfig.safe_directory_path(repo)
        if entry in GitConfig.trusted_directories(repo.parent):
            log.debug("Already trusted: %s", entry)
            return False
        GitOperations.run_git(["config", "--global", "--add", "safe.directory", entry], cwd=repo.parent)
        return True
