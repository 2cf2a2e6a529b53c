#!/usr/bin/env python3
"""Per-repository status probe."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Tuple

from branch_manager import BranchManager
from git_config import GitConfig
from git_operations import GitManagerError
from repo_state import RepositoryStatus
from working_tree_manager import WorkingTreeManager

log = logging.getLogger(__name__)

# (flag, failure wording, check) in run order; the first failure stops the rest.
LISTING_CHECKS: Tuple[Tuple[str, str, Callable[[Path], bool]], ...] = (
    ("unstaged", "unstaged changes", WorkingTreeManager.has_unstaged),
    ("staged", "staged changes", WorkingTreeManager.has_staged),
    ("untracked", "untracked files", WorkingTreeManager.has_untracked),
)


class StatusProber:
    """Run the git checks for one repository and build its ``RepositoryStatus``."""

    @staticmethod
    def probe(repo: Path) -> RepositoryStatus:
        """Probe ``repo``; failures are recorded on the status, never raised.

        Ownership rejections and non-repositories stop immediately. A branch
        failure is recorded and the remaining checks still run. A listing
        failure stops the remaining checks. The unpushed check is best-effort.
        """
        repo = Path(repo)
        validity = GitConfig.check_validity(repo)
        if not validity.ok:
            if GitConfig.is_ownership_rejection(validity.stderr):
                log.debug("Ownership rejection for %s", repo)
                return RepositoryStatus(path=repo, error=GitConfig.fix_hint(repo))
            log.debug("Not a working tree: %s (%s)", repo, validity.message)
            return RepositoryStatus(path=repo, error="Not a valid git repository")

        branch, error = BranchManager.branch_label(repo)

        flags: Dict[str, bool] = {}
        for flag, wording, check in LISTING_CHECKS:
            try:
                flags[f"has_{flag}"] = check(repo)
            except GitManagerError as exc:
                if error:
                    error = f"{error}; {flag} check failed: {exc}"
                else:
                    error = f"Failed to check {wording}: {exc}"
                return RepositoryStatus(path=repo, branch=branch, error=error, **flags)
        flags["has_unpushed"] = WorkingTreeManager.has_unpushed(repo)

        is_clean = not error and not any(flags.values())
        return RepositoryStatus(path=repo, branch=branch, is_clean=is_clean, error=error, **flags)
