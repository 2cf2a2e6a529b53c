#!/usr/bin/env python3
"""Branch label resolution."""
from __future__ import annotations

from pathlib import Path
from typing import Tuple

from git_operations import GitOperations

# `git branch --show-current` historically exits 1 when HEAD is detached.
DETACHED_EXIT_CODE = 1


class BranchManager:
    """Utilities for naming the checked-out branch."""

    @staticmethod
    def branch_label(repo: Path) -> Tuple[str, str]:
        """Return ``(label, error)`` for the current checkout.

        The label is the branch name, ``detached HEAD (<hash>)``, ``detached
        HEAD`` or ``unknown``. ``error`` is empty unless resolution failed.
        """
        result = GitOperations.run(["branch", "--show-current"], cwd=repo)
        name = result.stdout.strip()
        if result.ok and name:
            return name, ""

        # Current git exits 0 with no output on a detached HEAD.
        detached = result.returncode == DETACHED_EXIT_CODE or (result.ok and not name)
        if not detached:
            return "unknown", f"Branch issue: {result.message}"

        commit = GitOperations.run(["rev-parse", "--short", "HEAD"], cwd=repo)
        if commit.ok and commit.stdout.strip():
            return f"detached HEAD ({commit.stdout.strip()})", ""
        return "detached HEAD", f"Branch issue: {commit.message}"
