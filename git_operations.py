#!/usr/bin/env python3
"""Git command helpers for the scanner and the ownership fixer."""
from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

log = logging.getLogger(__name__)

GIT_EXECUTABLE = "git"


class GitManagerError(Exception):
    """Raised for recoverable git-status-scan errors."""


@dataclass(frozen=True)
class GitResult:
    """Captured outcome of one git invocation."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def message(self) -> str:
        return self.stderr.strip() or self.stdout.strip() or f"exit status {self.returncode}"


class GitOperations:
    """Thin wrappers around git invocations."""

    @staticmethod
    def run(args: Sequence[str], *, cwd: Path) -> GitResult:
        """Run git and capture its output without raising on a non-zero exit.

        A missing git executable (or an unusable working directory) is reported
        as exit status 127 so callers can record it like any other failed command.
        """
        cmd = [GIT_EXECUTABLE, *args]
        log.debug("Running: %s (cwd=%s)", " ".join(cmd), cwd)
        try:
            result = subprocess.run(
                cmd,
                cwd=str(cwd),
                check=False,
                text=True,
                capture_output=True,
            )
        except OSError as exc:
            log.debug("Could not start git in %s: %s", cwd, exc)
            return GitResult(127, "", f"could not run git in {cwd}: {exc}")
        log.debug("Exit %d: %s (cwd=%s)", result.returncode, " ".join(cmd), cwd)
        return GitResult(result.returncode, result.stdout, result.stderr)

    @staticmethod
    def run_git(args: Sequence[str], *, cwd: Path) -> str:
        """Run a git command and return stdout; raise on failure."""
        result = GitOperations.run(args, cwd=cwd)
        if not result.ok:
            raise GitManagerError(f"git {' '.join(args)} failed in {cwd}: {result.message}")
        return result.stdout
