#!/usr/bin/env python3
"""Find repositories git rejects for dubious ownership and mark them as safe."""
from __future__ import annotations

import argparse
import enum
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from git_config import GitConfig
from git_operations import GitManagerError
from repo_scanner import RepoScanner
from scan_config import add_common_arguments, configure_logging, open_settings, resolve_config

USAGE = """\
Usage: git-fix-ownership [--debug] <directory_to_scan>
This will find git repositories with ownership issues and fix them."""


class FixResult(enum.Enum):
    NO_ISSUE = "no issue"
    FIXED = "fixed"
    FAILED = "failed"


@dataclass(frozen=True)
class FixOutcome:
    path: Path
    result: FixResult
    detail: str = ""


def fix_repository(repo: Path) -> FixOutcome:
    """Trust ``repo`` if git rejects it for ownership; safe to run repeatedly."""
    if not GitConfig.has_ownership_issue(repo):
        return FixOutcome(repo, FixResult.NO_ISSUE)
    print(f"Fixing ownership for: {repo}")
    try:
        added = GitConfig.add_safe_directory(repo)
    except GitManagerError as exc:
        return FixOutcome(repo, FixResult.FAILED, str(exc))
    if not added:
        # Listed already but git still rejects it (e.g. a differently spelled path).
        return FixOutcome(repo, FixResult.FAILED, "already listed in safe.directory")
    return FixOutcome(repo, FixResult.FIXED)


def fix_repositories(repos: Iterable[Path], debug: bool = False) -> List[FixOutcome]:
    outcomes: List[FixOutcome] = []
    for repo in repos:
        outcome = fix_repository(repo)
        if outcome.result is FixResult.FIXED:
            print(f"✅ Fixed: {repo}")
        elif outcome.result is FixResult.FAILED:
            print(f"❌ Failed to fix: {repo} ({outcome.detail})")
        elif debug:
            print(f"✅ No ownership issue: {repo}")
        outcomes.append(outcome)
    return outcomes


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Register git repositories with ownership issues as safe.directory entries."
    )
    add_common_arguments(parser)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.root:
        print(USAGE)
        return 1

    configure_logging(args.debug)
    config = resolve_config(args, open_settings(args.settings_db))
    root = Path(args.root).expanduser().resolve()

    print(f"Scanning for git repositories in: {root}")
    print("This will automatically fix ownership issues...")
    print()

    repos = RepoScanner.locate(root, config.path_filter())
    if not repos:
        print("No git repositories found.")
        return 0

    print(f"Found {len(repos)} git repositories. Checking for ownership issues...\n")
    outcomes = fix_repositories(repos, debug=config.debug)
    fixed = sum(1 for outcome in outcomes if outcome.result is FixResult.FIXED)
    print(f"\nFixed ownership for {fixed} repositories.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
