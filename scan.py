#!/usr/bin/env python3
"""Find git repositories under a directory and report which ones are dirty."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dispatcher import dispatch
from git_operations import GitManagerError
from repo_scanner import RepoScanner
from reporter import export_csv, filter_dirty, render_table, summary_line
from scan_config import (
    ScanConfig,
    add_common_arguments,
    configure_logging,
    open_settings,
    positive_int,
    resolve_config,
    save_settings,
)
from status_prober import StatusProber

USAGE = """\
Usage: git-status-scan [--debug] [--dirty-only] [--output filename.csv] [--workers N] <directory_to_scan>
Example: git-status-scan ~/src
Example: git-status-scan --debug ~/src
Example: git-status-scan --dirty-only ~/src
Example: git-status-scan --output results.csv ~/src"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scan a directory tree for git repositories and report uncommitted or unpushed work."
    )
    add_common_arguments(parser)
    parser.add_argument(
        "--dirty-only",
        action="store_true",
        help="Show only repositories with uncommitted changes",
    )
    parser.add_argument(
        "--output",
        metavar="FILE",
        help="Save results to CSV file (e.g., --output results.csv)",
    )
    parser.add_argument(
        "--workers",
        type=positive_int,
        default=None,
        help="Number of repositories probed in parallel (default: saved setting or 8)",
    )
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Store --workers and --skip-path as defaults for later runs",
    )
    return parser


def run_scan(root: Path, config: ScanConfig) -> int:
    print(f"Scanning for git repositories in: {root}")
    if config.dirty_only:
        print("Showing only repositories with uncommitted changes...")
    if config.output:
        print(f"Results will be saved to: {config.output}")
    print("This may take a while depending on the size of your drive...")
    print()

    repos = RepoScanner.locate(root, config.path_filter())
    if not repos:
        print("No git repositories found.")
        return 0

    print(f"Found {len(repos)} git repositories:\n")
    results = dispatch(repos, StatusProber.probe, workers=config.workers)
    results.sort(key=lambda status: status.path)
    if config.dirty_only:
        results = filter_dirty(results)

    for line in render_table(results):
        print(line)

    if config.output:
        try:
            export_csv(results, config.output)
        except GitManagerError as exc:
            print(f"Error saving to CSV: {exc}")
        else:
            print(f"Results saved to: {config.output}")

    print()
    print(summary_line(results, dirty_only=config.dirty_only))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.root:
        print(USAGE)
        return 1

    configure_logging(args.debug)
    settings = open_settings(args.settings_db, save=args.save_settings)
    config = resolve_config(args, settings)
    if args.save_settings and not save_settings(settings, config):
        print("Could not save settings; continuing with the given options.")
    return run_scan(Path(args.root).expanduser().resolve(), config)


if __name__ == "__main__":
    sys.exit(main())
