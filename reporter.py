#!/usr/bin/env python3
"""Text table, CSV export and summary for scan results."""
from __future__ import annotations

import csv
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from git_operations import GitManagerError
from repo_state import RepositoryStatus

PATH_LIMIT = 42
BRANCH_LIMIT = 17
CSV_HEADER = ["Repository", "Branch", "Status", "Changes"]
# "⚠️" is two code points, so the Dirty marker carries a second space to line up.
STATUS_MARKERS = {"Clean": "✅ Clean", "Dirty": "⚠️  Dirty", "Error": "❌ Error"}


@dataclass(frozen=True)
class ReportRow:
    repository: str
    branch: str
    status: str
    changes: str


def display_path(path: Path, cwd: Optional[Path] = None) -> str:
    """Shorten ``path`` relative to ``cwd`` and elide long values from the left."""
    cwd = cwd or Path.cwd()
    try:
        rel = os.path.relpath(path, cwd)
    except ValueError:
        # Different drive on Windows.
        rel = str(path)
    if rel == ".":
        rel = str(path)
    if len(rel) > PATH_LIMIT:
        rel = "..." + rel[-(PATH_LIMIT - 3):]
    return rel


def display_branch(branch: str) -> str:
    if len(branch) > BRANCH_LIMIT:
        return branch[: BRANCH_LIMIT - 3] + "..."
    return branch


def report_row(status: RepositoryStatus, cwd: Optional[Path] = None) -> ReportRow:
    if status.error:
        changes = status.error
    elif status.is_clean:
        changes = "-"
    else:
        changes = ", ".join(status.changes)
    return ReportRow(
        repository=display_path(status.path, cwd),
        branch=display_branch(status.branch),
        status=status.status_label,
        changes=changes,
    )


def filter_dirty(statuses: Iterable[RepositoryStatus]) -> List[RepositoryStatus]:
    """Drop repositories that are clean and error-free."""
    return [s for s in statuses if s.error or not s.is_clean]


def render_table(statuses: Iterable[RepositoryStatus], cwd: Optional[Path] = None) -> List[str]:
    lines = [
        f"{'Repository':<50} {'Branch':<20} {'Status':<10} Changes",
        "-" * 90,
    ]
    for status in statuses:
        row = report_row(status, cwd)
        label = STATUS_MARKERS[row.status]
        lines.append(f"{row.repository:<50} {row.branch:<20} {label:<10} {row.changes}")
    return lines


def summary_line(statuses: Iterable[RepositoryStatus], dirty_only: bool = False) -> str:
    statuses = list(statuses)
    errors = sum(1 for s in statuses if s.error)
    clean = sum(1 for s in statuses if s.is_clean)
    dirty = sum(1 for s in statuses if s.is_dirty)
    if dirty_only:
        return f"Summary: {dirty} repositories with uncommitted changes, {errors} repositories with errors"
    return (
        f"Summary: {clean} clean repositories, {dirty} repositories with uncommitted changes, "
        f"{errors} repositories with errors"
    )


def export_csv(statuses: Iterable[RepositoryStatus], filename: Path, cwd: Optional[Path] = None) -> None:
    """Write one row per status, using the same cells as the text table."""
    try:
        with open(filename, "w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh)
            writer.writerow(CSV_HEADER)
            for status in statuses:
                row = report_row(status, cwd)
                writer.writerow([row.repository, row.branch, row.status, row.changes])
    except OSError as exc:
        raise GitManagerError(f"failed to write CSV file {filename}: {exc}") from exc
