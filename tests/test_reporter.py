"""Tests for table rendering, CSV export and the summary line."""

from __future__ import annotations

import csv
from pathlib import Path

import pytest

from git_operations import GitManagerError
from reporter import (
    CSV_HEADER,
    display_branch,
    display_path,
    export_csv,
    filter_dirty,
    render_table,
    report_row,
    summary_line,
)
from repo_state import RepositoryStatus

CWD = Path("/home/dev")


def _clean(name: str) -> RepositoryStatus:
    return RepositoryStatus(path=CWD / name, branch="main", is_clean=True)


def _dirty(name: str) -> RepositoryStatus:
    return RepositoryStatus(path=CWD / name, branch="feature", has_untracked=True, has_unpushed=True)


def _error(name: str) -> RepositoryStatus:
    return RepositoryStatus(path=CWD / name, error="Not a valid git repository")


def test_display_path_is_relative_to_cwd() -> None:
    assert display_path(CWD / "src" / "app", CWD) == "src/app"
    assert display_path(CWD, CWD) == str(CWD)
    assert display_path(Path("/opt/tool"), CWD) == "../../opt/tool"


def test_display_path_elides_from_the_left() -> None:
    long_name = "x" * 60
    shown = display_path(CWD / long_name, CWD)
    assert len(shown) == 42
    assert shown == "..." + long_name[-39:]


def test_display_branch_truncates() -> None:
    assert display_branch("main") == "main"
    assert display_branch("feature/very-long-branch") == "feature/very-l..."
    assert len(display_branch("a" * 30)) == 17


def test_report_row_changes_column() -> None:
    assert report_row(_clean("a"), CWD).changes == "-"
    assert report_row(_dirty("b"), CWD).changes == "untracked, unpushed"
    assert report_row(_error("c"), CWD).changes == "Not a valid git repository"


def test_render_table_lines() -> None:
    lines = render_table([_clean("a"), _dirty("b"), _error("c")], CWD)
    assert lines[0].startswith("Repository")
    assert set(lines[1]) == {"-"}
    assert "✅ Clean" in lines[2] and lines[2].startswith("a ")
    assert "⚠️  Dirty " in lines[3] and lines[3].endswith("untracked, unpushed")
    assert "❌ Error" in lines[4] and lines[4].endswith("Not a valid git repository")


def test_summary_counts() -> None:
    statuses = [_clean("a"), _clean("b"), _dirty("c"), _error("d")]
    assert summary_line(statuses) == (
        "Summary: 2 clean repositories, 1 repositories with uncommitted changes, 1 repositories with errors"
    )


def test_error_with_partial_flags_counts_only_as_error() -> None:
    partial = RepositoryStatus(path=CWD / "p", branch="main", has_unstaged=True, error="Failed to check staged changes: boom")
    assert summary_line([partial, _dirty("d")]) == (
        "Summary: 0 clean repositories, 1 repositories with uncommitted changes, 1 repositories with errors"
    )


def test_dirty_only_filters_and_omits_clean_count() -> None:
    statuses = [_clean("a"), _clean("b"), _dirty("c"), _dirty("d"), _dirty("e")]
    shown = filter_dirty(statuses)
    lines = render_table(shown, CWD)
    assert len(lines) - 2 == 3
    summary = summary_line(shown, dirty_only=True)
    assert summary == "Summary: 3 repositories with uncommitted changes, 0 repositories with errors"
    assert "clean" not in summary


def test_dirty_only_keeps_errors() -> None:
    assert filter_dirty([_clean("a"), _error("b")]) == [_error("b")]


def test_export_matches_rendered_table(tmp_path: Path) -> None:
    statuses = [_clean("a"), _dirty("b"), _error("c")]
    out = tmp_path / "results.csv"
    export_csv(statuses, out, CWD)

    with open(out, newline="", encoding="utf-8") as fh:
        reader = csv.reader(fh)
        header = next(reader)
        rows = list(reader)

    assert header == CSV_HEADER
    assert len(rows) == len(statuses)
    lines = render_table(statuses, CWD)[2:]
    for row, line, status in zip(rows, lines, statuses):
        assert line.startswith(row[0] + " ")
        assert row[2] in line
        assert row[0] == report_row(status, CWD).repository
        assert row[2] == status.status_label


def test_export_failure_raises(tmp_path: Path) -> None:
    with pytest.raises(GitManagerError):
        export_csv([_clean("a")], tmp_path / "missing-dir" / "out.csv", CWD)
