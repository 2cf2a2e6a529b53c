#!/usr/bin/env python3
"""Shared repository status model."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List


@dataclass(frozen=True)
class RepositoryStatus:
    path: Path
    branch: str = "unknown"
    has_unstaged: bool = False
    has_staged: bool = False
    has_untracked: bool = False
    has_unpushed: bool = False
    is_clean: bool = False
    error: str = ""

    def __post_init__(self) -> None:
        if self.is_clean and (self.error or self.changes):
            raise ValueError(f"{self.path}: a repository with errors or changes cannot be clean")

    @property
    def changes(self) -> List[str]:
        flags = [
            ("unstaged", self.has_unstaged),
            ("staged", self.has_staged),
            ("untracked", self.has_untracked),
            ("unpushed", self.has_unpushed),
        ]
        return [name for name, present in flags if present]

    @property
    def is_dirty(self) -> bool:
        return not self.error and not self.is_clean

    @property
    def status_label(self) -> str:
        if self.error:
            return "Error"
        return "Clean" if self.is_clean else "Dirty"
