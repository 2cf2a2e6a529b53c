import logging
import subprocess
from pathlib import Path
from typing import Callable, Iterator

import pytest

from git_config import GitConfig
from git_operations import GitResult

GLOBAL_CONFIG = """\
[user]
\tname = Test User
\temail = test@example.com
[init]
\tdefaultBranch = main
[commit]
\tgpgsign = false
"""


def git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=str(repo),
        check=True,
        text=True,
        capture_output=True,
    )
    return result.stdout


def init_repo(path: Path, *, commit: bool = True) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    git(path, "init", "-q")
    if commit:
        (path / "README.md").write_text("hello\n")
        git(path, "add", "README.md")
        git(path, "commit", "-q", "-m", "initial")
    return path


@pytest.fixture(autouse=True)
def git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point git at a throwaway global config and the scanner at a throwaway settings db."""
    config = tmp_path / "gitconfig"
    config.write_text(GLOBAL_CONFIG)
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_TERMINAL_PROMPT", "0")
    # Keep git from discovering a repository above the test directory.
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.resolve()))
    monkeypatch.setenv("GIT_STATUS_SCAN_DB", str(tmp_path / "settings.db"))
    yield config
    # The CLIs attach a stdout handler bound to the captured stream; drop it.
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(logging.WARNING)


@pytest.fixture
def pushed_repo(tmp_path: Path) -> Callable[[Path], Path]:
    """Create a repository with one commit pushed to a bare remote outside the scan tree."""

    def make(path: Path) -> Path:
        remote = tmp_path / "remotes" / f"{path.name}.git"
        remote.mkdir(parents=True)
        git(remote, "init", "-q", "--bare")
        init_repo(path)
        git(path, "remote", "add", "origin", str(remote))
        git(path, "push", "-q", "-u", "origin", "main")
        return path

    return make


@pytest.fixture
def reject_ownership(monkeypatch: pytest.MonkeyPatch) -> Callable[[Path], None]:
    """Make git's validity check fail with an ownership error for chosen paths until they are trusted."""
    rejected: set = set()
    real_check = GitConfig.check_validity

    def fake_check(repo: Path) -> GitResult:
        repo = Path(repo)
        entry = GitConfig.safe_directory_path(repo)
        if repo in rejected and entry not in GitConfig.trusted_directories(repo.parent):
            return GitResult(
                128,
                "",
                f"fatal: detected dubious ownership in repository at '{entry}'\n"
                "To add an exception for this directory, call:\n\n"
                f"\tgit config --global --add safe.directory {entry}\n",
            )
        return real_check(repo)

    monkeypatch.setattr(GitConfig, "check_validity", staticmethod(fake_check))
    return rejected.add
