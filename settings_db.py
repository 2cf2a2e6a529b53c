"""Optional SQLite store for scan defaults (worker count and skip paths)."""
import os
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import List, Optional

SETTINGS_ENV = "GIT_STATUS_SCAN_DB"

SCHEMA = "CREATE TABLE IF NOT EXISTS settings (key TEXT PRIMARY KEY, value TEXT NOT NULL)"


def default_db_path() -> Path:
    env_path = os.environ.get(SETTINGS_ENV)
    if env_path:
        return Path(env_path)
    return Path.home() / ".git-status-scan" / "settings.db"


class SettingsDB:
    """Scan defaults kept as key/value rows.

    With ``create=False`` nothing is written: a missing database simply yields
    no stored values, and an existing one is opened read-only.
    """

    def __init__(self, db_path: Path | None = None, *, create: bool = True) -> None:
        self.db_path = Path(db_path).expanduser() if db_path else default_db_path().expanduser()
        self.create = create
        if create:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            with closing(sqlite3.connect(self.db_path)) as conn, conn:
                conn.execute(SCHEMA)

    def _connect(self) -> Optional[sqlite3.Connection]:
        if self.create:
            return sqlite3.connect(self.db_path)
        if not self.db_path.is_file():
            return None
        return sqlite3.connect(f"{self.db_path.resolve().as_uri()}?mode=ro", uri=True)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        conn = self._connect()
        if conn is None:
            return default
        with closing(conn):
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        return row[0] if row else default

    def set(self, key: str, value: str) -> None:
        """Upsert ``key``; only allowed on a store opened with ``create=True``."""
        if not self.create:
            raise PermissionError(f"settings store {self.db_path} is read-only")
        with closing(sqlite3.connect(self.db_path)) as conn, conn:
            conn.execute(
                "INSERT INTO settings (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def get_workers(self) -> Optional[int]:
        """Get the saved worker count, ignoring unusable values."""
        value = self.get("workers")
        if value is None or not value.isdigit() or int(value) < 1:
            return None
        return int(value)

    def set_workers(self, workers: int) -> None:
        self.set("workers", str(workers))

    def get_skip_paths(self) -> Optional[List[str]]:
        """Get the saved deny-list (one substring per line)."""
        value = self.get("skip_paths")
        if value is None:
            return None
        return [line for line in value.split("\n") if line]

    def set_skip_paths(self, paths: List[str]) -> None:
        self.set("skip_paths", "\n".join(paths))
