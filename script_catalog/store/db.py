"""
Key-value stores backing the recent-search log.

Usage::

    store = SqliteKeyValueStore(db_path="~/.script-catalog/history.db")
    store.set("recent-searches", '["cron", "backup"]')
    raw = store.get("recent-searches")     # str | None

MemoryKeyValueStore offers the same get/set surface without touching disk
(tests, throwaway GUI sessions).
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from script_catalog.exceptions import StoreError

__all__ = ["DEFAULT_DB_PATH", "KeyValueStore", "MemoryKeyValueStore", "SqliteKeyValueStore"]

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "~/.script-catalog/history.db"

# Path to the SQL schema file bundled with this package
_SCHEMA_PATH = Path(__file__).parent / "migrations" / "schema.sql"


class KeyValueStore(ABC):
    """String → string persistence consumed by RecentSearchLog."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if *key* is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Insert or overwrite *key*."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove *key*; True if something was removed."""


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store; contents vanish with the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None


class SqliteKeyValueStore(KeyValueStore):
    """
    Key-value table in a local SQLite file.

    The database file and schema are created automatically on first open.
    All operations use context-managed connections; no persistent connection
    is kept open between calls.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path).expanduser()
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
        except (OSError, sqlite3.Error) as exc:
            raise StoreError(f"Cannot open key-value store {self._db_path}: {exc}") from exc

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ── Internal helpers ──────────────────────────────────────────────────

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        """Create tables if they don't already exist."""
        sql = _SCHEMA_PATH.read_text(encoding="utf-8")
        with self._connect() as conn:
            conn.executescript(sql)

    # ── Public API ────────────────────────────────────────────────────────

    def get(self, key: str) -> Optional[str]:
        try:
            with self._connect() as conn:
                row = conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"get({key!r}) failed: {exc}") from exc
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        now = datetime.now(tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO kv (key, value, updated_at) VALUES (?, ?, ?)",
                    (key, value, now),
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise StoreError(f"set({key!r}) failed: {exc}") from exc

    def delete(self, key: str) -> bool:
        try:
            with self._connect() as conn:
                cur = conn.execute("DELETE FROM kv WHERE key=?", (key,))
                conn.commit()
                return cur.rowcount > 0
        except sqlite3.Error as exc:
            raise StoreError(f"delete({key!r}) failed: {exc}") from exc
