"""
store — key-value persistence for interaction state (recent searches).

Public API
──────────
KeyValueStore        — get / set / delete interface
SqliteKeyValueStore  — SQLite file backend
MemoryKeyValueStore  — in-process dict backend
"""

from script_catalog.store.db import (
    DEFAULT_DB_PATH,
    KeyValueStore,
    MemoryKeyValueStore,
    SqliteKeyValueStore,
)

__all__ = ["DEFAULT_DB_PATH", "KeyValueStore", "MemoryKeyValueStore", "SqliteKeyValueStore"]
