"""
Unit tests for script_catalog/interaction/history.py

Coverage plan
─────────────
add()        → 5 tests (dedup move-to-front, cap, blank ignored, trimming,
                        write-through)
load         → 4 tests (absent, corrupt JSON, wrong shape, store read error)
persistence  → 2 tests (survives re-open on SQLite, write error keeps memory)
clear()      → 1 test
─────────────────────────────────────────────────────────────────
Total        = 12 tests
"""

import json

import pytest

from script_catalog.exceptions import StoreError
from script_catalog.store.db import KeyValueStore, MemoryKeyValueStore


class _BrokenStore(KeyValueStore):
    """Store whose every call fails."""

    def get(self, key):
        raise StoreError("disk on fire")

    def set(self, key, value):
        raise StoreError("disk on fire")

    def delete(self, key):
        raise StoreError("disk on fire")


@pytest.fixture
def log():
    from script_catalog.interaction.history import RecentSearchLog
    return RecentSearchLog(MemoryKeyValueStore())


class TestAdd:

    def test_resubmission_moves_to_front(self, log):
        for term in ("alpha", "beta", "alpha"):
            log.add(term)
        assert log.entries == ["alpha", "beta"]

    def test_keeps_five_most_recent(self, log):
        for term in ("t1", "t2", "t3", "t4", "t5", "t6"):
            log.add(term)
        assert log.entries == ["t6", "t5", "t4", "t3", "t2"]

    def test_blank_term_ignored(self, log):
        log.add("   ")
        assert log.entries == []

    def test_term_is_trimmed(self, log):
        log.add("  cron ")
        log.add("cron")
        assert log.entries == ["cron"]

    def test_writes_through_to_store(self):
        from script_catalog.interaction.history import HISTORY_KEY, RecentSearchLog
        store = MemoryKeyValueStore()
        RecentSearchLog(store).add("docker")
        assert json.loads(store.get(HISTORY_KEY)) == ["docker"]


class TestLoad:

    def test_absent_key_is_empty(self, log):
        assert log.entries == []

    def test_corrupt_json_is_empty(self):
        from script_catalog.interaction.history import HISTORY_KEY, RecentSearchLog
        store = MemoryKeyValueStore({HISTORY_KEY: "[not json"})
        assert RecentSearchLog(store).entries == []

    def test_wrong_shape_is_empty(self):
        from script_catalog.interaction.history import HISTORY_KEY, RecentSearchLog
        store = MemoryKeyValueStore({HISTORY_KEY: json.dumps({"alpha": 1})})
        assert RecentSearchLog(store).entries == []

    def test_store_read_error_is_empty(self):
        from script_catalog.interaction.history import RecentSearchLog
        assert RecentSearchLog(_BrokenStore()).entries == []


class TestPersistence:

    def test_survives_reopen_on_sqlite(self, tmp_path):
        from script_catalog.interaction.history import RecentSearchLog
        from script_catalog.store.db import SqliteKeyValueStore
        db = str(tmp_path / "history.db")
        RecentSearchLog(SqliteKeyValueStore(db)).add("firewall")
        assert RecentSearchLog(SqliteKeyValueStore(db)).entries == ["firewall"]

    def test_write_error_keeps_in_memory_state(self):
        from script_catalog.interaction.history import RecentSearchLog
        log = RecentSearchLog(_BrokenStore())
        log.add("backup")
        assert log.entries == ["backup"]


class TestClear:

    def test_clear_empties_and_persists(self):
        from script_catalog.interaction.history import HISTORY_KEY, RecentSearchLog
        store = MemoryKeyValueStore()
        log = RecentSearchLog(store)
        log.add("a1")
        log.clear()
        assert log.entries == []
        assert json.loads(store.get(HISTORY_KEY)) == []
