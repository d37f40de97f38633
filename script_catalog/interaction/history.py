"""
RecentSearchLog — bounded, de-duplicated, most-recent-first query history.

The log is written through to an injected KeyValueStore under a fixed key.
Missing or unreadable persisted state reads as an empty log; store write
failures are logged and the in-memory log stays authoritative.
"""

import json
import logging
from typing import Optional

from script_catalog.exceptions import StoreError
from script_catalog.store.db import KeyValueStore, MemoryKeyValueStore

__all__ = ["HISTORY_KEY", "HISTORY_CAPACITY", "RecentSearchLog"]

logger = logging.getLogger(__name__)

HISTORY_KEY      = "recent-searches"
HISTORY_CAPACITY = 5


class RecentSearchLog:
    """
    Attributes
    ──────────
    entries  — distinct terms, newest first, at most `capacity` long
    capacity — fixed maximum length
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        key: str = HISTORY_KEY,
        capacity: int = HISTORY_CAPACITY,
    ) -> None:
        self._store    = store if store is not None else MemoryKeyValueStore()
        self._key      = key
        self.capacity  = capacity
        self._entries: list[str] = self._read()

    # ── Persistence ───────────────────────────────────────────────────────

    def _read(self) -> list[str]:
        try:
            raw = self._store.get(self._key)
        except StoreError as exc:
            logger.warning("Recent searches unavailable, starting empty: %s", exc)
            return []
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding corrupt recent-search state under %r", self._key)
            return []
        if not isinstance(data, list) or not all(isinstance(t, str) for t in data):
            logger.warning("Discarding malformed recent-search state under %r", self._key)
            return []
        # Dedupe and cap again in case the stored list was edited by hand
        entries: list[str] = []
        for term in data:
            if term and term not in entries:
                entries.append(term)
        return entries[: self.capacity]

    def _write(self) -> None:
        try:
            self._store.set(self._key, json.dumps(self._entries))
        except StoreError as exc:
            logger.warning("Could not persist recent searches: %s", exc)

    # ── Public API ────────────────────────────────────────────────────────

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def add(self, term: str) -> list[str]:
        """
        Record an explicitly submitted *term* (trimmed; blanks are ignored).

        An existing term moves to the front; otherwise it is prepended and
        the oldest entry beyond `capacity` is dropped.
        """
        term = term.strip()
        if not term:
            return self.entries
        if term in self._entries:
            self._entries.remove(term)
        self._entries.insert(0, term)
        del self._entries[self.capacity:]
        self._write()
        logger.debug("Recent searches: %s", self._entries)
        return self.entries

    def clear(self) -> None:
        self._entries = []
        self._write()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))
