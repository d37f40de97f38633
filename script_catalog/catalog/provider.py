"""
Catalog providers — the external data collaborator of the query engine.

The engine never owns catalog data; it asks a provider for the full,
current list of ScriptRecord values each time an evaluation runs.

Usage::

    provider = JsonCatalogProvider("~/scripts.json")
    records = await provider.fetch()

Record dicts use snake_case keys; the camelCase keys written by the web
front-end (authorName, createdAt, updatedAt, emergencyLevel, code) are
accepted as aliases.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional

from script_catalog.exceptions import CatalogFormatError, CatalogProviderError

from .models import Category, OperatingSystem, Priority, ScriptRecord

__all__ = [
    "AbstractCatalogProvider",
    "StaticCatalogProvider",
    "JsonCatalogProvider",
    "SAMPLE_CATALOG_PATH",
    "record_from_dict",
    "record_to_dict",
]

logger = logging.getLogger(__name__)

# Sample catalog bundled with this package
SAMPLE_CATALOG_PATH = Path(__file__).parent / "data" / "sample_catalog.json"

# snake_case key → accepted camelCase alias
_ALIASES = {
    "author_name":   "authorName",
    "author_handle": "authorUsername",
    "created_at":    "createdAt",
    "updated_at":    "updatedAt",
    "priority":      "emergencyLevel",
    "content":       "code",
}


class AbstractCatalogProvider(ABC):
    """
    Supplies the full list of catalog records on demand.

    fetch() is a coroutine so that a remote provider can be swapped in
    without changing the controller.  Implementations apply their own
    timeouts and raise CatalogProviderError on failure.
    """

    @abstractmethod
    async def fetch(self) -> list[ScriptRecord]:
        """
        Return every record currently in the catalog.

        Raises:
            CatalogProviderError: The data source is unavailable or invalid.
        """


class StaticCatalogProvider(AbstractCatalogProvider):
    """Serves a fixed in-memory list of records."""

    def __init__(self, records: Iterable[ScriptRecord]) -> None:
        self._records = list(records)

    async def fetch(self) -> list[ScriptRecord]:
        return list(self._records)


class JsonCatalogProvider(AbstractCatalogProvider):
    """
    Reads the catalog from a JSON file holding a list of record dicts.

    The file is parsed once and cached; call reload() to pick up changes.
    """

    def __init__(self, path: str | Path = SAMPLE_CATALOG_PATH) -> None:
        self._path = Path(path).expanduser()
        self._records: Optional[list[ScriptRecord]] = None

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[ScriptRecord]:
        """Synchronously parse the catalog file (cached after the first call)."""
        if self._records is None:
            self._records = self._read()
            logger.info("Loaded %d catalog records from %s", len(self._records), self._path)
        return list(self._records)

    def reload(self) -> list[ScriptRecord]:
        """Drop the cached records and parse the file again."""
        self._records = None
        return self.load()

    async def fetch(self) -> list[ScriptRecord]:
        return self.load()

    def _read(self) -> list[ScriptRecord]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogProviderError(f"Cannot read catalog {self._path}: {exc}") from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CatalogFormatError(f"Catalog {self._path} is not valid JSON: {exc}") from exc
        if isinstance(data, dict):
            data = data.get("scripts", [])
        if not isinstance(data, list):
            raise CatalogFormatError(f"Catalog {self._path} must hold a list of records")
        return [record_from_dict(item) for item in data]


# ── Dict conversion ───────────────────────────────────────────────────────────


def _pick(data: dict[str, Any], key: str, default: Any = None) -> Any:
    if key in data:
        return data[key]
    alias = _ALIASES.get(key)
    if alias and alias in data:
        return data[alias]
    return default


def _parse_dt(value: Any) -> Optional[datetime]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError as exc:
            raise CatalogFormatError(f"Invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def record_from_dict(data: dict[str, Any]) -> ScriptRecord:
    """
    Build a ScriptRecord from a plain dict.

    Raises:
        CatalogFormatError: Required key missing or enum value unknown.
    """
    if not isinstance(data, dict):
        raise CatalogFormatError(f"Catalog record must be an object, got {type(data).__name__}")
    try:
        priority = _pick(data, "priority")
        return ScriptRecord(
            id=str(data["id"]),
            title=str(data["title"]),
            description=str(data.get("description", "")),
            os=OperatingSystem(data["os"]),
            category=Category(data["category"]),
            tags=frozenset(str(t) for t in (data.get("tags") or [])),
            rating=float(data.get("rating", 0.0)),
            downloads=int(data.get("downloads", 0)),
            author_name=str(_pick(data, "author_name", "")),
            author_handle=str(_pick(data, "author_handle", "")),
            created_at=_parse_dt(_pick(data, "created_at")),
            updated_at=_parse_dt(_pick(data, "updated_at")),
            content=str(_pick(data, "content", "")),
            priority=Priority(priority) if priority else None,
        )
    except KeyError as exc:
        raise CatalogFormatError(f"Catalog record missing key {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise CatalogFormatError(f"Invalid catalog record {data.get('id')!r}: {exc}") from exc


def record_to_dict(record: ScriptRecord) -> dict[str, Any]:
    """Inverse of record_from_dict (snake_case keys, ISO-8601 timestamps)."""
    return {
        "id":            record.id,
        "title":         record.title,
        "description":   record.description,
        "os":            record.os.value,
        "category":      record.category.value,
        "tags":          record.sorted_tags,
        "rating":        record.rating,
        "downloads":     record.downloads,
        "author_name":   record.author_name,
        "author_handle": record.author_handle,
        "created_at":    record.created_at.isoformat() if record.created_at else None,
        "updated_at":    record.updated_at.isoformat() if record.updated_at else None,
        "content":       record.content,
        "priority":      record.priority.value if record.priority else None,
    }
