"""
TaxonomyResolver — path lookup, breadcrumb synthesis and category filtering.

Usage::

    resolver = TaxonomyResolver()
    node = resolver.resolve("/categories/security")          # CategoryNode | None
    trail = resolver.breadcrumbs("/categories/security/x-y")  # Home › Security › X Y
    subset = resolver.filter_by_category(records, "/emergency/forensics")

Filtering policy
────────────────
/categories/<cat>             exact (case-insensitive) category equality
/categories/<cat>/<sub>[/…]   matches_subcategory() on the joined trailing segments
/emergency                    any record with a priority (or the emergency category)
/emergency/<area>[/…]         as above, narrowed by matches_subcategory() on the trailing segments
anything else                 records returned unchanged

Records carry no subcategory attribute, so the deeper paths rely on the
substring heuristic in matches_subcategory().  It is kept behind that one
function so an explicit subcategory field can replace it later.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from script_catalog.catalog.models import Category, ScriptRecord

from .config import CATEGORIES_NAMESPACE, EMERGENCY_NAMESPACE
from .models import HOME_NAME, HOME_PATH, Breadcrumb, CategoryNode
from .tree import TaxonomyStore, default_store

__all__ = [
    "TaxonomyResolver",
    "matches_subcategory",
    "path_segments",
    "slug_to_name",
]

logger = logging.getLogger(__name__)


def path_segments(path: str) -> list[str]:
    """Split a route into its non-empty segments."""
    return [part for part in (path or "").split("/") if part]


def slug_to_name(slug: str) -> str:
    """'zzz-unknown' → 'Zzz Unknown' (first letter of each hyphen token upper-cased)."""
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))


def matches_subcategory(record: ScriptRecord, token: str) -> bool:
    """
    Heuristic subcategory membership: *token* is a substring of any tag or
    of the title (case-insensitive).
    """
    needle = token.lower()
    if not needle:
        return False
    return (
        any(needle in tag.lower() for tag in record.tags)
        or needle in record.title.lower()
    )


class TaxonomyResolver:
    """Answers path questions against a TaxonomyStore (default: NAVIGATION_MENU)."""

    def __init__(self, store: Optional[TaxonomyStore] = None) -> None:
        self._store = store or default_store()

    @property
    def store(self) -> TaxonomyStore:
        return self._store

    # ── Lookup ────────────────────────────────────────────────────────────

    def resolve(self, path: str) -> Optional[CategoryNode]:
        """
        Exact lookup of *path*.

        Returns:
            The CategoryNode, the root for "" and "/", or None when the path
            is not part of the tree.  Never raises.
        """
        return self._store.get(path)

    def category_name(self, path: str) -> str:
        """Display name for *path*, falling back to the slug of its last segment."""
        node = self.resolve(path)
        if node is not None:
            return node.name
        parts = path_segments(path)
        if not parts:
            return HOME_NAME
        return slug_to_name(parts[-1])

    # ── Breadcrumbs ───────────────────────────────────────────────────────

    def breadcrumbs(self, path: str) -> list[Breadcrumb]:
        """
        Home-first trail for *path*.

        Each progressively extended prefix is resolved; unknown prefixes get a
        slug-derived name so a trail is produced for any route.  The bare
        /categories namespace has no node of its own and is skipped.
        """
        trail = [Breadcrumb(name=HOME_NAME, path=HOME_PATH)]
        current = ""
        for index, part in enumerate(path_segments(path)):
            current += f"/{part}"
            if index == 0 and part == CATEGORIES_NAMESPACE:
                continue
            node = self.resolve(current)
            name = node.name if node is not None else slug_to_name(part)
            trail.append(Breadcrumb(name=name, path=current))
        return trail

    # ── Record filtering ──────────────────────────────────────────────────

    def filter_by_category(
        self,
        records: Iterable[ScriptRecord],
        path: str,
    ) -> list[ScriptRecord]:
        """Return the records that belong under *path* (order preserved)."""
        records = list(records)
        parts = path_segments(path)
        if not parts:
            return records

        namespace, rest = parts[0], parts[1:]
        if namespace == EMERGENCY_NAMESPACE:
            token = "-".join(rest)
            matched = [r for r in records if self._in_emergency(r, token)]
        elif namespace == CATEGORIES_NAMESPACE and rest:
            matched = [r for r in records if self._in_category(r, rest)]
        else:
            return records

        logger.debug("filter_by_category(%s): %d / %d", path, len(matched), len(records))
        return matched

    @staticmethod
    def _in_category(record: ScriptRecord, rest: list[str]) -> bool:
        if len(rest) == 1:
            return record.category.value == rest[0].lower()
        return matches_subcategory(record, "-".join(rest[1:]))

    @staticmethod
    def _in_emergency(record: ScriptRecord, token: str) -> bool:
        in_emergency_set = record.priority is not None or record.category is Category.EMERGENCY
        if not token:
            return in_emergency_set
        # Deeper emergency areas narrow the emergency set by tag or title
        return in_emergency_set and matches_subcategory(record, token)
