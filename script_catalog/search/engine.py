"""
Ranking engine — pure functions from (records, query) to ranked results.

Pipeline (in order):
  1. activation   — trimmed text shorter than MIN_QUERY_LENGTH → no results
  2. filters      — OS and category, applied as AND-conditions
  3. matching     — case-insensitive substring over title, description,
                    tags, category label and OS label
  4. sorting      — by SortMode; every ordering is stable
  5. truncation   — the result cap is applied last
  6. highlighting — spans for title, description and each tag

Nothing here mutates its inputs or keeps state between calls.
"""

from __future__ import annotations

import logging
from typing import Iterable

from script_catalog.catalog.models import OperatingSystem, ScriptRecord

from .highlight import highlight
from .models import ALL, SearchQuery, SearchResult, SortMode

__all__ = [
    "MIN_QUERY_LENGTH",
    "os_compatible",
    "apply_filters",
    "matches",
    "sort_records",
    "search",
    "group_by_category",
]

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


# ── Predicates ────────────────────────────────────────────────────────────────


def os_compatible(record_os: OperatingSystem, os_filter: str) -> bool:
    """
    True if a record tagged *record_os* passes *os_filter*.

    cross-platform records pass every concrete OS filter; the
    cross-platform filter itself only admits cross-platform records.
    """
    if os_filter == ALL:
        return True
    if record_os.value == os_filter:
        return True
    return (
        record_os is OperatingSystem.CROSS_PLATFORM
        and os_filter != OperatingSystem.CROSS_PLATFORM.value
    )


def apply_filters(records: Iterable[ScriptRecord], query: SearchQuery) -> list[ScriptRecord]:
    """Apply the query's OS and category filters, preserving order."""
    return [
        r for r in records
        if os_compatible(r.os, query.os)
        and (query.category == ALL or r.category.value == query.category)
    ]


def _title_hit(record: ScriptRecord, needle: str) -> bool:
    return needle in record.title.lower()


def _tag_hit(record: ScriptRecord, needle: str) -> bool:
    return any(needle in tag.lower() for tag in record.tags)


def matches(record: ScriptRecord, term: str) -> bool:
    """Case-insensitive substring test of *term* against the searchable fields."""
    needle = term.lower()
    return (
        _title_hit(record, needle)
        or needle in record.description.lower()
        or _tag_hit(record, needle)
        or needle in record.category.value.lower()
        or needle in record.os.value.lower()
    )


# ── Sorting ───────────────────────────────────────────────────────────────────


def sort_records(
    records: Iterable[ScriptRecord],
    mode: SortMode,
    term: str = "",
) -> list[ScriptRecord]:
    """
    Return *records* ordered by *mode*.

    relevance compares (title hit, tag hit, downloads) lexicographically,
    hits first and downloads descending.  sorted() is stable, so records
    tied on every key keep their input order in all modes.
    """
    records = list(records)
    needle = term.lower()

    if mode is SortMode.RELEVANCE:
        return sorted(
            records,
            key=lambda r: (not _title_hit(r, needle), not _tag_hit(r, needle), -r.downloads),
        )
    if mode is SortMode.DOWNLOADS:
        return sorted(records, key=lambda r: -r.downloads)
    if mode is SortMode.RATING:
        return sorted(records, key=lambda r: -r.rating)
    if mode is SortMode.NEWEST:
        # reverse=True keeps equal timestamps in input order
        return sorted(records, key=lambda r: r.updated_at, reverse=True)
    if mode is SortMode.ALPHABETICAL:
        return sorted(records, key=lambda r: r.title)
    raise AssertionError(f"unhandled sort mode {mode!r}")


# ── Entry point ───────────────────────────────────────────────────────────────


def _to_result(record: ScriptRecord, rank: int, term: str) -> SearchResult:
    return SearchResult(
        record=record,
        rank=rank,
        title=tuple(highlight(record.title, term)),
        description=tuple(highlight(record.description, term)),
        tags=tuple((tag, tuple(highlight(tag, term))) for tag in record.sorted_tags),
    )


def search(records: Iterable[ScriptRecord], query: SearchQuery) -> list[SearchResult]:
    """
    Match, rank, truncate and highlight *records* for *query*.

    Returns an empty list when the trimmed query text is shorter than
    MIN_QUERY_LENGTH; that is "no query", not an error.
    """
    term = query.term
    if len(term) < MIN_QUERY_LENGTH:
        return []

    candidates = apply_filters(records, query)
    hits = [r for r in candidates if matches(r, term)]
    ordered = sort_records(hits, query.sort, term)[: query.limit]
    logger.debug(
        "search(%r, sort=%s): %d candidates, %d hits, %d returned",
        term, query.sort.value, len(candidates), len(hits), len(ordered),
    )
    return [_to_result(r, rank, term) for rank, r in enumerate(ordered, start=1)]


def group_by_category(results: Iterable[SearchResult]) -> dict[str, list[SearchResult]]:
    """Group results by category label, keeping first-seen category order."""
    groups: dict[str, list[SearchResult]] = {}
    for result in results:
        groups.setdefault(result.record.category.value, []).append(result)
    return groups
