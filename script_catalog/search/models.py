"""
Data models for the search module.

SearchQuery   — one immutable user request (text + filters + sort + cap)
SortMode      — ordering applied after matching
HighlightSpan — contiguous piece of a field, flagged as matching or not
SearchResult  — ranked record with pre-computed highlight spans
"""

from dataclasses import dataclass, field
from enum import Enum

from script_catalog.catalog.models import Category, OperatingSystem, ScriptRecord
from script_catalog.exceptions import InvalidQueryError

__all__ = [
    "ALL",
    "DEFAULT_LIMIT",
    "SortMode",
    "SearchQuery",
    "HighlightSpan",
    "SearchResult",
]

# Filter value meaning "do not filter on this attribute"
ALL = "all"

DEFAULT_LIMIT = 10

_OS_VALUES       = {os.value for os in OperatingSystem}
_CATEGORY_VALUES = {c.value for c in Category}


class SortMode(str, Enum):
    RELEVANCE    = "relevance"
    DOWNLOADS    = "downloads"
    RATING       = "rating"
    NEWEST       = "newest"
    ALPHABETICAL = "alphabetical"


@dataclass(frozen=True)
class SearchQuery:
    """
    Immutable search request.  A new keystroke produces a new query.

    text      — raw user text; trimmed before matching
    os        — OperatingSystem value or "all"
    category  — Category value or "all"
    sort      — SortMode (strings are coerced)
    limit     — result cap applied after sorting; must be >= 0

    Raises:
        InvalidQueryError: negative limit, unknown sort mode or filter value.
    """
    text:     str            = ""
    os:       str            = ALL
    category: str            = ALL
    sort:     SortMode       = SortMode.RELEVANCE
    limit:    int            = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "sort", SortMode(self.sort))
        except ValueError as exc:
            raise InvalidQueryError(f"Unknown sort mode: {self.sort!r}") from exc
        if isinstance(self.os, OperatingSystem):
            object.__setattr__(self, "os", self.os.value)
        if isinstance(self.category, Category):
            object.__setattr__(self, "category", self.category.value)
        if self.os != ALL and self.os not in _OS_VALUES:
            raise InvalidQueryError(f"Unknown OS filter: {self.os!r}")
        if self.category != ALL and self.category not in _CATEGORY_VALUES:
            raise InvalidQueryError(f"Unknown category filter: {self.category!r}")
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 0:
            raise InvalidQueryError(f"Result cap must be a non-negative integer, got {self.limit!r}")

    @property
    def term(self) -> str:
        """Trimmed text used for matching and highlighting."""
        return self.text.strip()


@dataclass(frozen=True)
class HighlightSpan:
    """A piece of field text; `is_match` marks an occurrence of the query."""
    text:     str
    is_match: bool = False


@dataclass(frozen=True)
class SearchResult:
    """
    One ranked hit.

    rank        — 1-based position in the final ordering
    title       — spans for record.title
    description — spans for record.description
    tags        — (tag, spans) pairs in record.sorted_tags order
    """
    record:      ScriptRecord
    rank:        int
    title:       tuple[HighlightSpan, ...]                          = field(default_factory=tuple)
    description: tuple[HighlightSpan, ...]                          = field(default_factory=tuple)
    tags:        tuple[tuple[str, tuple[HighlightSpan, ...]], ...]  = field(default_factory=tuple)

    @property
    def record_id(self) -> str:
        return self.record.id

    def __str__(self) -> str:
        return f"#{self.rank} {self.record.title} ({self.record.id})"
