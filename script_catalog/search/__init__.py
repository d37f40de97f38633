"""
search — pure ranking engine and highlighting.

Public API
──────────
SearchQuery        — immutable request (text, filters, sort, cap)
SortMode           — relevance | downloads | rating | newest | alphabetical
SearchResult       — ranked record + highlight spans
HighlightSpan      — (text, is_match) piece of a field
search()           — match → sort → truncate → highlight
highlight()        — span-splitting of a single field
group_by_category  — results grouped by category label
"""

from script_catalog.search.engine import (
    MIN_QUERY_LENGTH,
    apply_filters,
    group_by_category,
    matches,
    os_compatible,
    search,
    sort_records,
)
from script_catalog.search.highlight import highlight, join_spans
from script_catalog.search.models import (
    ALL,
    DEFAULT_LIMIT,
    HighlightSpan,
    SearchQuery,
    SearchResult,
    SortMode,
)

__all__ = [
    "ALL",
    "DEFAULT_LIMIT",
    "MIN_QUERY_LENGTH",
    "HighlightSpan",
    "SearchQuery",
    "SearchResult",
    "SortMode",
    "apply_filters",
    "group_by_category",
    "highlight",
    "join_spans",
    "matches",
    "os_compatible",
    "search",
    "sort_records",
]
