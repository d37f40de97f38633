"""Split field text into matching / non-matching spans for display."""

import re

from .models import HighlightSpan

__all__ = ["highlight", "join_spans"]


def highlight(text: str, query: str) -> list[HighlightSpan]:
    """
    Mark every non-overlapping, case-insensitive occurrence of *query* in *text*.

    The query is escaped, so regex metacharacters match literally.  Original
    casing is kept in the emitted spans, and joining the span texts gives
    back *text* exactly.  A blank query yields one non-matching span.
    """
    if not query.strip():
        return [HighlightSpan(text=text, is_match=False)]

    pattern = re.compile(re.escape(query), re.IGNORECASE)
    spans: list[HighlightSpan] = []
    last = 0
    for match in pattern.finditer(text):
        start, end = match.span()
        if start > last:
            spans.append(HighlightSpan(text=text[last:start], is_match=False))
        spans.append(HighlightSpan(text=match.group(0), is_match=True))
        last = end
    if last < len(text):
        spans.append(HighlightSpan(text=text[last:], is_match=False))
    return spans


def join_spans(spans, marker: str = "[{}]") -> str:
    """Render spans as plain text, wrapping matches with *marker* (CLI output)."""
    return "".join(marker.format(s.text) if s.is_match else s.text for s in spans)
