"""
Keyboard navigation over the presented result list, as a pure reducer.

    outcome = reduce_key(state, NavKey.ARROW_DOWN, result_count=len(results))
    state = outcome.state
    if outcome.selected is not None:
        emit(results[outcome.selected])

No UI binding lives here; widgets translate their key events to NavKey.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

__all__ = ["NO_HIGHLIGHT", "NavKey", "PanelState", "NavOutcome", "reduce_key"]

NO_HIGHLIGHT = -1


class NavKey(str, Enum):
    ARROW_DOWN = "ArrowDown"
    ARROW_UP   = "ArrowUp"
    ENTER      = "Enter"
    ESCAPE     = "Escape"


@dataclass(frozen=True)
class PanelState:
    """Visibility of the result panel and the highlighted row (-1 = none)."""
    is_open:     bool = False
    highlighted: int  = NO_HIGHLIGHT

    def closed(self) -> "PanelState":
        return PanelState(is_open=False, highlighted=NO_HIGHLIGHT)


@dataclass(frozen=True)
class NavOutcome:
    """New panel state plus the index chosen with Enter, if any."""
    state:    PanelState
    selected: Optional[int] = None


def reduce_key(state: PanelState, key: NavKey, result_count: int) -> NavOutcome:
    """
    Apply one navigation key.

    Every key is ignored while the panel is closed or the list is empty.
    ArrowDown / ArrowUp wrap around; ArrowUp with nothing highlighted jumps
    to the last row.  Enter selects the highlighted row and closes the panel.
    Escape closes the panel and drops the highlight.
    """
    key = NavKey(key)
    if not state.is_open or result_count <= 0:
        return NavOutcome(state=state)

    current = state.highlighted if 0 <= state.highlighted < result_count else NO_HIGHLIGHT

    if key is NavKey.ARROW_DOWN:
        return NavOutcome(state=replace(state, highlighted=(current + 1) % result_count))

    if key is NavKey.ARROW_UP:
        if current == NO_HIGHLIGHT:
            return NavOutcome(state=replace(state, highlighted=result_count - 1))
        return NavOutcome(state=replace(state, highlighted=(current - 1) % result_count))

    if key is NavKey.ENTER:
        if current == NO_HIGHLIGHT:
            return NavOutcome(state=state)
        return NavOutcome(state=state.closed(), selected=current)

    # Escape
    return NavOutcome(state=state.closed())
