"""Per-surface configuration for search controllers."""

from dataclasses import dataclass, field

from script_catalog.exceptions import InvalidQueryError
from script_catalog.search.models import SortMode

__all__ = [
    "LIVE_DEBOUNCE_MS",
    "PAGE_DEBOUNCE_MS",
    "SurfaceConfig",
    "HEADER_SURFACE",
    "EXPANDED_SURFACE",
    "RESULTS_PAGE_SURFACE",
]

LIVE_DEBOUNCE_MS = 150   # suggestion dropdowns
PAGE_DEBOUNCE_MS = 500   # full results page


@dataclass(frozen=True)
class SurfaceConfig:
    """
    Fixed options for one search surface.

    placeholder   — hint text for the input box
    limit         — result cap passed to every query
    debounce_ms   — single debounce window for this surface
    sort_modes    — sort modes the surface exposes (first one is the default)
    show_history  — whether the recent-search list is displayed
    show_filters  — whether OS / category / sort selectors are displayed
    """
    placeholder:  str                   = "Search for scripts, commands, or solutions..."
    limit:        int                   = 10
    debounce_ms:  int                   = LIVE_DEBOUNCE_MS
    sort_modes:   tuple[SortMode, ...]  = field(default_factory=lambda: tuple(SortMode))
    show_history: bool                  = False
    show_filters: bool                  = False

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise InvalidQueryError(f"limit must be >= 0, got {self.limit}")
        if self.debounce_ms < 0:
            raise InvalidQueryError(f"debounce_ms must be >= 0, got {self.debounce_ms}")
        modes = tuple(SortMode(m) for m in self.sort_modes)
        if not modes:
            raise InvalidQueryError("a surface needs at least one sort mode")
        object.__setattr__(self, "sort_modes", modes)

    @property
    def default_sort(self) -> SortMode:
        return self.sort_modes[0]

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


HEADER_SURFACE = SurfaceConfig(
    placeholder="Quick search scripts...",
    limit=5,
    sort_modes=(SortMode.RELEVANCE,),
)

EXPANDED_SURFACE = SurfaceConfig(
    placeholder="Search scripts, commands, tools, or solutions...",
    limit=15,
    show_history=True,
    show_filters=True,
)

RESULTS_PAGE_SURFACE = SurfaceConfig(
    placeholder="Search scripts...",
    limit=50,
    debounce_ms=PAGE_DEBOUNCE_MS,
    sort_modes=(
        SortMode.RELEVANCE,
        SortMode.DOWNLOADS,
        SortMode.RATING,
        SortMode.NEWEST,
        SortMode.ALPHABETICAL,
    ),
    show_filters=True,
)
