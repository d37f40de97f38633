"""
interaction — stateful orchestration between input events and the engine.

Public API
──────────
SurfaceConfig       — per-surface cap, debounce window, sort modes, toggles
HEADER_SURFACE      — compact header dropdown preset
EXPANDED_SURFACE    — full dropdown preset (filters + recent searches)
RESULTS_PAGE_SURFACE— results page preset
PanelState / NavKey — navigation state and keys
reduce_key()        — pure keyboard reducer
RecentSearchLog     — bounded, de-duplicated submission history
SearchController    — debounce + version-tagged evaluation driver
"""

from script_catalog.interaction.config import (
    EXPANDED_SURFACE,
    HEADER_SURFACE,
    LIVE_DEBOUNCE_MS,
    PAGE_DEBOUNCE_MS,
    RESULTS_PAGE_SURFACE,
    SurfaceConfig,
)
from script_catalog.interaction.controller import (
    ControllerState,
    OutcomeStatus,
    SearchController,
    SearchOutcome,
    SelectionEvent,
)
from script_catalog.interaction.history import HISTORY_CAPACITY, HISTORY_KEY, RecentSearchLog
from script_catalog.interaction.navigation import (
    NO_HIGHLIGHT,
    NavKey,
    NavOutcome,
    PanelState,
    reduce_key,
)

__all__ = [
    "EXPANDED_SURFACE",
    "HEADER_SURFACE",
    "LIVE_DEBOUNCE_MS",
    "PAGE_DEBOUNCE_MS",
    "RESULTS_PAGE_SURFACE",
    "SurfaceConfig",
    "ControllerState",
    "OutcomeStatus",
    "SearchController",
    "SearchOutcome",
    "SelectionEvent",
    "HISTORY_CAPACITY",
    "HISTORY_KEY",
    "RecentSearchLog",
    "NO_HIGHLIGHT",
    "NavKey",
    "NavOutcome",
    "PanelState",
    "reduce_key",
]
