"""
SearchController — debounced, version-tagged driver for one search surface.

Usage::

    controller = SearchController(provider, EXPANDED_SURFACE, history=log,
                                  on_change=render, on_select=open_script)
    controller.input("cr")
    controller.input("cron")        # restarts the debounce window
    outcome = await controller.flush()

Lifecycle
─────────
    idle ──input──▶ debouncing ──timer──▶ evaluating ──applied──▶ presenting
                        ▲                                            │
                        └──────────────────input─────────────────────┘
    presenting ──clear / Escape / Enter / submit──▶ idle

Every input bumps `version` and re-arms a single pending timer.  When the
timer fires, the evaluation for that version is started as a task; its
outcome is applied only if `version` has not moved on in the meantime.
Superseded evaluations are left to finish and their outcome is dropped.

All methods must be called from the thread running the event loop.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from script_catalog.catalog.provider import AbstractCatalogProvider
from script_catalog.exceptions import CatalogBaseError, CatalogProviderError, InvalidQueryError
from script_catalog.search.engine import MIN_QUERY_LENGTH, search
from script_catalog.search.models import ALL, SearchQuery, SearchResult, SortMode
from script_catalog.taxonomy.resolver import TaxonomyResolver

from .config import EXPANDED_SURFACE, SurfaceConfig
from .history import RecentSearchLog
from .navigation import NavKey, PanelState, reduce_key

__all__ = [
    "ControllerState",
    "OutcomeStatus",
    "SearchOutcome",
    "SelectionEvent",
    "SearchController",
]

logger = logging.getLogger(__name__)


class ControllerState(str, Enum):
    IDLE       = "idle"
    DEBOUNCING = "debouncing"
    EVALUATING = "evaluating"
    PRESENTING = "presenting"


class OutcomeStatus(str, Enum):
    OK     = "ok"
    FAILED = "failed"


@dataclass(frozen=True)
class SearchOutcome:
    """Result of one evaluation cycle, tagged with the version that started it."""
    version: int
    query:   SearchQuery
    status:  OutcomeStatus
    results: tuple[SearchResult, ...] = ()
    error:   Optional[str]            = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK


@dataclass(frozen=True)
class SelectionEvent:
    """Emitted once when the user picks a presented result with Enter."""
    record_id: str
    result:    SearchResult


class SearchController:
    """
    Attributes
    ──────────
    text          — current raw input text
    os / category — active filters ("all" when unset)
    sort          — active SortMode, always one of config.sort_modes
    category_path — taxonomy path used to pre-filter the catalog ("" = none)
    version       — monotonically increasing cycle counter
    results       — presented results (last applied successful outcome)
    error         — message of the last failed outcome, None after a success
    panel         — PanelState (open flag + highlighted row)
    state         — ControllerState
    last_outcome  — last applied SearchOutcome, or None
    """

    def __init__(
        self,
        provider: AbstractCatalogProvider,
        config: SurfaceConfig = EXPANDED_SURFACE,
        history: Optional[RecentSearchLog] = None,
        on_select: Optional[Callable[[SelectionEvent], None]] = None,
        on_change: Optional[Callable[["SearchController"], None]] = None,
        resolver: Optional[TaxonomyResolver] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._provider  = provider
        self.config     = config
        self.history    = history
        self._on_select = on_select
        self._on_change = on_change
        self._resolver  = resolver if resolver is not None else TaxonomyResolver()
        self._loop      = loop

        self.text:          str                     = ""
        self.os:            str                     = ALL
        self.category:      str                     = ALL
        self.sort:          SortMode                = config.default_sort
        self.category_path: str                     = ""
        self.version:       int                     = 0
        self.results:       list[SearchResult]      = []
        self.error:         Optional[str]           = None
        self.panel:         PanelState              = PanelState()
        self.state:         ControllerState         = ControllerState.IDLE
        self.last_outcome:  Optional[SearchOutcome] = None

        self._timer:   Optional[asyncio.TimerHandle] = None
        self._task:    Optional[asyncio.Task]        = None
        # Superseded evaluations still running; held so they finish
        self._pending: set[asyncio.Task]             = set()

    # ── Input events ──────────────────────────────────────────────────────

    def input(self, text: str) -> None:
        """Replace the query text and restart the debounce window."""
        self.text = text
        self._restart_cycle()

    def set_filters(
        self,
        os: Optional[str] = None,
        category: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> None:
        """
        Change any of the OS / category / sort selections and re-evaluate.

        Raises:
            InvalidQueryError: Unknown filter value, or a sort mode this
                surface does not enable.
        """
        new_os       = self.os if os is None else os
        new_category = self.category if category is None else category
        new_sort     = self.sort if sort is None else sort
        probe = SearchQuery(
            text=self.text, os=new_os, category=new_category,
            sort=new_sort, limit=self.config.limit,
        )
        if probe.sort not in self.config.sort_modes:
            raise InvalidQueryError(
                f"Sort mode {probe.sort.value!r} is not enabled on this surface"
            )
        self.os, self.category, self.sort = probe.os, probe.category, probe.sort
        self._restart_cycle()

    def set_category_path(self, path: str) -> None:
        """Pre-filter the catalog by taxonomy *path* before matching."""
        self.category_path = path or ""
        self._restart_cycle()

    def handle_key(self, key: NavKey) -> Optional[SelectionEvent]:
        """
        Route a navigation key through the reducer.

        Returns the SelectionEvent when Enter picked a result, else None.
        """
        outcome = reduce_key(self.panel, key, len(self.results))
        was_open = self.panel.is_open
        self.panel = outcome.state
        if was_open and not self.panel.is_open:
            self.state = ControllerState.IDLE

        event = None
        if outcome.selected is not None:
            result = self.results[outcome.selected]
            event = SelectionEvent(record_id=result.record_id, result=result)
            logger.info("Selected %s", result.record_id)
            if self._on_select is not None:
                self._on_select(event)
        self._notify()
        return event

    def submit(self) -> SearchQuery:
        """
        Explicitly submit the current text.

        Records the term in the recent-search log, abandons any pending or
        in-flight cycle and closes the panel.  Returns the submitted query
        so the caller can hand it to a results surface.
        """
        query = self._build_query()
        self._cancel_timer()
        self.version += 1
        if self.history is not None and query.term:
            self.history.add(query.term)
        logger.info("Submitted query %r", query.term)
        self.panel = self.panel.closed()
        self.state = ControllerState.IDLE
        self._notify()
        return query

    def clear(self) -> None:
        """Reset text, results and panel; in-flight results are dropped."""
        self._cancel_timer()
        self.version += 1
        self.text = ""
        self.results = []
        self.error = None
        self.panel = PanelState()
        self.state = ControllerState.IDLE
        self._notify()

    def close(self) -> None:
        """Detach from the loop: cancel the timer and any running evaluation."""
        self._cancel_timer()
        self.version += 1
        for task in list(self._pending):
            task.cancel()
        self._pending.clear()
        self._task = None

    async def flush(self) -> Optional[SearchOutcome]:
        """
        Fire a pending debounce timer now and wait for the current cycle.

        Returns the last applied outcome (None if nothing was ever applied).
        """
        if self._timer is not None:
            self._cancel_timer()
            self._start_evaluation(self.version)
        task = self._task
        if task is not None and not task.done():
            await task
        return self.last_outcome

    @property
    def recent_searches(self) -> list[str]:
        return self.history.entries if self.history is not None else []

    @property
    def selected_result(self) -> Optional[SearchResult]:
        index = self.panel.highlighted
        if 0 <= index < len(self.results):
            return self.results[index]
        return None

    # ── Cycle management ──────────────────────────────────────────────────

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _build_query(self) -> SearchQuery:
        return SearchQuery(
            text=self.text,
            os=self.os,
            category=self.category,
            sort=self.sort,
            limit=self.config.limit,
        )

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _restart_cycle(self) -> None:
        self._cancel_timer()
        self.version += 1

        if len(self.text.strip()) < MIN_QUERY_LENGTH:
            # Too short to search: nothing to wait for
            self.results = []
            self.error = None
            self.panel = self.panel.closed()
            self.state = ControllerState.IDLE
            self._notify()
            return

        version = self.version
        self.state = ControllerState.DEBOUNCING
        self._timer = self._get_loop().call_later(
            self.config.debounce_seconds, self._on_timer, version
        )
        logger.debug("v%d: debouncing %r", version, self.text)
        self._notify()

    def _on_timer(self, version: int) -> None:
        self._timer = None
        if version != self.version:
            return
        self._start_evaluation(version)

    def _start_evaluation(self, version: int) -> None:
        query = self._build_query()
        self.state = ControllerState.EVALUATING
        logger.debug("v%d: evaluating %r", version, query.term)
        task = self._get_loop().create_task(self._evaluate(version, query))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        self._task = task
        self._notify()

    async def _evaluate(self, version: int, query: SearchQuery) -> SearchOutcome:
        path = self.category_path
        try:
            records = await self._provider.fetch()
            if path:
                records = self._resolver.filter_by_category(records, path)
            results = search(records, query)
        except (CatalogProviderError, asyncio.TimeoutError) as exc:
            message = str(exc) or type(exc).__name__
            logger.warning("v%d: catalog unavailable: %s", version, message)
            outcome = SearchOutcome(version, query, OutcomeStatus.FAILED, error=message)
        except CatalogBaseError as exc:
            logger.warning("v%d: search failed: %s", version, exc)
            outcome = SearchOutcome(version, query, OutcomeStatus.FAILED, error=str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("v%d: search raised unexpectedly", version)
            message = str(exc) or type(exc).__name__
            outcome = SearchOutcome(version, query, OutcomeStatus.FAILED, error=message)
        else:
            outcome = SearchOutcome(version, query, OutcomeStatus.OK, tuple(results))
        self._apply(outcome)
        return outcome

    def _apply(self, outcome: SearchOutcome) -> bool:
        if outcome.version != self.version:
            logger.debug("v%d: dropping stale outcome (current v%d)", outcome.version, self.version)
            return False

        self.last_outcome = outcome
        if outcome.ok:
            self.results = list(outcome.results)
            self.error = None
            self.panel = PanelState(is_open=True)
            logger.debug("v%d: presenting %d result(s)", outcome.version, len(self.results))
        else:
            # Prior results stay on screen
            self.error = outcome.error
        self.state = ControllerState.PRESENTING
        self._notify()
        return True

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)
