"""
Unit tests for script_catalog/interaction/controller.py and config.py

Every scenario runs on a fresh loop via asyncio.run with a short debounce
window so the suite stays fast.

Coverage plan
─────────────
SurfaceConfig  → 3 tests  (presets, default sort, validation)
debounce       → 3 tests  (coalescing, state transitions, short input)
cancellation   → 3 tests  (stale outcome dropped, superseded task held,
                           clear drops in-flight)
failures       → 4 tests  (provider error keeps results, timeout,
                           format error, unexpected error)
filters        → 3 tests  (disabled sort, OS filter, category path)
keyboard       → 3 tests  (select via Enter, Escape, disabled when closed)
submission     → 3 tests  (history write, pending timer cancelled,
                           typing alone leaves history untouched)
─────────────────────────────────────────────────────────────────
Total          = 22 tests
"""

import asyncio
import dataclasses

import pytest

from script_catalog.catalog.provider import AbstractCatalogProvider
from script_catalog.exceptions import CatalogProviderError

_SHORT = 0.02      # debounce window used in these tests (seconds)
_SETTLE = 0.1      # long enough for a window to elapse and a fetch to finish


def _record(rid: str, title: str, os: str = "linux", category: str = "automation",
            tags=(), downloads: int = 0):
    from script_catalog.catalog.models import Category, OperatingSystem, ScriptRecord
    return ScriptRecord(
        id=rid,
        title=title,
        description="",
        os=OperatingSystem(os),
        category=Category(category),
        tags=frozenset(tags),
        downloads=downloads,
    )


_RECORDS = [
    _record("cron-1", "Cron Jobs", downloads=10),
    _record("backup-1", "Backup Tool", tags=["cron"], downloads=500, category="backup"),
    _record("fw-1", "Firewall Tool", os="windows", category="security"),
    _record("ssh-1", "SSH Hardening Tool", category="security"),
]


class _CountingProvider(AbstractCatalogProvider):
    """Returns a fixed catalog and counts fetches; can be told to fail."""

    def __init__(self, records=_RECORDS):
        self.records = list(records)
        self.calls = 0
        self.error = None

    async def fetch(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)


class _GatedProvider(_CountingProvider):
    """The first fetch blocks until `gate` is set; later fetches return at once."""

    def __init__(self, records=_RECORDS):
        super().__init__(records)
        self.gate = None

    async def fetch(self):
        self.calls += 1
        if self.calls == 1:
            await self.gate.wait()
        return list(self.records)


def _config(**overrides):
    from script_catalog.interaction.config import EXPANDED_SURFACE
    overrides.setdefault("debounce_ms", int(_SHORT * 1000))
    return dataclasses.replace(EXPANDED_SURFACE, **overrides)


def _ids(controller) -> list[str]:
    return [r.record_id for r in controller.results]


# ─────────────────────────────────────────────────────────────────────────────
# 1. SurfaceConfig
# ─────────────────────────────────────────────────────────────────────────────

class TestSurfaceConfig:

    def test_presets(self):
        from script_catalog.interaction.config import (
            EXPANDED_SURFACE, HEADER_SURFACE, RESULTS_PAGE_SURFACE,
        )
        assert (HEADER_SURFACE.limit, HEADER_SURFACE.debounce_ms) == (5, 150)
        assert (EXPANDED_SURFACE.limit, EXPANDED_SURFACE.debounce_ms) == (15, 150)
        assert EXPANDED_SURFACE.show_history and EXPANDED_SURFACE.show_filters
        assert RESULTS_PAGE_SURFACE.debounce_ms == 500

    def test_default_sort_is_first_enabled_mode(self):
        from script_catalog.interaction.config import HEADER_SURFACE
        from script_catalog.search.models import SortMode
        assert HEADER_SURFACE.default_sort is SortMode.RELEVANCE
        assert HEADER_SURFACE.sort_modes == (SortMode.RELEVANCE,)

    def test_negative_limit_rejected(self):
        from script_catalog.exceptions import InvalidQueryError
        with pytest.raises(InvalidQueryError):
            _config(limit=-1)


# ─────────────────────────────────────────────────────────────────────────────
# 2. Debounce
# ─────────────────────────────────────────────────────────────────────────────

class TestDebounce:

    def test_rapid_inputs_coalesce_into_one_evaluation(self):
        from script_catalog.interaction.controller import SearchController

        async def scenario():
            provider = _CountingProvider()
            controller = SearchController(provider, _config())
            for text in ("cr", "cro", "cron"):
                controller.input(text)
            await asyncio.sleep(_SETTLE)
            return provider, controller

        provider, controller = asyncio.run(scenario())
        assert provider.calls == 1
        assert controller.last_outcome.query.term == "cron"
        assert _ids(controller) == ["cron-1", "backup-1"]

    def test_state_moves_through_debouncing_to_presenting(self):
        from script_catalog.interaction.controller import ControllerState, SearchController

        async def scenario():
            controller = SearchController(_CountingProvider(), _config())
            states = [controller.state]
            controller.input("cron")
            states.append(controller.state)
            await controller.flush()
            states.append(controller.state)
            return states, controller

        states, controller = asyncio.run(scenario())
        assert states == [
            ControllerState.IDLE, ControllerState.DEBOUNCING, ControllerState.PRESENTING,
        ]
        assert controller.panel.is_open

    def test_input_below_two_characters_never_evaluates(self):
        from script_catalog.interaction.controller import ControllerState, SearchController

        async def scenario():
            provider = _CountingProvider()
            controller = SearchController(provider, _config())
            controller.input("c")
            await asyncio.sleep(_SETTLE)
            return provider, controller

        provider, controller = asyncio.run(scenario())
        assert provider.calls == 0
        assert controller.results == []
        assert controller.state is ControllerState.IDLE


# ─────────────────────────────────────────────────────────────────────────────
# 3. Cancellation
# ─────────────────────────────────────────────────────────────────────────────

class TestCancellation:

    def test_slow_superseded_evaluation_is_discarded(self):
        from script_catalog.interaction.controller import SearchController

        async def scenario():
            provider = _GatedProvider()
            provider.gate = asyncio.Event()
            controller = SearchController(provider, _config(debounce_ms=0))

            controller.input("cron")             # v1: blocks in fetch
            await asyncio.sleep(_SHORT)
            controller.input("firewall")         # v2: completes first
            await asyncio.sleep(_SHORT)
            presented_first = _ids(controller)

            provider.gate.set()                  # v1 finishes late
            await asyncio.sleep(_SHORT)
            return provider, controller, presented_first

        provider, controller, presented_first = asyncio.run(scenario())
        assert provider.calls == 2
        assert presented_first == ["fw-1"]
        assert _ids(controller) == ["fw-1"]
        assert controller.last_outcome.query.term == "firewall"

    def test_superseded_evaluation_is_held_until_it_finishes(self):
        from script_catalog.interaction.controller import SearchController

        async def scenario():
            provider = _GatedProvider()
            provider.gate = asyncio.Event()
            controller = SearchController(provider, _config(debounce_ms=0))
            controller.input("cron")
            await asyncio.sleep(_SHORT)
            controller.input("firewall")
            await asyncio.sleep(_SHORT)
            held = len(controller._pending)
            provider.gate.set()
            await asyncio.sleep(_SHORT)
            return held, len(controller._pending), provider

        held, remaining, provider = asyncio.run(scenario())
        assert held == 1
        assert remaining == 0
        assert provider.calls == 2

    def test_clear_drops_in_flight_result(self):
        from script_catalog.interaction.controller import ControllerState, SearchController

        async def scenario():
            provider = _GatedProvider()
            provider.gate = asyncio.Event()
            controller = SearchController(provider, _config(debounce_ms=0))
            controller.input("cron")
            await asyncio.sleep(_SHORT)
            controller.clear()
            provider.gate.set()
            await asyncio.sleep(_SHORT)
            return controller

        controller = asyncio.run(scenario())
        assert controller.results == []
        assert controller.text == ""
        assert controller.state is ControllerState.IDLE


# ─────────────────────────────────────────────────────────────────────────────
# 4. Provider failures
# ─────────────────────────────────────────────────────────────────────────────

class TestFailures:

    def test_provider_error_keeps_prior_results(self):
        from script_catalog.interaction.controller import OutcomeStatus, SearchController

        async def scenario():
            provider = _CountingProvider()
            controller = SearchController(provider, _config())
            controller.input("cron")
            await controller.flush()
            provider.error = CatalogProviderError("catalog offline")
            controller.input("cron ")
            outcome = await controller.flush()
            return controller, outcome

        controller, outcome = asyncio.run(scenario())
        assert outcome.status is OutcomeStatus.FAILED
        assert controller.error == "catalog offline"
        assert _ids(controller) == ["cron-1", "backup-1"]

    def test_timeout_is_a_failed_outcome(self):
        from script_catalog.interaction.controller import SearchController

        async def scenario():
            provider = _CountingProvider()
            provider.error = asyncio.TimeoutError()
            controller = SearchController(provider, _config())
            controller.input("cron")
            return await controller.flush()

        outcome = asyncio.run(scenario())
        assert not outcome.ok
        assert outcome.error

    def test_format_error_is_a_failed_outcome(self):
        from script_catalog.exceptions import CatalogFormatError
        from script_catalog.interaction.controller import OutcomeStatus, SearchController

        async def scenario():
            provider = _CountingProvider()
            provider.error = CatalogFormatError("bad record")
            controller = SearchController(provider, _config())
            controller.input("cron")
            return await controller.flush()

        outcome = asyncio.run(scenario())
        assert outcome.status is OutcomeStatus.FAILED
        assert outcome.error == "bad record"

    def test_unexpected_error_still_presents_an_outcome(self):
        from script_catalog.interaction.controller import ControllerState, SearchController

        async def scenario():
            provider = _CountingProvider()
            provider.error = TypeError("can't compare datetimes")
            controller = SearchController(provider, _config())
            controller.input("cron")
            outcome = await controller.flush()
            return controller, outcome

        controller, outcome = asyncio.run(scenario())
        assert not outcome.ok
        assert controller.last_outcome is outcome
        assert controller.state is ControllerState.PRESENTING
        assert controller.error == "can't compare datetimes"


# ─────────────────────────────────────────────────────────────────────────────
# 5. Filters
# ─────────────────────────────────────────────────────────────────────────────

class TestFilters:

    def test_sort_mode_not_enabled_on_surface_raises(self):
        from script_catalog.exceptions import InvalidQueryError
        from script_catalog.interaction.config import HEADER_SURFACE
        from script_catalog.interaction.controller import SearchController
        controller = SearchController(_CountingProvider(), HEADER_SURFACE)
        with pytest.raises(InvalidQueryError):
            controller.set_filters(sort="downloads")

    def test_os_filter_applies_to_next_evaluation(self):
        from script_catalog.interaction.controller import SearchController

        async def scenario():
            controller = SearchController(_CountingProvider(), _config())
            controller.set_filters(os="windows")
            controller.input("tool")
            await controller.flush()
            return controller

        assert _ids(asyncio.run(scenario())) == ["fw-1"]

    def test_category_path_prefilters_catalog(self):
        from script_catalog.interaction.controller import SearchController

        async def scenario():
            controller = SearchController(_CountingProvider(), _config())
            controller.set_category_path("/categories/security")
            controller.input("tool")
            await controller.flush()
            return controller

        assert sorted(_ids(asyncio.run(scenario()))) == ["fw-1", "ssh-1"]


# ─────────────────────────────────────────────────────────────────────────────
# 6. Keyboard
# ─────────────────────────────────────────────────────────────────────────────

class TestKeyboard:

    def test_arrow_down_then_enter_emits_selection(self):
        from script_catalog.interaction.controller import ControllerState, SearchController
        from script_catalog.interaction.navigation import NavKey
        selected = []

        async def scenario():
            controller = SearchController(_CountingProvider(), _config(), on_select=selected.append)
            controller.input("cron")
            await controller.flush()
            controller.handle_key(NavKey.ARROW_DOWN)
            controller.handle_key(NavKey.ARROW_DOWN)
            event = controller.handle_key(NavKey.ENTER)
            return controller, event

        controller, event = asyncio.run(scenario())
        assert event.record_id == "backup-1"
        assert [e.record_id for e in selected] == ["backup-1"]
        assert controller.panel.is_open is False
        assert controller.state is ControllerState.IDLE

    def test_escape_closes_without_touching_text(self):
        from script_catalog.interaction.controller import SearchController
        from script_catalog.interaction.navigation import NavKey

        async def scenario():
            controller = SearchController(_CountingProvider(), _config())
            controller.input("cron")
            await controller.flush()
            controller.handle_key(NavKey.ARROW_UP)
            controller.handle_key(NavKey.ESCAPE)
            return controller

        controller = asyncio.run(scenario())
        assert controller.panel.is_open is False
        assert controller.panel.highlighted == -1
        assert controller.text == "cron"

    def test_keys_ignored_before_any_results(self):
        from script_catalog.interaction.controller import SearchController
        from script_catalog.interaction.navigation import NavKey
        controller = SearchController(_CountingProvider(), _config())
        assert controller.handle_key(NavKey.ARROW_DOWN) is None
        assert controller.panel.highlighted == -1


# ─────────────────────────────────────────────────────────────────────────────
# 7. Submission and history
# ─────────────────────────────────────────────────────────────────────────────

class TestSubmission:

    def test_submit_records_term(self):
        from script_catalog.interaction.controller import SearchController
        from script_catalog.interaction.history import RecentSearchLog

        async def scenario():
            history = RecentSearchLog()
            controller = SearchController(_CountingProvider(), _config(), history=history)
            for term in ("alpha", "beta", "alpha"):
                controller.input(term)
                controller.submit()
            return controller

        assert asyncio.run(scenario()).recent_searches == ["alpha", "beta"]

    def test_submit_cancels_pending_timer(self):
        from script_catalog.interaction.controller import SearchController
        from script_catalog.interaction.history import RecentSearchLog

        async def scenario():
            provider = _CountingProvider()
            controller = SearchController(provider, _config(), history=RecentSearchLog())
            controller.input("cron")
            query = controller.submit()
            await asyncio.sleep(_SETTLE)
            return provider, controller, query

        provider, controller, query = asyncio.run(scenario())
        assert query.term == "cron"
        assert provider.calls == 0
        assert controller.panel.is_open is False

    def test_typing_alone_does_not_touch_history(self):
        from script_catalog.interaction.controller import SearchController
        from script_catalog.interaction.history import RecentSearchLog

        async def scenario():
            history = RecentSearchLog()
            controller = SearchController(_CountingProvider(), _config(), history=history)
            controller.input("cron")
            await controller.flush()
            return history

        assert asyncio.run(scenario()).entries == []
