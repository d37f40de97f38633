"""
Unit tests for script_catalog/gui/ Qt widgets — requires PyQt6 + offscreen display.

Run with: QT_QPA_PLATFORM=offscreen pytest tests/unit/test_gui_widgets.py

The controller is given a private asyncio loop that the tests drive with
run_until_complete(controller.flush()), so no qasync loop is needed here.

Coverage plan
─────────────
spans_to_html  → 1 test
SearchPanel    → 6 tests (surface toggles, results rendered, keyboard
                          selection, Enter submits, recent list, status)
MainWindow     → 3 tests (creates, breadcrumb label, navigation scoping)
─────────────────────────────────────────────────────────────────
Total          = 10 tests
"""

import asyncio
import os
import sys

import pytest

# Ensure offscreen rendering when no display is available
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

PyQt6 = pytest.importorskip("PyQt6", reason="PyQt6 not installed")


def _record(rid: str, title: str, category: str = "automation", tags=(), downloads: int = 0):
    from script_catalog.catalog.models import Category, OperatingSystem, ScriptRecord
    return ScriptRecord(
        id=rid,
        title=title,
        description=f"{title} description",
        os=OperatingSystem.LINUX,
        category=Category(category),
        tags=frozenset(tags),
        downloads=downloads,
    )


_RECORDS = [
    _record("cron-1", "Cron Jobs", downloads=10),
    _record("backup-1", "Backup Tool", category="backup", tags=["cron"], downloads=500),
    _record("ssh-1", "SSH Hardening", category="security"),
]


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def app():
    """Single QApplication for the entire module (can only have one per process)."""
    from PyQt6.QtWidgets import QApplication
    _app = QApplication.instance() or QApplication(sys.argv)
    yield _app
    # No app.quit(): later tests in the session reuse the instance


@pytest.fixture
def loop():
    _loop = asyncio.new_event_loop()
    yield _loop
    _loop.close()


@pytest.fixture
def provider():
    from script_catalog.catalog.provider import StaticCatalogProvider
    return StaticCatalogProvider(_RECORDS)


@pytest.fixture
def history():
    from script_catalog.interaction.history import RecentSearchLog
    return RecentSearchLog()


def _panel(provider, history, loop, config=None):
    from script_catalog.gui.search_panel import SearchPanel
    from script_catalog.interaction.config import EXPANDED_SURFACE
    return SearchPanel(provider, config or EXPANDED_SURFACE, history=history, loop=loop)


def _type(panel, loop, text: str) -> None:
    panel.set_text(text)
    loop.run_until_complete(panel.controller.flush())


# ─────────────────────────────────────────────────────────────────────────────
# 1. Rich-text rendering
# ─────────────────────────────────────────────────────────────────────────────

class TestSpansToHtml:

    def test_matches_bold_and_text_escaped(self):
        from script_catalog.gui.search_panel import spans_to_html
        from script_catalog.search.highlight import highlight
        assert spans_to_html(tuple(highlight("a<b> cron", "cron"))) == "a&lt;b&gt; <b>cron</b>"


# ─────────────────────────────────────────────────────────────────────────────
# 2. SearchPanel
# ─────────────────────────────────────────────────────────────────────────────

class TestSearchPanel:

    def test_header_surface_hides_filters_and_history(self, app, provider, history, loop):
        from script_catalog.interaction.config import HEADER_SURFACE
        panel = _panel(provider, history, loop, HEADER_SURFACE)
        assert panel._filters.isHidden()
        assert panel._recent_list.isHidden()
        assert panel._sort_combo.count() == 1

    def test_results_rendered_after_flush(self, app, provider, history, loop):
        panel = _panel(provider, history, loop)
        _type(panel, loop, "cron")
        assert panel._result_list.count() == 2
        assert panel._status_label.text() == "2 result(s)"

    def test_arrow_and_enter_emit_selection(self, app, provider, history, loop):
        from script_catalog.interaction.navigation import NavKey
        panel = _panel(provider, history, loop)
        selected = []
        panel.script_selected.connect(selected.append)
        _type(panel, loop, "cron")
        panel.press(NavKey.ARROW_DOWN)
        panel.press(NavKey.ENTER)
        assert selected == ["cron-1"]
        assert panel._result_list.count() == 0      # panel closed

    def test_enter_without_highlight_submits(self, app, provider, history, loop):
        from script_catalog.interaction.navigation import NavKey
        panel = _panel(provider, history, loop)
        submitted = []
        panel.query_submitted.connect(submitted.append)
        _type(panel, loop, "backup")
        panel.press(NavKey.ENTER)
        assert submitted == ["backup"]
        assert history.entries == ["backup"]

    def test_recent_list_reflects_history(self, app, provider, history, loop):
        from script_catalog.interaction.navigation import NavKey
        panel = _panel(provider, history, loop)
        _type(panel, loop, "ssh")
        panel.press(NavKey.ENTER)
        assert panel._recent_list.count() == 1
        assert panel._recent_list.item(0).text() == "ssh"

    def test_no_results_status(self, app, provider, history, loop):
        panel = _panel(provider, history, loop)
        _type(panel, loop, "zzzz")
        assert "No scripts found" in panel._status_label.text()


# ─────────────────────────────────────────────────────────────────────────────
# 3. MainWindow
# ─────────────────────────────────────────────────────────────────────────────

class TestMainWindow:

    def test_creates_without_error(self, app, provider, history, loop):
        from script_catalog.gui.main_window import MainWindow
        win = MainWindow(provider=provider, history=history, loop=loop)
        assert win is not None
        assert win.breadcrumb_text == "Home"

    def test_navigate_updates_breadcrumbs(self, app, provider, history, loop):
        from script_catalog.gui.main_window import MainWindow
        win = MainWindow(provider=provider, history=history, loop=loop)
        win.navigate("/categories/security/zzz-unknown")
        assert win.breadcrumb_text == "Home › Security › Zzz Unknown"

    def test_navigate_scopes_search_to_category(self, app, provider, history, loop):
        from script_catalog.gui.main_window import MainWindow
        win = MainWindow(provider=provider, history=history, loop=loop)
        win.navigate("/categories/security")
        _type(win.search_panel, loop, "ssh")
        assert [r.record_id for r in win.search_panel.controller.results] == ["ssh-1"]
        win.navigate("/categories/backup")
        _type(win.search_panel, loop, "ssh")
        assert win.search_panel.controller.results == []
