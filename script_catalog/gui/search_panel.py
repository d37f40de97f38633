"""
SearchPanel — Qt view over one SearchController.

Layout
──────
  ┌─────────────────────────────────────────────┐
  │ [Search scripts, commands, tools…________]  │
  │ OS [all ▾]  Category [all ▾]  Sort [rel ▾]  │  (show_filters)
  │ ┌─────────────────────────────────────────┐ │
  │ │ Linux [Cron] Job Manager       linux    │ │
  │ │ …                                       │ │
  │ └─────────────────────────────────────────┘ │
  │ Recent: cron · backup · firewall            │  (show_history)
  │ 3 result(s)                       [Retry]   │
  └─────────────────────────────────────────────┘

The widget owns no search state: every change is pushed into the
controller and the controller's on_change callback re-renders the panel.
Arrow / Enter / Escape in the line edit are forwarded to the keyboard
reducer; Enter with nothing highlighted submits the query.

Signals
───────
script_selected(str)  — record id picked from the result list
query_submitted(str)  — trimmed text explicitly submitted
"""

import asyncio
import html
import logging
from typing import Optional

from PyQt6.QtCore import QEvent, QObject, Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from script_catalog.catalog.models import Category, OperatingSystem
from script_catalog.catalog.provider import AbstractCatalogProvider
from script_catalog.interaction.config import EXPANDED_SURFACE, SurfaceConfig
from script_catalog.interaction.controller import (
    ControllerState,
    SearchController,
    SelectionEvent,
)
from script_catalog.interaction.history import RecentSearchLog
from script_catalog.interaction.navigation import NavKey
from script_catalog.search.models import ALL, HighlightSpan, SearchResult
from script_catalog.taxonomy.resolver import TaxonomyResolver

__all__ = ["SearchPanel", "spans_to_html"]

logger = logging.getLogger(__name__)

_NAV_KEYS = {
    Qt.Key.Key_Down:   NavKey.ARROW_DOWN,
    Qt.Key.Key_Up:     NavKey.ARROW_UP,
    Qt.Key.Key_Return: NavKey.ENTER,
    Qt.Key.Key_Enter:  NavKey.ENTER,
    Qt.Key.Key_Escape: NavKey.ESCAPE,
}


def spans_to_html(spans: tuple[HighlightSpan, ...]) -> str:
    """Rich-text rendering of highlight spans (matches in bold)."""
    return "".join(
        f"<b>{html.escape(s.text)}</b>" if s.is_match else html.escape(s.text)
        for s in spans
    )


class SearchPanel(QWidget):
    """Line edit, optional filters, result list and recent searches."""

    script_selected = pyqtSignal(str)   # record id
    query_submitted = pyqtSignal(str)   # submitted text

    def __init__(
        self,
        provider: AbstractCatalogProvider,
        config: SurfaceConfig = EXPANDED_SURFACE,
        history: Optional[RecentSearchLog] = None,
        resolver: Optional[TaxonomyResolver] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        parent: QWidget = None,
    ) -> None:
        super().__init__(parent)
        self._config = config
        self._controller = SearchController(
            provider,
            config,
            history=history,
            on_select=self._on_selected,
            on_change=self._render,
            resolver=resolver,
            loop=loop,
        )
        self._build_ui()
        self._render(self._controller)

    # ── UI construction ────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        self._search_edit = QLineEdit()
        self._search_edit.setPlaceholderText(self._config.placeholder)
        self._search_edit.setClearButtonEnabled(True)
        self._search_edit.textEdited.connect(self._controller.input)
        self._search_edit.installEventFilter(self)
        layout.addWidget(self._search_edit)

        # Filter row
        self._filters = QWidget()
        filter_row = QHBoxLayout(self._filters)
        filter_row.setContentsMargins(0, 0, 0, 0)
        self._os_combo = QComboBox()
        self._os_combo.addItems([ALL] + [o.value for o in OperatingSystem])
        self._category_combo = QComboBox()
        self._category_combo.addItems([ALL] + [c.value for c in Category])
        self._sort_combo = QComboBox()
        self._sort_combo.addItems([m.value for m in self._config.sort_modes])
        for label, combo in (
            ("OS", self._os_combo),
            ("Category", self._category_combo),
            ("Sort", self._sort_combo),
        ):
            filter_row.addWidget(QLabel(label))
            filter_row.addWidget(combo)
            combo.currentTextChanged.connect(self._on_filter_changed)
        filter_row.addStretch()
        self._filters.setVisible(self._config.show_filters)
        layout.addWidget(self._filters)

        # Results
        self._result_list = QListWidget()
        self._result_list.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self._result_list.itemActivated.connect(self._on_item_activated)
        self._result_list.itemClicked.connect(self._on_item_activated)
        layout.addWidget(self._result_list)

        # Recent searches
        self._recent_label = QLabel("Recent searches")
        self._recent_list = QListWidget()
        self._recent_list.setMaximumHeight(110)
        self._recent_list.itemClicked.connect(self._on_recent_clicked)
        self._recent_label.setVisible(self._config.show_history)
        self._recent_list.setVisible(self._config.show_history)
        layout.addWidget(self._recent_label)
        layout.addWidget(self._recent_list)

        # Status line
        status_row = QHBoxLayout()
        self._status_label = QLabel()
        self._retry_btn = QPushButton("Retry")
        self._retry_btn.clicked.connect(self._on_retry)
        status_row.addWidget(self._status_label)
        status_row.addStretch()
        status_row.addWidget(self._retry_btn)
        layout.addLayout(status_row)

    # ── Qt events ──────────────────────────────────────────────────────────

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        if obj is self._search_edit and event.type() == QEvent.Type.KeyPress:
            key = _NAV_KEYS.get(Qt.Key(event.key()))
            if key is not None:
                self.press(key)
                return True
        return super().eventFilter(obj, event)

    # ── Slots ──────────────────────────────────────────────────────────────

    def _on_filter_changed(self, _text: str) -> None:
        self._controller.set_filters(
            os=self._os_combo.currentText(),
            category=self._category_combo.currentText(),
            sort=self._sort_combo.currentText(),
        )

    def _on_item_activated(self, item: QListWidgetItem) -> None:
        record_id = item.data(Qt.ItemDataRole.UserRole)
        if record_id:
            self.script_selected.emit(record_id)

    def _on_recent_clicked(self, item: QListWidgetItem) -> None:
        self.set_text(item.text())

    def _on_retry(self) -> None:
        self._controller.input(self._controller.text)

    def _on_selected(self, event: SelectionEvent) -> None:
        self.script_selected.emit(event.record_id)

    # ── Rendering ──────────────────────────────────────────────────────────

    def _render(self, controller: SearchController) -> None:
        # on_change may fire before _build_ui has finished
        if not hasattr(self, "_status_label"):
            return
        self._render_results(controller.results if controller.panel.is_open else [])
        self._render_recent(controller.recent_searches)

        highlighted = controller.panel.highlighted
        if 0 <= highlighted < self._result_list.count():
            self._result_list.setCurrentRow(highlighted)
        else:
            self._result_list.clearSelection()

        self._retry_btn.setVisible(controller.error is not None)
        self._status_label.setText(self._status_text(controller))

    def _render_results(self, results: list[SearchResult]) -> None:
        self._result_list.clear()
        for result in results:
            rec = result.record
            item = QListWidgetItem()
            item.setData(Qt.ItemDataRole.UserRole, rec.id)
            item.setToolTip(rec.description)
            label = QLabel(
                f"{spans_to_html(result.title)} "
                f"<span style='color:gray'>{html.escape(rec.os.value)} · "
                f"{rec.downloads} downloads</span>"
            )
            label.setTextFormat(Qt.TextFormat.RichText)
            self._result_list.addItem(item)
            item.setSizeHint(label.sizeHint())
            self._result_list.setItemWidget(item, label)

    def _render_recent(self, entries: list[str]) -> None:
        if not self._config.show_history:
            return
        self._recent_list.clear()
        self._recent_list.addItems(entries)

    @staticmethod
    def _status_text(controller: SearchController) -> str:
        if controller.error is not None:
            return f"Search failed: {controller.error}"
        if controller.state in (ControllerState.DEBOUNCING, ControllerState.EVALUATING):
            return "Searching…"
        if controller.state is ControllerState.PRESENTING:
            count = len(controller.results)
            if count == 0:
                return f"No scripts found for {controller.text.strip()!r}"
            return f"{count} result(s)"
        return ""

    # ── Public API ─────────────────────────────────────────────────────────

    @property
    def controller(self) -> SearchController:
        return self._controller

    def set_text(self, text: str) -> None:
        """Replace the query text as if typed."""
        self._search_edit.setText(text)
        self._controller.input(text)

    def set_category_path(self, path: str) -> None:
        self._controller.set_category_path(path)

    def press(self, key: NavKey) -> None:
        """Forward a navigation key; Enter without a highlight submits."""
        had_highlight = self._controller.selected_result is not None
        self._controller.handle_key(key)
        if key is NavKey.ENTER and not had_highlight:
            query = self._controller.submit()
            if query.term:
                self.query_submitted.emit(query.term)

    def shutdown(self) -> None:
        self._controller.close()
