"""
MainWindow — top-level window of the script-catalog GUI.

  ┌──────────────┬──────────────────────────────────┐
  │ category     │ Home › Security › Firewall        │
  │ tree         │ SearchPanel                       │
  │              │ ───────────────────────────────── │
  │              │ selected script details           │
  └──────────────┴──────────────────────────────────┘

Picking a node in the category tree updates the breadcrumb label and
pre-filters the search panel by that path.
"""

import asyncio
import logging
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QLabel,
    QMainWindow,
    QPlainTextEdit,
    QSplitter,
    QTreeWidget,
    QTreeWidgetItem,
    QVBoxLayout,
    QWidget,
)

from script_catalog.catalog.provider import AbstractCatalogProvider, JsonCatalogProvider
from script_catalog.exceptions import StoreError
from script_catalog.interaction.config import EXPANDED_SURFACE, SurfaceConfig
from script_catalog.interaction.history import RecentSearchLog
from script_catalog.store.db import DEFAULT_DB_PATH, MemoryKeyValueStore, SqliteKeyValueStore
from script_catalog.taxonomy.models import HOME_PATH, CategoryNode
from script_catalog.taxonomy.resolver import TaxonomyResolver

from .search_panel import SearchPanel

__all__ = ["MainWindow"]

logger = logging.getLogger(__name__)

_CRUMB_SEPARATOR = " › "


def _open_history(db_path: str) -> RecentSearchLog:
    try:
        return RecentSearchLog(SqliteKeyValueStore(db_path))
    except StoreError as exc:
        logger.warning("Recent searches will not persist: %s", exc)
        return RecentSearchLog(MemoryKeyValueStore())


class MainWindow(QMainWindow):
    """Root window: category tree, breadcrumb label, search panel, details."""

    def __init__(
        self,
        provider: Optional[AbstractCatalogProvider] = None,
        history: Optional[RecentSearchLog] = None,
        db_path: str = DEFAULT_DB_PATH,
        config: SurfaceConfig = EXPANDED_SURFACE,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        parent: QWidget = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Script Catalog")
        self.resize(960, 600)

        self._provider = provider if provider is not None else JsonCatalogProvider()
        self._history  = history if history is not None else _open_history(db_path)
        self._resolver = TaxonomyResolver()
        self._config   = config
        self._loop     = loop
        self._path     = HOME_PATH

        self._build_ui()
        self.navigate(HOME_PATH)

    # ── UI construction ────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(splitter)

        self._tree = QTreeWidget()
        self._tree.setHeaderHidden(True)
        self._populate_tree()
        self._tree.currentItemChanged.connect(self._on_tree_item_changed)
        splitter.addWidget(self._tree)

        right = QWidget()
        layout = QVBoxLayout(right)
        layout.setContentsMargins(0, 0, 0, 0)

        self._breadcrumb_label = QLabel()
        layout.addWidget(self._breadcrumb_label)

        self._panel = SearchPanel(
            self._provider,
            self._config,
            history=self._history,
            resolver=self._resolver,
            loop=self._loop,
        )
        self._panel.script_selected.connect(self.show_script)
        layout.addWidget(self._panel, stretch=3)

        self._details = QPlainTextEdit()
        self._details.setReadOnly(True)
        layout.addWidget(self._details, stretch=2)

        splitter.addWidget(right)
        splitter.setStretchFactor(1, 1)

    def _populate_tree(self) -> None:
        root = self._resolver.store.root
        home = QTreeWidgetItem([root.name])
        home.setData(0, Qt.ItemDataRole.UserRole, root.path)
        self._tree.addTopLevelItem(home)
        for child in root.children:
            self._add_tree_node(home, child)
        home.setExpanded(True)

    def _add_tree_node(self, parent: QTreeWidgetItem, node: CategoryNode) -> None:
        item = QTreeWidgetItem([node.name])
        item.setData(0, Qt.ItemDataRole.UserRole, node.path)
        if node.description:
            item.setToolTip(0, node.description)
        parent.addChild(item)
        for child in node.children:
            self._add_tree_node(item, child)

    # ── Slots ──────────────────────────────────────────────────────────────

    def _on_tree_item_changed(self, current: QTreeWidgetItem, _previous) -> None:
        if current is not None:
            self.navigate(current.data(0, Qt.ItemDataRole.UserRole))

    def closeEvent(self, event) -> None:
        self._panel.shutdown()
        super().closeEvent(event)

    # ── Public API ─────────────────────────────────────────────────────────

    @property
    def search_panel(self) -> SearchPanel:
        return self._panel

    @property
    def breadcrumb_text(self) -> str:
        return self._breadcrumb_label.text()

    def navigate(self, path: str) -> None:
        """Show the breadcrumb trail for *path* and scope the search to it."""
        self._path = path or HOME_PATH
        trail = self._resolver.breadcrumbs(self._path)
        self._breadcrumb_label.setText(_CRUMB_SEPARATOR.join(c.name for c in trail))
        self._panel.set_category_path("" if self._path == HOME_PATH else self._path)
        logger.debug("Navigated to %s", self._path)

    def show_script(self, record_id: str) -> None:
        """Display the title and body of *record_id* in the details pane."""
        record = next(
            (r.record for r in self._panel.controller.results if r.record_id == record_id),
            None,
        )
        if record is None:
            self._details.setPlainText(f"Unknown script: {record_id}")
            return
        self._details.setPlainText(
            f"{record.title}\n{record.os.value} · {record.category.value} · "
            f"by {record.author_name or 'unknown'}\n\n{record.description}\n\n{record.content}"
        )
