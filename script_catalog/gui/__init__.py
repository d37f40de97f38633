"""
gui — PyQt6 front-end for script-catalog.

Public API
──────────
MainWindow   — category tree, breadcrumb label, search panel, details pane
SearchPanel  — Qt view over a SearchController
app.main()   — `script-catalog-gui` entry point (qasync event loop)
"""

from script_catalog.gui.main_window import MainWindow
from script_catalog.gui.search_panel import SearchPanel

__all__ = ["MainWindow", "SearchPanel"]
