"""
script_catalog — catalog query engine for a library of shell / admin scripts.

Sub-packages
────────────
catalog      — ScriptRecord model and catalog providers
taxonomy     — static category tree, path resolution, breadcrumbs
search       — pure ranking engine and highlighting
interaction  — debounced search controller, keyboard reducer, recent log
store        — key-value persistence for recent searches
cli          — `script-catalog` command line
gui          — PyQt6 front-end (`script-catalog-gui`)
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
