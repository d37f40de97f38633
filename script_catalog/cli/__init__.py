"""
cli — command-line interface for script-catalog.

Entry points
────────────
  python -m script_catalog   (via script_catalog/__main__.py)
  script-catalog             (via pyproject.toml [project.scripts])

Subcommands: search | browse | breadcrumbs | categories | recent
"""

from script_catalog.cli.main import (
    build_parser,
    cmd_breadcrumbs,
    cmd_browse,
    cmd_categories,
    cmd_recent,
    cmd_search,
    main,
)

__all__ = [
    "build_parser",
    "cmd_breadcrumbs",
    "cmd_browse",
    "cmd_categories",
    "cmd_recent",
    "cmd_search",
    "main",
]
