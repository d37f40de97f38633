"""
CLI entry point for script-catalog.

Usage
─────
  # Ranked, highlighted search (recorded in recent searches)
  python -m script_catalog search "cron" --os linux --sort downloads

  # Records under a taxonomy path, with its breadcrumb trail
  python -m script_catalog browse /categories/security/firewall

  # Breadcrumbs only / the whole category tree
  python -m script_catalog breadcrumbs /emergency/system-down
  python -m script_catalog categories

  # Recent searches
  python -m script_catalog recent
  python -m script_catalog recent --clear

Subcommands are implemented as standalone functions (cmd_search, cmd_browse,
cmd_breadcrumbs, cmd_categories, cmd_recent) so they can be unit-tested
without invoking argparse.
"""

import argparse
import asyncio
import dataclasses
import logging
import sys
from typing import Optional

from script_catalog.catalog.models import Category, OperatingSystem, ScriptRecord
from script_catalog.catalog.provider import (
    SAMPLE_CATALOG_PATH,
    AbstractCatalogProvider,
    JsonCatalogProvider,
)
from script_catalog.exceptions import CatalogBaseError, CatalogProviderError
from script_catalog.interaction.config import RESULTS_PAGE_SURFACE
from script_catalog.interaction.controller import SearchController
from script_catalog.interaction.history import RecentSearchLog
from script_catalog.search.engine import group_by_category
from script_catalog.search.highlight import join_spans
from script_catalog.search.models import ALL, SearchResult, SortMode
from script_catalog.store.db import DEFAULT_DB_PATH, SqliteKeyValueStore
from script_catalog.taxonomy.models import CategoryLevel
from script_catalog.taxonomy.resolver import TaxonomyResolver
from script_catalog.taxonomy.tree import TaxonomyStore

__all__ = [
    "build_parser",
    "cmd_search",
    "cmd_browse",
    "cmd_breadcrumbs",
    "cmd_categories",
    "cmd_recent",
    "main",
]

logger = logging.getLogger(__name__)

_LEVEL_INDENT = {
    CategoryLevel.FIRST:  "",
    CategoryLevel.SECOND: "  ",
    CategoryLevel.THIRD:  "    ",
}


# ── Argument parser ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Subcommands: search | browse | breadcrumbs | categories | recent
    """
    parser = argparse.ArgumentParser(
        prog="script-catalog",
        description="Search and browse a catalog of admin scripts",
    )
    parser.add_argument(
        "--db",
        default=DEFAULT_DB_PATH,
        metavar="PATH",
        help=f"SQLite database for recent searches (default: {DEFAULT_DB_PATH})",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        metavar="PATH",
        help="JSON catalog file (default: bundled sample catalog)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable DEBUG-level logging",
    )

    sub = parser.add_subparsers(dest="subcommand")

    # ── search ─────────────────────────────────────────────────────────────────
    srch = sub.add_parser("search", help="Search the catalog")
    srch.add_argument("text", help="Free-text query (at least 2 characters)")
    srch.add_argument(
        "--os",
        default=ALL,
        choices=[ALL] + [o.value for o in OperatingSystem],
        help="Operating system filter (default: all)",
    )
    srch.add_argument(
        "--category",
        default=ALL,
        choices=[ALL] + [c.value for c in Category],
        help="Category filter (default: all)",
    )
    srch.add_argument(
        "--sort",
        default=SortMode.RELEVANCE.value,
        choices=[m.value for m in SortMode],
        help="Result ordering (default: relevance)",
    )
    srch.add_argument(
        "--limit",
        type=int,
        default=RESULTS_PAGE_SURFACE.limit,
        help=f"Maximum number of results (default: {RESULTS_PAGE_SURFACE.limit})",
    )
    srch.add_argument(
        "--grouped",
        action="store_true",
        help="Group results by category",
    )

    # ── browse ─────────────────────────────────────────────────────────────────
    brw = sub.add_parser("browse", help="List records under a category path")
    brw.add_argument("path", help="Taxonomy path, e.g. /categories/security")
    brw.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Maximum number of records to print (default: 20)",
    )

    # ── breadcrumbs ────────────────────────────────────────────────────────────
    crumbs = sub.add_parser("breadcrumbs", help="Print the breadcrumb trail for a path")
    crumbs.add_argument("path", help="Taxonomy path")

    # ── categories ─────────────────────────────────────────────────────────────
    sub.add_parser("categories", help="Print the category tree")

    # ── recent ─────────────────────────────────────────────────────────────────
    rec = sub.add_parser("recent", help="Show recent searches")
    rec.add_argument(
        "--clear",
        action="store_true",
        help="Forget all recent searches",
    )

    return parser


# ── Output helpers ─────────────────────────────────────────────────────────────


def _print_result(result: SearchResult) -> None:
    rec = result.record
    print(
        f"{result.rank:>3}. {join_spans(result.title):<45} "
        f"{rec.os.value:<15} {rec.downloads:>7} dl  {rec.rating:.1f}*"
    )
    print(f"     {join_spans(result.description)}")
    if result.tags:
        print("     tags: " + ", ".join(join_spans(spans) for _, spans in result.tags))


def _print_record(rec: ScriptRecord) -> None:
    print(f"  {rec.id:<12} {rec.title:<45} {rec.category.value:<18} {rec.os.value}")


# ── Subcommand implementations ─────────────────────────────────────────────────


async def _run_search(
    provider: AbstractCatalogProvider,
    history: Optional[RecentSearchLog],
    text: str,
    os: str,
    category: str,
    sort: str,
    limit: int,
) -> list[SearchResult]:
    config = dataclasses.replace(RESULTS_PAGE_SURFACE, limit=limit)
    controller = SearchController(provider, config, history=history)
    try:
        controller.set_filters(os=os, category=category, sort=sort)
        controller.input(text)
        outcome = await controller.flush()
        # Only a query that actually evaluated is remembered
        if outcome is not None and outcome.ok:
            controller.submit()
    finally:
        controller.close()

    if outcome is None:
        return []
    if not outcome.ok:
        raise CatalogProviderError(outcome.error)
    return list(outcome.results)


def cmd_search(
    provider: AbstractCatalogProvider,
    text: str,
    history: Optional[RecentSearchLog] = None,
    os: str = ALL,
    category: str = ALL,
    sort: str = SortMode.RELEVANCE.value,
    limit: int = RESULTS_PAGE_SURFACE.limit,
    grouped: bool = False,
) -> list[SearchResult]:
    """
    Evaluate one query and print the ranked results.

    A query that evaluates successfully counts as an explicit submission,
    so it is added to *history* when one is given.

    Raises:
        InvalidQueryError:    Bad filter value or negative limit.
        CatalogProviderError: The catalog could not be loaded.
    """
    results = asyncio.run(
        _run_search(provider, history, text, os, category, sort, limit)
    )
    if not results:
        print(f"0 results for {text.strip()!r}.")
        return results

    if grouped:
        for label, group in group_by_category(results).items():
            print(f"[{label}]")
            for result in group:
                _print_result(result)
    else:
        for result in results:
            _print_result(result)
    return results


def cmd_browse(
    provider: JsonCatalogProvider,
    path: str,
    resolver: Optional[TaxonomyResolver] = None,
    limit: int = 20,
) -> list[ScriptRecord]:
    """Print the breadcrumb trail for *path* and the records filed under it."""
    resolver = resolver or TaxonomyResolver()
    trail = resolver.breadcrumbs(path)
    print(" > ".join(crumb.name for crumb in trail))

    records = resolver.filter_by_category(provider.load(), path)
    print(f"{resolver.category_name(path)}: {len(records)} script(s)")
    for rec in records[: max(limit, 0)]:
        _print_record(rec)
    return records


def cmd_breadcrumbs(path: str, resolver: Optional[TaxonomyResolver] = None) -> None:
    resolver = resolver or TaxonomyResolver()
    for crumb in resolver.breadcrumbs(path):
        print(f"{crumb.name:<30} {crumb.path}")


def cmd_categories(store: Optional[TaxonomyStore] = None) -> None:
    """Print the category tree, indented by level."""
    store = store or TaxonomyResolver().store
    for node in store.walk():
        indent = _LEVEL_INDENT[node.level]
        print(f"{indent}{node.name:<{40 - len(indent)}} {node.path}")


def cmd_recent(history: RecentSearchLog, clear: bool = False) -> list[str]:
    if clear:
        history.clear()
        print("Recent searches cleared.")
        return []
    entries = history.entries
    if not entries:
        print("No recent searches.")
    for index, term in enumerate(entries, start=1):
        print(f"{index}. {term}")
    return entries


# ── Main ───────────────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    level = logging.DEBUG if ns.debug else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    if ns.subcommand is None:
        parser.print_help()
        return 0

    provider = JsonCatalogProvider(ns.catalog or SAMPLE_CATALOG_PATH)

    try:
        if ns.subcommand == "search":
            history = RecentSearchLog(SqliteKeyValueStore(db_path=ns.db))
            cmd_search(
                provider=provider,
                text=ns.text,
                history=history,
                os=ns.os,
                category=ns.category,
                sort=ns.sort,
                limit=ns.limit,
                grouped=ns.grouped,
            )
            return 0

        if ns.subcommand == "browse":
            cmd_browse(provider=provider, path=ns.path, limit=ns.limit)
            return 0

        if ns.subcommand == "breadcrumbs":
            cmd_breadcrumbs(path=ns.path)
            return 0

        if ns.subcommand == "categories":
            cmd_categories()
            return 0

        if ns.subcommand == "recent":
            history = RecentSearchLog(SqliteKeyValueStore(db_path=ns.db))
            cmd_recent(history=history, clear=ns.clear)
            return 0
    except CatalogBaseError as exc:
        logger.debug("%s failed", ns.subcommand, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
