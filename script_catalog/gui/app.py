"""
GUI entry point — runs MainWindow on an asyncio loop driven by Qt (qasync).

  script-catalog-gui [--catalog PATH] [--db PATH] [--debug]
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

import qasync
from PyQt6.QtWidgets import QApplication

from script_catalog import __version__
from script_catalog.catalog.provider import SAMPLE_CATALOG_PATH, JsonCatalogProvider
from script_catalog.store.db import DEFAULT_DB_PATH

from .main_window import MainWindow

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="script-catalog-gui",
        description="Desktop browser for the script catalog",
    )
    parser.add_argument("--catalog", default=None, metavar="PATH",
                        help="JSON catalog file (default: bundled sample catalog)")
    parser.add_argument("--db", default=DEFAULT_DB_PATH, metavar="PATH",
                        help=f"SQLite database for recent searches (default: {DEFAULT_DB_PATH})")
    parser.add_argument("--debug", action="store_true",
                        help="Enable DEBUG-level logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Start the Qt application. Returns the exit code."""
    ns = build_parser().parse_args(argv)
    level = logging.DEBUG if ns.debug else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Script Catalog")
    app.setApplicationVersion(__version__)

    loop = qasync.QEventLoop(app)
    asyncio.set_event_loop(loop)

    window = MainWindow(
        provider=JsonCatalogProvider(ns.catalog or SAMPLE_CATALOG_PATH),
        db_path=ns.db,
        loop=loop,
    )
    window.show()
    logger.info("Script catalog GUI started")

    with loop:
        return loop.run_forever() or 0


if __name__ == "__main__":
    raise SystemExit(main())
