"""
catalog — ScriptRecord model and the catalog providers that supply it.

Public API
──────────
ScriptRecord            — one read-only catalog entry
OperatingSystem         — OS tag enum
Category                — closed category enum
Priority                — emergency priority enum
AbstractCatalogProvider — async fetch() interface consumed by the controller
StaticCatalogProvider   — in-memory list
JsonCatalogProvider     — JSON file (bundled sample by default)
"""

from script_catalog.catalog.models import Category, OperatingSystem, Priority, ScriptRecord
from script_catalog.catalog.provider import (
    SAMPLE_CATALOG_PATH,
    AbstractCatalogProvider,
    JsonCatalogProvider,
    StaticCatalogProvider,
    record_from_dict,
    record_to_dict,
)

__all__ = [
    "ScriptRecord",
    "OperatingSystem",
    "Category",
    "Priority",
    "AbstractCatalogProvider",
    "StaticCatalogProvider",
    "JsonCatalogProvider",
    "SAMPLE_CATALOG_PATH",
    "record_from_dict",
    "record_to_dict",
]
