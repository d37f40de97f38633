"""
Project-wide custom exception hierarchy.
All modules raise subclasses of CatalogBaseError — never bare Exception.
"""

__all__ = [
    "CatalogBaseError",
    "CatalogError",
    "CatalogProviderError",
    "CatalogFormatError",
    "TaxonomyError",
    "TaxonomyConfigError",
    "SearchError",
    "InvalidQueryError",
    "StoreError",
]


class CatalogBaseError(Exception):
    """Root exception for all script-catalog errors."""


# ── Catalog ───────────────────────────────────────────────────────────────────

class CatalogError(CatalogBaseError):
    """Base class for catalog data errors."""


class CatalogProviderError(CatalogError):
    """Raised when the catalog provider cannot supply records (I/O, timeout, remote failure)."""


class CatalogFormatError(CatalogProviderError):
    """Raised when a catalog file or record dict cannot be parsed."""


# ── Taxonomy ──────────────────────────────────────────────────────────────────

class TaxonomyError(CatalogBaseError):
    """Base class for taxonomy errors."""


class TaxonomyConfigError(TaxonomyError):
    """Raised when the static category tree is malformed (duplicate path, bad level)."""


# ── Search ────────────────────────────────────────────────────────────────────

class SearchError(CatalogBaseError):
    """Base class for ranking-engine errors."""


class InvalidQueryError(SearchError, ValueError):
    """Raised for programming errors in a query: negative cap, unknown sort mode or filter."""


# ── Store ─────────────────────────────────────────────────────────────────────

class StoreError(CatalogBaseError):
    """Raised on SQLite / key-value store I/O errors."""
