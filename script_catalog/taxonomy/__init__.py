"""
Category taxonomy — static tree, path resolution and breadcrumbs.

The tree is built once from NAVIGATION_MENU; the resolver answers path
lookups, synthesises breadcrumb trails and pre-filters catalog records
before any free-text query is applied.
"""

from .config import CATEGORIES_NAMESPACE, EMERGENCY_NAMESPACE, NAVIGATION_MENU
from .models import HOME_NAME, HOME_PATH, Breadcrumb, CategoryLevel, CategoryNode
from .resolver import TaxonomyResolver, matches_subcategory, path_segments, slug_to_name
from .tree import TaxonomyStore, default_store

__all__ = [
    "CATEGORIES_NAMESPACE",
    "EMERGENCY_NAMESPACE",
    "NAVIGATION_MENU",
    "HOME_NAME",
    "HOME_PATH",
    "Breadcrumb",
    "CategoryLevel",
    "CategoryNode",
    "TaxonomyResolver",
    "TaxonomyStore",
    "default_store",
    "matches_subcategory",
    "path_segments",
    "slug_to_name",
]
