"""
TaxonomyStore — immutable category tree with a path index.

Built once from NAVIGATION_MENU (or any config of the same shape) and never
mutated afterwards.  Nodes own their children; the path index is the only
way to walk upwards.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from script_catalog.exceptions import TaxonomyConfigError

from .config import NAVIGATION_MENU
from .models import HOME_NAME, HOME_PATH, CategoryLevel, CategoryNode

__all__ = ["TaxonomyStore", "default_store"]

logger = logging.getLogger(__name__)

# Depth below the root → level of a node at that depth
_LEVELS = (CategoryLevel.FIRST, CategoryLevel.SECOND, CategoryLevel.THIRD)


class TaxonomyStore:
    """
    Read-only category tree.

    Attributes
    ──────────
    root — the synthetic Home node (path "/"), parent of every first-level node
    """

    def __init__(self, root: CategoryNode) -> None:
        self.root = root
        self._by_path: dict[str, CategoryNode] = {}
        self._parents: dict[str, str] = {}
        self._index(root, parent=None)

    # ── Construction ──────────────────────────────────────────────────────

    @classmethod
    def from_config(cls, menu: list[dict]) -> "TaxonomyStore":
        """
        Build the tree from nested dicts with name / path / icon / children.

        Raises:
            TaxonomyConfigError: A path is duplicated or the tree is deeper
                                 than three levels.
        """
        children = tuple(cls._build_node(item, depth=0) for item in menu)
        root = CategoryNode(
            id="home",
            name=HOME_NAME,
            path=HOME_PATH,
            level=CategoryLevel.FIRST,
            children=children,
        )
        store = cls(root)
        logger.debug("Taxonomy built: %d nodes", len(store))
        return store

    @classmethod
    def _build_node(cls, item: dict, depth: int) -> CategoryNode:
        if depth >= len(_LEVELS):
            raise TaxonomyConfigError(f"Category tree too deep at {item.get('path')!r}")
        try:
            path = item["path"]
            name = item["name"]
        except KeyError as exc:
            raise TaxonomyConfigError(f"Category entry missing key {exc}: {item!r}") from exc
        children = tuple(cls._build_node(child, depth + 1) for child in item.get("children", ()))
        return CategoryNode(
            id=path.rstrip("/").rsplit("/", 1)[-1],
            name=name,
            path=path,
            level=_LEVELS[depth],
            icon=item.get("icon"),
            description=item.get("description"),
            children=children,
        )

    def _index(self, node: CategoryNode, parent: Optional[CategoryNode]) -> None:
        if node.path in self._by_path:
            raise TaxonomyConfigError(f"Duplicate category path: {node.path}")
        self._by_path[node.path] = node
        if parent is not None:
            self._parents[node.path] = parent.path
        for child in node.children:
            self._index(child, parent=node)

    # ── Lookups ───────────────────────────────────────────────────────────

    def get(self, path: str) -> Optional[CategoryNode]:
        """Exact path lookup; the empty path is treated as Home."""
        return self._by_path.get(path or HOME_PATH)

    def parent_of(self, path: str) -> Optional[CategoryNode]:
        """Parent node of *path*, or None for the root and unknown paths."""
        parent = self._parents.get(path or HOME_PATH)
        return self._by_path.get(parent) if parent else None

    def children_of(self, path: str) -> tuple[CategoryNode, ...]:
        node = self.get(path)
        return node.children if node else ()

    def ancestors_of(self, path: str) -> list[CategoryNode]:
        """Nodes from the root down to (excluding) *path*."""
        chain: list[CategoryNode] = []
        parent = self.parent_of(path)
        while parent is not None:
            chain.append(parent)
            parent = self.parent_of(parent.path)
        chain.reverse()
        return chain

    def walk(self) -> Iterator[CategoryNode]:
        """Every node except the root, depth-first in configuration order."""
        return self.root.iter_descendants()

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and (path or HOME_PATH) in self._by_path

    def __len__(self) -> int:
        return len(self._by_path)


_DEFAULT: Optional[TaxonomyStore] = None


def default_store() -> TaxonomyStore:
    """Process-wide store built from NAVIGATION_MENU on first use."""
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = TaxonomyStore.from_config(NAVIGATION_MENU)
    return _DEFAULT
