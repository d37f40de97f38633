"""
Data models for the taxonomy module.

Key concepts
────────────
CategoryLevel — depth of a node below the synthetic Home root
CategoryNode  — one immutable node; owns its children outright
Breadcrumb    — (name, path) pair for one step of a navigation trail
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

__all__ = [
    "CategoryLevel",
    "CategoryNode",
    "Breadcrumb",
    "HOME_PATH",
    "HOME_NAME",
]

HOME_PATH = "/"
HOME_NAME = "Home"


class CategoryLevel(str, Enum):
    FIRST  = "first"
    SECOND = "second"
    THIRD  = "third"


@dataclass(frozen=True)
class CategoryNode:
    """
    One node of the category tree.

    `path` is the unique key and doubles as the routable address.  There is
    no parent attribute: the parent is looked up by path through
    TaxonomyStore.parent_of(), so the tree holds no reference cycles.
    """
    id:          str
    name:        str
    path:        str
    level:       CategoryLevel
    icon:        Optional[str]             = None
    description: Optional[str]             = None
    children:    tuple["CategoryNode", ...] = field(default_factory=tuple)

    @property
    def is_root(self) -> bool:
        return self.path == HOME_PATH

    @property
    def segments(self) -> list[str]:
        """Non-empty path segments, e.g. ['categories', 'security']."""
        return [part for part in self.path.split("/") if part]

    def iter_descendants(self) -> Iterator["CategoryNode"]:
        """Depth-first, pre-order walk of every node below this one."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def __str__(self) -> str:
        return f"CategoryNode({self.path} {self.name!r} [{self.level.value}])"


@dataclass(frozen=True)
class Breadcrumb:
    """One step of a breadcrumb trail."""
    name: str
    path: str
