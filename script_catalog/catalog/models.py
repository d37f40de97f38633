"""Data models for the catalog module."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

__all__ = [
    "OperatingSystem",
    "Category",
    "Priority",
    "ScriptRecord",
]


class OperatingSystem(str, Enum):
    LINUX          = "linux"
    WINDOWS        = "windows"
    MACOS          = "macos"
    CROSS_PLATFORM = "cross-platform"


class Category(str, Enum):
    """
    Closed set of record categories.

    The first eight values mirror the first-level taxonomy paths
    (/categories/<value>); the rest are catalog-only labels.
    """
    SYSTEM_ADMIN     = "system-admin"
    SECURITY         = "security"
    NETWORK          = "network"
    CLOUD_CONTAINERS = "cloud-containers"
    DEVOPS_CICD      = "devops-cicd"
    AUTOMATION       = "automation"
    DEV_TOOLS        = "dev-tools"
    BEGINNERS        = "beginners"
    BACKUP           = "backup"
    MONITORING       = "monitoring"
    MAINTENANCE      = "maintenance"
    PERFORMANCE      = "performance"
    EMERGENCY        = "emergency"


class Priority(str, Enum):
    """Emergency priority carried by incident-response scripts."""
    CRITICAL = "critical"
    HIGH     = "high"
    MEDIUM   = "medium"
    LOW      = "low"


@dataclass(frozen=True)
class ScriptRecord:
    """
    One catalog entry, owned by the catalog provider.

    Fields
    ──────
    id            — unique identifier, e.g. "script-1"
    title         — display title
    description   — free-text description
    os            — OperatingSystem tag
    category      — Category enum value
    tags          — frozenset of labels; empty when the source has none
    rating        — 0.0 – 5.0
    downloads     — non-negative download counter
    author_name   — display name of the author
    author_handle — username of the author
    created_at    — UTC creation timestamp
    updated_at    — UTC last-update timestamp (drives "newest" sorting)
    content       — opaque script body
    priority      — optional emergency Priority
    """
    id:            str
    title:         str
    description:   str
    os:            OperatingSystem
    category:      Category
    tags:          frozenset[str]     = field(default_factory=frozenset)
    rating:        float              = 0.0
    downloads:     int                = 0
    author_name:   str                = ""
    author_handle: str                = ""
    created_at:    Optional[datetime] = None
    updated_at:    Optional[datetime] = None
    content:       str                = ""
    priority:      Optional[Priority] = None

    def __post_init__(self) -> None:
        # Normalise tags so callers may pass a list, a set or None
        object.__setattr__(self, "tags", frozenset(self.tags or ()))
        if self.created_at is None:
            object.__setattr__(self, "created_at", datetime.now(tz=timezone.utc))
        if self.updated_at is None:
            object.__setattr__(self, "updated_at", self.created_at)
        # Naive timestamps are read as UTC so every record compares with every other
        for name in ("created_at", "updated_at"):
            value = getattr(self, name)
            if value.tzinfo is None:
                object.__setattr__(self, name, value.replace(tzinfo=timezone.utc))

    @property
    def sorted_tags(self) -> list[str]:
        """Tags in a deterministic (alphabetical) order for display."""
        return sorted(self.tags)

    def __str__(self) -> str:
        return (
            f"ScriptRecord(id={self.id!r}, title={self.title!r}, "
            f"os={self.os.value}, category={self.category.value})"
        )
