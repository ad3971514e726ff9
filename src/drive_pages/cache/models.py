"""Data models for cached page content."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class CacheEntry:
    """Rendered HTML for one resolved path.

    Attributes:
        id: Drive ID of the resource the page was rendered from.
        modified_at: Aware UTC timestamp of the last known update.
        path: Resolved site path; the cache key.
        html: Rendered page, or None when nothing is cached.
    """

    id: str
    modified_at: datetime | None
    path: str
    html: str | None = None

    @classmethod
    def empty(cls, path: str) -> CacheEntry:
        """Entry returned for a path with no cached content."""
        return cls(id="", modified_at=None, path=path, html=None)

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "modified_at": self.modified_at.isoformat() if self.modified_at else None,
            "path": self.path,
            "html": self.html,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> CacheEntry:
        modified = data.get("modified_at")
        return cls(
            id=data.get("id", ""),
            modified_at=datetime.fromisoformat(modified) if modified else None,
            path=data.get("path", ""),
            html=data.get("html"),
        )
