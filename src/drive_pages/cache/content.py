"""Content cache — rendered pages keyed by resolved path and modification time."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from drive_pages.cache.models import CacheEntry
from drive_pages.cache.store import BlobCacheStore, CacheStore

if TYPE_CHECKING:
    from drive_pages.config import AppConfig

logger = logging.getLogger(__name__)


class ContentCache:
    """Path-keyed cache of rendered HTML.

    Pages are addressed by path externally, so entries are keyed by the
    resolved path rather than the Drive ID. Storage failures surface as
    CacheError from add() and purge(); a miss is never an error.
    """

    def __init__(self, store: CacheStore) -> None:
        self._store = store

    def add(
        self,
        resource_id: str,
        modified_at: datetime,
        path: str,
        html: str | None,
    ) -> CacheEntry:
        """Store the rendered page for a path, superseding any existing entry.

        Raises:
            CacheError: If the storage write fails.
        """
        entry = CacheEntry(id=resource_id, modified_at=modified_at, path=path, html=html)
        self._store.write(entry)
        logger.info("[add] cached page; path:%s;id:%s", path, resource_id)
        return entry

    def get(self, path: str) -> CacheEntry:
        """Return the entry for a path, or an entry with html=None on a miss.

        Raises:
            CacheError: If the storage read fails.
        """
        entry = self._store.read(path)
        if entry is None:
            logger.info("[get] cache miss; path:%s", path)
            return CacheEntry.empty(path)
        logger.info("[get] cache hit; path:%s", path)
        return entry

    def purge(self, url: str, modified: datetime) -> bool:
        """Invalidate the entry at url as of the given time.

        Entries written strictly after ``modified`` are kept. Purging a path
        with no entry is a no-op.

        Returns:
            True if an entry was removed.

        Raises:
            CacheError: If the storage read or delete fails.
        """
        entry = self._store.read(url)
        if entry is None:
            return False
        if entry.modified_at is not None and entry.modified_at > modified:
            logger.info("[purge] entry newer than purge time; kept; path:%s", url)
            return False
        self._store.delete(url)
        logger.info("[purge] purged page; path:%s", url)
        return True


def content_cache_from_config(config: AppConfig) -> ContentCache:
    """Construct a blob-backed ContentCache from application configuration.

    Args:
        config: Application configuration instance.

    Returns:
        Configured ContentCache instance.
    """
    return ContentCache(
        BlobCacheStore(
            storage_connection_string=config.storage_connection_string,
            container=config.cache_container,
            blob_prefix=config.cache_blob_prefix,
        )
    )
