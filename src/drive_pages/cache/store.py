"""Storage backends for the page cache."""

from __future__ import annotations

import contextlib
import hashlib
import json
import logging
from typing import Protocol

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient

from drive_pages.cache.models import CacheEntry

logger = logging.getLogger(__name__)

# Named constants for cache configuration defaults
DEFAULT_CACHE_CONTAINER = "drive-pages-state"
DEFAULT_CACHE_BLOB_PREFIX = "page-cache/"


class CacheError(Exception):
    """Raised when the underlying cache storage fails."""


class CacheStore(Protocol):
    """Keyed storage for cache entries; the key is the resolved path."""

    def read(self, path: str) -> CacheEntry | None: ...

    def write(self, entry: CacheEntry) -> None: ...

    def delete(self, path: str) -> None: ...


class MemoryCacheStore:
    """Process-local cache store backed by a plain dict."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def read(self, path: str) -> CacheEntry | None:
        return self._entries.get(path)

    def write(self, entry: CacheEntry) -> None:
        self._entries[entry.path] = entry

    def delete(self, path: str) -> None:
        self._entries.pop(path, None)

    def __len__(self) -> int:
        return len(self._entries)


class BlobCacheStore:
    """Cache store backed by Azure Blob Storage.

    Each entry is a UTF-8 JSON blob named after the SHA-256 hash of its
    path, so arbitrary site paths map to flat, valid blob names.
    """

    def __init__(
        self,
        storage_connection_string: str,
        container: str = DEFAULT_CACHE_CONTAINER,
        blob_prefix: str = DEFAULT_CACHE_BLOB_PREFIX,
    ) -> None:
        """Initialise the blob store.

        Args:
            storage_connection_string: Azure Storage connection string.
            container: Blob container name for cache storage.
            blob_prefix: Prefix for cache blob paths (e.g. "page-cache/").
        """
        self._blob_service = BlobServiceClient.from_connection_string(storage_connection_string)
        self._container = container
        self._blob_prefix = blob_prefix

    @staticmethod
    def path_hash(path: str) -> str:
        """Compute the SHA-256 hex digest of a site path."""
        return hashlib.sha256(path.encode("utf-8")).hexdigest()

    def _blob_client(self, path: str):  # type: ignore[no-untyped-def]
        container_client = self._blob_service.get_container_client(self._container)
        return container_client.get_blob_client(f"{self._blob_prefix}{self.path_hash(path)}")

    def read(self, path: str) -> CacheEntry | None:
        try:
            data = self._blob_client(path).download_blob().readall()
        except ResourceNotFoundError:
            return None
        except AzureError as exc:
            raise CacheError(f"Could not read cache entry for {path}: {exc}") from exc
        try:
            return CacheEntry.from_json(json.loads(data.decode("utf-8")))
        except (ValueError, TypeError, AttributeError) as exc:
            raise CacheError(f"Corrupt cache entry for {path}: {exc}") from exc

    def write(self, entry: CacheEntry) -> None:
        container_client = self._blob_service.get_container_client(self._container)
        with contextlib.suppress(Exception):
            container_client.create_container()

        payload = json.dumps(entry.to_json()).encode("utf-8")
        try:
            self._blob_client(entry.path).upload_blob(payload, overwrite=True)
        except AzureError as exc:
            raise CacheError(f"Could not write cache entry for {entry.path}: {exc}") from exc

    def delete(self, path: str) -> None:
        try:
            self._blob_client(path).delete_blob()
        except ResourceNotFoundError:
            return
        except AzureError as exc:
            raise CacheError(f"Could not delete cache entry for {path}: {exc}") from exc
