"""Index snapshot persistence in Azure Blob Storage."""

from __future__ import annotations

import contextlib
import json
import logging
from typing import TYPE_CHECKING

from azure.core.exceptions import ResourceNotFoundError
from azure.storage.blob import BlobServiceClient

from drive_pages.drive.models import DriveFile

if TYPE_CHECKING:
    from drive_pages.config import AppConfig

logger = logging.getLogger(__name__)


class IndexSnapshotStore:
    """Stores the last Drive listing as a JSON blob.

    Lets a fresh worker answer metadata lookups without re-listing the
    whole drive; the scheduled refresh keeps it current.
    """

    def __init__(self, storage_connection_string: str, container: str, blob: str) -> None:
        """Initialise the snapshot store.

        Args:
            storage_connection_string: Azure Storage connection string.
            container: Blob container name.
            blob: Blob path of the snapshot file.
        """
        self._blob_service = BlobServiceClient.from_connection_string(storage_connection_string)
        self._container = container
        self._blob = blob

    def load(self) -> list[DriveFile] | None:
        """Read the persisted listing.

        Returns:
            The stored files, or None if no snapshot has been saved yet.
        """
        try:
            container_client = self._blob_service.get_container_client(self._container)
            blob_client = container_client.get_blob_client(self._blob)
            data = blob_client.download_blob().readall()
        except ResourceNotFoundError:
            logger.info("[load] no index snapshot found in blob storage")
            return None

        files = [DriveFile.from_api(raw) for raw in json.loads(data.decode("utf-8"))]
        logger.info("[load] loaded index snapshot; file_count:%d", len(files))
        return files

    def save(self, files: list[DriveFile]) -> None:
        """Write the listing to blob storage, creating the container if needed.

        Args:
            files: Files from the latest Drive listing.
        """
        container_client = self._blob_service.get_container_client(self._container)
        with contextlib.suppress(Exception):
            container_client.create_container()

        payload = json.dumps([f.to_api() for f in files]).encode("utf-8")
        blob_client = container_client.get_blob_client(self._blob)
        blob_client.upload_blob(payload, overwrite=True)
        logger.info("[save] saved index snapshot; file_count:%d", len(files))


def snapshot_store_from_config(config: AppConfig) -> IndexSnapshotStore:
    """Construct an IndexSnapshotStore from application configuration.

    Args:
        config: Application configuration instance.

    Returns:
        Configured IndexSnapshotStore instance.
    """
    return IndexSnapshotStore(
        storage_connection_string=config.storage_connection_string,
        container=config.cache_container,
        blob=config.index_blob,
    )
