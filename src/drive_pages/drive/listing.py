"""Drive listing sync — enumerates every live file and folder in the site's drive."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from drive_pages.drive.client import DriveClient
from drive_pages.drive.models import (
    FIELD_ID,
    FIELD_MIME_TYPE,
    FIELD_MODIFIED_TIME,
    FIELD_NAME,
    FIELD_PARENTS,
    FIELD_TRASHED,
    LIST_FILES,
    LIST_NEXT_PAGE_TOKEN,
    DriveFile,
)

if TYPE_CHECKING:
    from drive_pages.config import AppConfig

logger = logging.getLogger(__name__)

DRIVE_TYPE_TEAM = "team"
DEFAULT_PAGE_SIZE = 1000

_LIST_FIELDS = (
    f"{LIST_NEXT_PAGE_TOKEN},{LIST_FILES}("
    f"{FIELD_ID},{FIELD_NAME},{FIELD_MIME_TYPE},{FIELD_PARENTS},{FIELD_MODIFIED_TIME},{FIELD_TRASHED})"
)


class DriveLister:
    """Lists the files of a team drive or shared folder via files.list."""

    def __init__(
        self,
        drive_client: DriveClient,
        drive_id: str,
        drive_type: str = DRIVE_TYPE_TEAM,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Initialise the lister.

        Args:
            drive_client: Authenticated DriveClient instance.
            drive_id: ID of the team drive or top-level shared folder.
            drive_type: "team" to list a team drive, anything else to list
                the files visible to the service account.
            page_size: Maximum number of files per files.list page.
        """
        self._drive = drive_client
        self._drive_id = drive_id
        self._drive_type = drive_type
        self._page_size = page_size

    def list_files(self) -> list[DriveFile]:
        """Fetch every non-trashed file and folder.

        Follows nextPageToken pagination until the last page.

        Returns:
            All DriveFile objects visible in the drive, in API order.
        """
        files: list[DriveFile] = []
        page_token: str | None = None
        pages = 0
        while True:
            response = self._drive.get("/files", self._list_params(page_token))
            pages += 1
            for raw in response.get(LIST_FILES, []):
                files.append(DriveFile.from_api(raw))

            page_token = response.get(LIST_NEXT_PAGE_TOKEN)
            if not page_token:
                break

        logger.info("[list_files] listed drive; file_count:%d;pages:%d", len(files), pages)
        return files

    def _list_params(self, page_token: str | None) -> dict[str, Any]:
        params: dict[str, Any] = {
            "q": "trashed = false",
            "fields": _LIST_FIELDS,
            "pageSize": self._page_size,
            "pageToken": page_token,
        }
        if self._drive_type == DRIVE_TYPE_TEAM:
            params.update(
                corpora="drive",
                driveId=self._drive_id,
                includeItemsFromAllDrives=True,
                supportsAllDrives=True,
            )
        else:
            params["corpora"] = "user"
        return params


def drive_lister_from_config(drive_client: DriveClient, config: AppConfig) -> DriveLister:
    """Construct a DriveLister from application configuration.

    Args:
        drive_client: Authenticated DriveClient instance.
        config: Application configuration instance.

    Returns:
        Configured DriveLister instance.
    """
    return DriveLister(
        drive_client=drive_client,
        drive_id=config.drive_id,
        drive_type=config.drive_type,
    )
