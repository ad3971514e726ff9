"""Move orchestrator — moves a Drive resource and keeps the index and page cache consistent."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Any

from drive_pages.cache.content import ContentCache, content_cache_from_config
from drive_pages.cache.store import CacheError
from drive_pages.drive.client import DriveClient, drive_client_from_config
from drive_pages.index.metadata import MetadataIndex, metadata_index_from_config

if TYPE_CHECKING:
    from drive_pages.config import AppConfig

logger = logging.getLogger(__name__)

TRASH = "trash"
HOME_PATH = "/"


class DriveMode(str, Enum):
    """How the containing collection is addressed in Drive API calls."""

    TEAM = "team"
    SHARED = "shared"

    @classmethod
    def parse(cls, value: str | DriveMode | None) -> DriveMode:
        """Map a caller-supplied mode to a DriveMode; unknown or missing is SHARED."""
        if isinstance(value, DriveMode):
            return value
        return cls.TEAM if value == cls.TEAM.value else cls.SHARED


class MoveError(Exception):
    """Expected validation failure of a move request."""


class NoParentFolderError(MoveError):
    """The resource (or destination) has no resolvable folder in the index."""


class RootMoveError(MoveError):
    """The top-level container itself cannot be moved."""


class InvalidDestinationError(MoveError):
    """The destination is the resource itself or lies beneath it."""


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a move: either a redirect URL or a validation error."""

    url: str | None = None
    error: MoveError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _utcnow() -> datetime:
    return datetime.now(UTC)


class MoveOrchestrator:
    """Moves resources in Drive and reconciles the local index and page cache.

    Authentication and Drive API failures are raised; validation failures
    are returned as a MoveResult carrying a MoveError. Cache failures never
    escape: the remote move has already happened, so the caller is sent
    home instead.
    """

    def __init__(
        self,
        drive_client: DriveClient,
        index: MetadataIndex,
        cache: ContentCache,
        drive_id: str,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialise the orchestrator.

        Args:
            drive_client: Authenticated DriveClient used for files.update.
            index: MetadataIndex used to resolve old and new paths.
            cache: ContentCache holding rendered pages by path.
            drive_id: ID of the top-level container (also the team drive ID).
            clock: Source of cache modification timestamps.
        """
        self._drive = drive_client
        self._index = index
        self._cache = cache
        self._drive_id = drive_id
        self._clock = clock
        self._last_timestamp: datetime | None = None

    def move_file(
        self,
        file_id: str,
        destination_id: str,
        drive_mode: str | DriveMode | None = None,
    ) -> MoveResult:
        """Move a resource into a destination folder (or to the trash).

        Steps:
            1. Establish Drive credentials.
            2. Resolve the resource and destination in the metadata index.
            3. Call files.update with mode-dependent options.
            4. Re-parent the resource in the local index, de-duplicating its
               slug among the destination's children.
            5. Carry the cached page over to the new path and purge the old one,
               along with the old pages of any descendants.

        Args:
            file_id: Drive ID of the resource to move.
            destination_id: Drive ID of the destination folder, or "trash".
            drive_mode: "team" for team-drive addressing, otherwise shared.

        Returns:
            MoveResult with the new path, with "/" when no cached page could be
            carried over or the resource was trashed, or with a MoveError.

        Raises:
            DriveAuthError: If Drive credentials cannot be obtained.
            DriveApiError: If the Drive update call fails.
        """
        mode = DriveMode.parse(drive_mode)
        self._drive.ensure_authenticated()
        self._index.ensure_loaded()

        if file_id == self._drive_id:
            logger.info("[move_file] refused to move the root container; file_id:%s", file_id)
            return MoveResult(error=RootMoveError("The top-level folder cannot be moved"))

        meta = self._index.get_meta(file_id)
        if meta is None or meta.parent_id is None:
            logger.info("[move_file] no parent folder for resource; file_id:%s", file_id)
            return MoveResult(error=NoParentFolderError(f"No parent folders found for {file_id}"))
        old_path = meta.url

        if destination_id == TRASH:
            return self._trash(file_id, old_path, mode)

        destination = self._index.get_meta(destination_id)
        if destination is None or not destination.is_folder:
            logger.info(
                "[move_file] destination is not an indexed folder; destination_id:%s",
                destination_id,
            )
            return MoveResult(
                error=NoParentFolderError(f"Destination {destination_id} is not a known folder")
            )
        if self._index.is_within(destination_id, file_id):
            logger.info(
                "[move_file] destination is the resource or inside it; "
                "file_id:%s;destination_id:%s",
                file_id,
                destination_id,
            )
            return MoveResult(
                error=InvalidDestinationError(
                    f"Cannot move {file_id} into itself or one of its subfolders"
                )
            )
        descendant_paths = [n.url for n in self._index.descendants(file_id)]

        options = self._update_options(file_id, mode)
        options["addParents"] = destination_id
        options["removeParents"] = meta.parent_id
        self._drive.update(options)

        moved = self._index.relocate(file_id, destination_id)
        new_path = moved.url if moved is not None else f"{destination.url}/{meta.slug}"
        logger.info(
            "[move_file] moved resource; file_id:%s;old_path:%s;new_path:%s;mode:%s",
            file_id,
            old_path,
            new_path,
            mode.value,
        )

        url = self._carry_cache(file_id, old_path, new_path)
        if old_path != new_path:
            self._purge_descendants(descendant_paths)
        return MoveResult(url=url)

    def _trash(self, file_id: str, old_path: str, mode: DriveMode) -> MoveResult:
        descendant_paths = [n.url for n in self._index.descendants(file_id)]
        options = self._update_options(file_id, mode)
        options["requestBody"] = {"trashed": True}
        self._drive.update(options)
        logger.info("[move_file] trashed resource; file_id:%s;old_path:%s", file_id, old_path)
        self._index.remove(file_id)
        self._purge_quietly(old_path, self._next_timestamp())
        self._purge_descendants(descendant_paths)
        return MoveResult(url=HOME_PATH)

    def _carry_cache(self, file_id: str, old_path: str, new_path: str) -> str:
        """Re-home the cached page and return the URL to redirect to."""
        try:
            entry = self._cache.get(old_path)
        except CacheError:
            logger.warning("[move_file] cache lookup failed; path:%s", old_path, exc_info=True)
            return HOME_PATH

        if entry.html is None:
            logger.info("[move_file] no cached html for old path; path:%s", old_path)
            return HOME_PATH

        modified = self._next_timestamp()
        try:
            self._cache.add(file_id, modified, new_path, entry.html)
        except CacheError:
            logger.warning("[move_file] cache write failed; path:%s", new_path, exc_info=True)
            return HOME_PATH

        if old_path != new_path:
            self._purge_quietly(old_path, modified)
        return new_path

    def _purge_descendants(self, paths: list[str]) -> None:
        # Pages beneath a moved folder are re-rendered on demand at their new paths.
        if not paths:
            return
        modified = self._next_timestamp()
        for path in paths:
            self._purge_quietly(path, modified)

    def _purge_quietly(self, path: str, modified: datetime) -> None:
        # A stale old-path entry is corrected by the next re-render.
        try:
            self._cache.purge(path, modified)
        except CacheError:
            logger.warning("[move_file] cache purge failed; path:%s", path, exc_info=True)

    def _update_options(self, file_id: str, mode: DriveMode) -> dict[str, Any]:
        options: dict[str, Any] = {"fileId": file_id, "supportsAllDrives": True}
        if mode is DriveMode.TEAM:
            options["corpora"] = "teamDrive"
            options["teamDriveId"] = self._drive_id
        return options

    def _next_timestamp(self) -> datetime:
        now = self._clock()
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now


def move_orchestrator_from_config(config: AppConfig) -> MoveOrchestrator:
    """Construct a MoveOrchestrator from application configuration.

    Creates a DriveClient, MetadataIndex and blob-backed ContentCache from
    the config, then wires them into a MoveOrchestrator.

    Args:
        config: Application configuration instance.

    Returns:
        Configured MoveOrchestrator instance.
    """
    client = drive_client_from_config(config)
    return MoveOrchestrator(
        drive_client=client,
        index=metadata_index_from_config(client, config),
        cache=content_cache_from_config(config),
        drive_id=config.drive_id,
    )
