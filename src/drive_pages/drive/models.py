"""Data models for Google Drive files and folder listings."""

from __future__ import annotations

from dataclasses import dataclass, field

# Drive API JSON field names
FIELD_ID = "id"
FIELD_NAME = "name"
FIELD_MIME_TYPE = "mimeType"
FIELD_PARENTS = "parents"
FIELD_MODIFIED_TIME = "modifiedTime"
FIELD_TRASHED = "trashed"

# files.list response keys
LIST_FILES = "files"
LIST_NEXT_PAGE_TOKEN = "nextPageToken"

# MIME types
MIME_FOLDER = "application/vnd.google-apps.folder"
MIME_DOCUMENT = "application/vnd.google-apps.document"
MIME_SPREADSHEET = "application/vnd.google-apps.spreadsheet"
MIME_HTML = "text/html"

RESOURCE_FOLDER = "folder"
RESOURCE_DOCUMENT = "document"
RESOURCE_HTML = "text/html"
RESOURCE_SPREADSHEET = "spreadsheet"

_RESOURCE_TYPES = {
    MIME_FOLDER: RESOURCE_FOLDER,
    MIME_DOCUMENT: RESOURCE_DOCUMENT,
    MIME_HTML: RESOURCE_HTML,
    MIME_SPREADSHEET: RESOURCE_SPREADSHEET,
}

# Spreadsheets are recognised but not linked to directly for now.
SUPPORTED_RESOURCE_TYPES = frozenset({RESOURCE_FOLDER, RESOURCE_DOCUMENT, RESOURCE_HTML})


def resource_type(mime_type: str) -> str | None:
    """Map a Drive MIME type to a site resource type, or None if unknown."""
    return _RESOURCE_TYPES.get(mime_type)


def is_supported(kind: str | None) -> bool:
    """Return True if pages of this resource type can be served."""
    return kind in SUPPORTED_RESOURCE_TYPES


@dataclass
class DriveFile:
    """Represents a single file or folder returned by the Drive files.list API."""

    id: str
    name: str
    mime_type: str
    parents: list[str] = field(default_factory=list)
    modified_time: str = ""
    trashed: bool = False

    @property
    def is_folder(self) -> bool:
        return self.mime_type == MIME_FOLDER

    @classmethod
    def from_api(cls, raw: dict) -> DriveFile:  # type: ignore[type-arg]
        """Map a raw Drive API file dict to a DriveFile."""
        return cls(
            id=raw.get(FIELD_ID, ""),
            name=raw.get(FIELD_NAME, ""),
            mime_type=raw.get(FIELD_MIME_TYPE, ""),
            parents=list(raw.get(FIELD_PARENTS, [])),
            modified_time=raw.get(FIELD_MODIFIED_TIME, ""),
            trashed=bool(raw.get(FIELD_TRASHED, False)),
        )

    def to_api(self) -> dict:  # type: ignore[type-arg]
        """Serialize back to the Drive API field names (used for snapshots)."""
        return {
            FIELD_ID: self.id,
            FIELD_NAME: self.name,
            FIELD_MIME_TYPE: self.mime_type,
            FIELD_PARENTS: list(self.parents),
            FIELD_MODIFIED_TIME: self.modified_time,
            FIELD_TRASHED: self.trashed,
        }
