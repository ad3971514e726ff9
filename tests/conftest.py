"""Pytest configuration — adds src/ to sys.path and provides a sample Drive listing."""

import os
import sys

import pytest

# Add src/ to Python path so tests can import from drive_pages
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from drive_pages.drive.models import (  # noqa: E402
    MIME_DOCUMENT,
    MIME_FOLDER,
    MIME_HTML,
    MIME_SPREADSHEET,
    DriveFile,
)

DRIVE_ID = "drive-1"


def _file(id: str, name: str, mime: str, parent: str, *, trashed: bool = False) -> DriveFile:
    return DriveFile(
        id=id,
        name=name,
        mime_type=mime,
        parents=[parent],
        modified_time="2024-03-01T10:00:00.000Z",
        trashed=trashed,
    )


@pytest.fixture
def drive_id() -> str:
    return DRIVE_ID


@pytest.fixture
def drive_listing() -> list[DriveFile]:
    """A small drive.

    /welcome
    /archive/
    /newsroom/
    /newsroom/metro-desk/
    /newsroom/metro-desk/style-guide
    /newsroom/about-us
    /newsroom/ethics-policy

    plus a spreadsheet, a trashed doc and a doc outside the drive, none of
    which are addressable.
    """
    return [
        _file("welcome", "Welcome", MIME_DOCUMENT, DRIVE_ID),
        _file("news", "Newsroom", MIME_FOLDER, DRIVE_ID),
        _file("desk", "Metro Desk", MIME_FOLDER, "news"),
        _file("guide", "Style Guide", MIME_DOCUMENT, "desk"),
        _file("policy", "Ethics Policy", MIME_DOCUMENT, "news"),
        _file("about", "About Us", MIME_HTML, "news"),
        _file("archive", "Archive", MIME_FOLDER, DRIVE_ID),
        _file("budget", "Budget", MIME_SPREADSHEET, DRIVE_ID),
        _file("old", "Old Draft", MIME_DOCUMENT, "news", trashed=True),
        _file("orphan", "Orphan", MIME_DOCUMENT, "someone-elses-folder"),
    ]
