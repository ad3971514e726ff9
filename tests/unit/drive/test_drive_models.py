"""Unit tests for drive/models.py — DriveFile and resource type mapping."""

from drive_pages.drive.models import (
    MIME_DOCUMENT,
    MIME_FOLDER,
    MIME_HTML,
    MIME_SPREADSHEET,
    DriveFile,
    is_supported,
    resource_type,
)


class TestResourceType:
    def test_maps_known_mime_types(self) -> None:
        assert resource_type(MIME_FOLDER) == "folder"
        assert resource_type(MIME_DOCUMENT) == "document"
        assert resource_type(MIME_HTML) == "text/html"
        assert resource_type(MIME_SPREADSHEET) == "spreadsheet"

    def test_unknown_mime_type_is_none(self) -> None:
        assert resource_type("image/png") is None


class TestIsSupported:
    def test_folders_documents_and_html_are_supported(self) -> None:
        assert is_supported("folder")
        assert is_supported("document")
        assert is_supported("text/html")

    def test_spreadsheets_are_not_supported(self) -> None:
        assert not is_supported("spreadsheet")

    def test_none_is_not_supported(self) -> None:
        assert not is_supported(None)


class TestDriveFile:
    def test_from_api_maps_all_fields(self) -> None:
        raw = {
            "id": "doc-1",
            "name": "Style Guide",
            "mimeType": MIME_DOCUMENT,
            "parents": ["folder-1"],
            "modifiedTime": "2024-03-01T10:00:00.000Z",
            "trashed": False,
        }

        item = DriveFile.from_api(raw)

        assert item.id == "doc-1"
        assert item.name == "Style Guide"
        assert item.parents == ["folder-1"]
        assert item.modified_time == "2024-03-01T10:00:00.000Z"
        assert item.is_folder is False

    def test_from_api_tolerates_missing_fields(self) -> None:
        item = DriveFile.from_api({"id": "x"})

        assert item.name == ""
        assert item.parents == []
        assert item.trashed is False

    def test_to_api_is_accepted_by_from_api(self) -> None:
        item = DriveFile(id="f", name="Desk", mime_type=MIME_FOLDER, parents=["root"])

        assert DriveFile.from_api(item.to_api()) == item
