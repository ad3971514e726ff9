"""Unit tests for config.py — AppConfig and load_config()."""

import os
from unittest.mock import patch

import pytest

from drive_pages.config import AppConfig, load_config

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

# Minimal set of required environment variables for load_config()
_REQUIRED_ENV = {
    "DP_DRIVE_ID": "0AbCdriveRoot",
    "AzureWebJobsStorage": "DefaultEndpointsProtocol=https;AccountName=test",
}


# ---------------------------------------------------------------------------
# AppConfig tests
# ---------------------------------------------------------------------------


class TestAppConfig:
    def test_domain_defaults(self) -> None:
        config = AppConfig(drive_id="root", storage_connection_string="conn")
        assert config.drive_type == "team"
        assert config.root_name == "Library"
        assert config.cache_container == "drive-pages-state"
        assert config.cache_blob_prefix == "page-cache/"
        assert config.index_blob == "index/snapshot.json"

    def test_is_frozen(self) -> None:
        config = AppConfig(drive_id="root", storage_connection_string="conn")
        with pytest.raises(AttributeError):
            config.drive_id = "other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# load_config tests
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_reads_required_values_from_env(self) -> None:
        with patch.dict(os.environ, _REQUIRED_ENV, clear=True):
            config = load_config()
        assert config.drive_id == "0AbCdriveRoot"
        assert config.storage_connection_string.startswith("DefaultEndpointsProtocol")

    def test_optional_values_fall_back_to_defaults(self) -> None:
        with patch.dict(os.environ, _REQUIRED_ENV, clear=True):
            config = load_config()
        assert config.drive_type == "team"
        assert config.root_name == "Library"

    def test_optional_values_can_be_overridden(self) -> None:
        env = {**_REQUIRED_ENV, "DP_DRIVE_TYPE": "shared", "DP_ROOT_NAME": "Newsroom Docs"}
        with patch.dict(os.environ, env, clear=True):
            config = load_config()
        assert config.drive_type == "shared"
        assert config.root_name == "Newsroom Docs"

    def test_raises_key_error_when_drive_id_missing(self) -> None:
        env = {k: v for k, v in _REQUIRED_ENV.items() if k != "DP_DRIVE_ID"}
        with patch.dict(os.environ, env, clear=True), pytest.raises(KeyError):
            load_config()
