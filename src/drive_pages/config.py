"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """Centralized application configuration.

    Required fields have no defaults and will cause a KeyError at startup
    if the corresponding environment variable is missing. Domain constants
    have sensible defaults but can be overridden via environment variables.
    """

    # Required — no defaults, fail at startup if missing
    drive_id: str
    storage_connection_string: str

    # Domain constants — defaults provided, overridable via env
    drive_type: str = "team"
    root_name: str = "Library"
    cache_container: str = "drive-pages-state"
    cache_blob_prefix: str = "page-cache/"
    index_blob: str = "index/snapshot.json"


def load_config() -> AppConfig:
    """Construct an AppConfig from environment variables.

    Required environment variables:
        DP_DRIVE_ID: ID of the top-level folder or team drive that roots the site.
        AzureWebJobsStorage: Azure Storage account connection string.

    Optional environment variables (with defaults):
        DP_DRIVE_TYPE: "team" for a team drive, "shared" for a shared folder (default: team).
        DP_ROOT_NAME: Human-readable label for the root of the folder tree (default: Library).
        DP_CACHE_CONTAINER: Blob container for the page cache and index snapshot.
        DP_CACHE_BLOB_PREFIX: Blob prefix for cached pages.
        DP_INDEX_BLOB: Blob path for the index snapshot.

    Google credentials are not part of this config; they are resolved through
    Application Default Credentials.

    Returns:
        Configured AppConfig instance.
    """
    return AppConfig(
        drive_id=os.environ["DP_DRIVE_ID"],
        storage_connection_string=os.environ["AzureWebJobsStorage"],  # noqa: SIM112
        drive_type=os.environ.get("DP_DRIVE_TYPE", "team"),
        root_name=os.environ.get("DP_ROOT_NAME", "Library"),
        cache_container=os.environ.get("DP_CACHE_CONTAINER", "drive-pages-state"),
        cache_blob_prefix=os.environ.get("DP_CACHE_BLOB_PREFIX", "page-cache/"),
        index_blob=os.environ.get("DP_INDEX_BLOB", "index/snapshot.json"),
    )
