"""Google Drive v3 REST client with Application Default Credentials."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any
from urllib import request as urllib_request
from urllib.error import HTTPError
from urllib.parse import quote, urlencode

import google.auth
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request as AuthRequest

if TYPE_CHECKING:
    from drive_pages.config import AppConfig

logger = logging.getLogger(__name__)

DRIVE_BASE_URL = "https://www.googleapis.com/drive/v3"
DRIVE_SCOPES = ["https://www.googleapis.com/auth/drive"]

OPTION_FILE_ID = "fileId"
OPTION_REQUEST_BODY = "requestBody"


class DriveAuthError(Exception):
    """Raised when Google credentials cannot be obtained or refreshed."""


class DriveApiError(Exception):
    """Raised when the Drive API returns a non-2xx response."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"Drive API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class DriveClient:
    """Authenticated client for the Google Drive v3 API."""

    def __init__(self, scopes: list[str] | None = None) -> None:
        """Initialise the client.

        Credentials are resolved lazily on the first request so that
        constructing a client never touches the network.

        Args:
            scopes: OAuth scopes to request (defaults to full Drive access).
        """
        self._scopes = scopes or DRIVE_SCOPES
        self._credentials: Any = None

    def ensure_authenticated(self) -> None:
        """Resolve and refresh credentials without making an API call.

        Raises:
            DriveAuthError: If credentials cannot be obtained.
        """
        self._acquire_token()

    def _acquire_token(self) -> str:
        """Return a valid Bearer token, refreshing the credentials if needed.

        Raises:
            DriveAuthError: If credentials cannot be obtained or refreshed.
        """
        try:
            if self._credentials is None:
                self._credentials, _project = google.auth.default(scopes=self._scopes)
            if not self._credentials.valid:
                self._credentials.refresh(AuthRequest())
        except GoogleAuthError as exc:
            logger.error("[_acquire_token] credential resolution failed; error:%s", exc)
            raise DriveAuthError(f"Could not authenticate with Google: {exc}") from exc
        return str(self._credentials.token)

    def get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Perform an authenticated GET request to the Drive API.

        Args:
            path: URL path relative to DRIVE_BASE_URL (must start with '/').
            params: Query parameters; None values are dropped.

        Returns:
            Parsed JSON response body as a dict.

        Raises:
            DriveAuthError: If credentials cannot be obtained.
            DriveApiError: If the API returns a non-2xx status code.
        """
        return self._request("GET", path, params)

    def update(self, options: dict[str, Any]) -> dict[str, Any]:
        """Call files.update using googleapis-style options.

        ``fileId`` becomes the path parameter, ``requestBody`` (if any) the
        JSON body, and every other non-None option a query parameter, e.g.
        ``addParents``, ``removeParents``, ``corpora`` or ``teamDriveId``.

        Args:
            options: Call options for the update.

        Returns:
            The updated file resource.

        Raises:
            DriveAuthError: If credentials cannot be obtained.
            DriveApiError: If the API returns a non-2xx status code.
        """
        params = dict(options)
        file_id = params.pop(OPTION_FILE_ID)
        body = params.pop(OPTION_REQUEST_BODY, None) or {}
        logger.info("[update] updating file; file_id:%s", file_id)
        return self._request("PATCH", f"/files/{quote(file_id, safe='')}", params, body)

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        token = self._acquire_token()
        url = f"{DRIVE_BASE_URL}{path}"
        query = _encode_params(params)
        if query:
            url = f"{url}?{query}"

        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        data = None
        if body is not None:
            data = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"

        req = urllib_request.Request(url, data=data, headers=headers, method=method)
        try:
            with urllib_request.urlopen(req) as resp:
                raw = resp.read()
                return json.loads(raw) if raw else {}  # type: ignore[no-any-return]
        except HTTPError as exc:
            raw = exc.read()
            try:
                detail = json.loads(raw).get("error", {}).get("message", exc.reason)
            except Exception:
                detail = exc.reason
            raise DriveApiError(exc.code, detail) from exc


def _encode_params(params: dict[str, Any] | None) -> str:
    """Encode query parameters for Drive (lists comma-joined, bools lowercase)."""
    if not params:
        return ""
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            pairs.append((key, "true" if value else "false"))
        elif isinstance(value, (list, tuple)):
            pairs.append((key, ",".join(str(v) for v in value)))
        else:
            pairs.append((key, str(value)))
    return urlencode(pairs)


def drive_client_from_config(config: AppConfig) -> DriveClient:
    """Construct a DriveClient from application configuration.

    Args:
        config: Application configuration instance.

    Returns:
        Configured DriveClient instance.
    """
    return DriveClient()
