"""API wrapper for the Google Drive REST API v3.

This module wraps an httpx AsyncClient and provides error translation from
HTTP exceptions to our typed exception hierarchy. It exposes the three
read-only operations the mirror needs: listing a folder's children,
exporting a native document and downloading raw file content.
"""

import logging
import re
from typing import Any, Dict, Optional

import httpx

from src.models.drive_node import DriveNode, ListingPage

from .auth import Authenticator
from .errors import (
    APIAccessError,
    APIUnreachableError,
    FileNotFoundInDriveError,
    InvalidCredentialsError,
    PermissionDeniedError,
)

logger = logging.getLogger(__name__)

# Fields requested for every listed file
LIST_FIELDS = (
    "nextPageToken, "
    "files(id, name, mimeType, fileExtension, parents, createdTime, modifiedTime)"
)

# Largest page the Drive API accepts; a single page is all we fetch
PAGE_SIZE = 1000

MARKDOWN_MIME_TYPE = "text/markdown"

_FILE_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')


class DriveAPIWrapper:
    """Async wrapper around the Drive v3 REST API with error translation.

    This class provides a thin wrapper over httpx that:
    1. Attaches the bearer token from the Authenticator
    2. Translates HTTP errors to typed exceptions
    3. Converts listing responses to DriveNode objects

    Example:
        >>> auth = Authenticator()
        >>> async with DriveAPIWrapper(auth) as api:
        ...     page = await api.list_children("1AbC")
    """

    def __init__(
        self,
        authenticator: Authenticator,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        """Initialize the API wrapper.

        Args:
            authenticator: Authenticator instance for loading credentials
            client: Optional preconfigured AsyncClient (used by tests to
                    inject an httpx.MockTransport)
            timeout: Request timeout in seconds
        """
        self._authenticator = authenticator
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout
        self._api_url: Optional[str] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the AsyncClient.

        The client is created lazily on first use so that missing
        credentials surface at the first API call.

        Raises:
            InvalidCredentialsError: If credentials are missing
        """
        creds = self._authenticator.get_credentials()
        self._api_url = creds.api_url
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
            )
        self._client.headers["Authorization"] = f"Bearer {creds.access_token}"
        return self._client

    async def aclose(self) -> None:
        """Close the underlying client if this wrapper created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "DriveAPIWrapper":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _validate_file_id(self, file_id: str) -> None:
        """Validate that a file ID is in the Drive ID format.

        Folder IDs are interpolated into listing queries, so anything outside
        the Drive ID alphabet is rejected to prevent query injection.

        Raises:
            ValueError: If file_id is empty or contains invalid characters
        """
        if not file_id or not str(file_id).strip():
            raise ValueError("file_id cannot be empty")

        if not _FILE_ID_PATTERN.match(str(file_id).strip()):
            raise ValueError(
                f"Invalid file_id format: '{file_id}'. "
                f"File IDs may contain only letters, digits, '-' and '_'."
            )

    def _sanitize_credentials(self, text: str) -> str:
        """Mask bearer tokens and token parameters in error text.

        Example:
            >>> api._sanitize_credentials("Authorization: Bearer ya29.abc")
            'Authorization: ***REDACTED***'
        """
        if not text:
            return text

        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            text,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'(access_?token|token)["\']?\s*[:=]\s*["\']?([^"\'\s&]+)',
            r'\1=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        # Google OAuth access tokens
        sanitized = re.sub(r'\bya29\.[\w.-]+', '***REDACTED***', sanitized)
        return sanitized

    def _translate_error(
        self,
        exception: Exception,
        operation: str,
        resource_id: str
    ) -> Exception:
        """Translate httpx exceptions to typed Drive exceptions.

        Args:
            exception: The original exception from httpx
            operation: Description of the operation that failed (for logging)
            resource_id: File or folder ID the operation targeted

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        endpoint = self._api_url or "unknown"

        if isinstance(exception, (httpx.TimeoutException, httpx.TransportError)):
            return APIUnreachableError(endpoint=endpoint)

        if isinstance(exception, httpx.HTTPStatusError):
            status_code = exception.response.status_code
            if status_code == 401:
                return InvalidCredentialsError(endpoint=endpoint)
            if status_code == 403:
                return PermissionDeniedError(resource_id=resource_id)
            if status_code == 404:
                return FileNotFoundInDriveError(resource_id=resource_id)

        safe_error_msg = self._sanitize_credentials(str(exception))
        logger.error(f"API operation failed: {operation} - {safe_error_msg}")
        return APIAccessError(f"Google Drive API failure during {operation}")

    async def _get(
        self,
        path: str,
        params: Dict[str, Any],
        operation: str,
        resource_id: str
    ) -> httpx.Response:
        """Issue a GET against the API and translate any failure."""
        client = self._get_client()
        try:
            response = await client.get(f"{self._api_url}{path}", params=params)
            response.raise_for_status()
            return response
        except Exception as e:
            raise self._translate_error(e, operation, resource_id) from e

    async def list_children(
        self,
        folder_id: str,
        query: Optional[str] = None
    ) -> ListingPage:
        """List one page of immediate children of a folder.

        Args:
            folder_id: The parent folder ID
            query: Optional Drive query clause ANDed with the parent clause
                   (e.g., "mimeType = 'application/vnd.google-apps.document'")

        Returns:
            ListingPage with children ordered by modification time, newest
            first. ``has_more`` reports whether Drive had further pages.

        Raises:
            InvalidCredentialsError: If credentials are invalid
            PermissionDeniedError: If the folder cannot be read
            FileNotFoundInDriveError: If the folder doesn't exist
            APIUnreachableError: If the API is unreachable
            APIAccessError: For any other API failure or a malformed listing
        """
        self._validate_file_id(folder_id)

        parent_clause = f"'{folder_id}' in parents"
        q = f"{parent_clause} and ({query})" if query else parent_clause

        logger.debug(f"Drive API: GET /files q={q}")
        response = await self._get(
            "/files",
            params={
                "q": q,
                "fields": LIST_FIELDS,
                "orderBy": "modifiedTime desc",
                "pageSize": PAGE_SIZE,
            },
            operation=f"list_children({folder_id})",
            resource_id=folder_id,
        )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Listing of folder {folder_id} is not valid JSON: {e}")
            raise APIAccessError(
                f"Google Drive API returned a malformed listing for folder {folder_id}"
            ) from e

        files = data.get('files', []) if isinstance(data, dict) else None
        if not isinstance(files, list):
            logger.error(f"Listing of folder {folder_id} has no 'files' list")
            raise APIAccessError(
                f"Google Drive API returned a malformed listing for folder {folder_id}"
            )

        nodes = []
        for file_data in files:
            try:
                nodes.append(DriveNode.from_api(file_data))
            except ValueError as e:
                logger.warning(f"Skipping malformed entry under {folder_id}: {e}")

        return ListingPage(nodes=nodes, has_more=bool(data.get('nextPageToken')))

    async def export_as_markup(
        self,
        file_id: str,
        mime_type: str = MARKDOWN_MIME_TYPE
    ) -> str:
        """Export a native Google document to a text representation.

        Args:
            file_id: The document ID
            mime_type: Export MIME type ("text/markdown" or "text/html")

        Returns:
            The exported text

        Raises:
            DriveError subclasses as for list_children
        """
        self._validate_file_id(file_id)

        logger.debug(f"Drive API: GET /files/{file_id}/export mimeType={mime_type}")
        response = await self._get(
            f"/files/{file_id}/export",
            params={"mimeType": mime_type},
            operation=f"export_as_markup({file_id})",
            resource_id=file_id,
        )
        return response.text

    async def fetch_raw(self, file_id: str) -> bytes:
        """Download the raw content of a stored (non-native) file.

        Raises:
            DriveError subclasses as for list_children
        """
        self._validate_file_id(file_id)

        logger.debug(f"Drive API: GET /files/{file_id}?alt=media")
        response = await self._get(
            f"/files/{file_id}",
            params={"alt": "media"},
            operation=f"fetch_raw({file_id})",
            resource_id=file_id,
        )
        return response.content
