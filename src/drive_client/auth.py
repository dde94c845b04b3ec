"""Authentication module for loading Google Drive credentials.

This module handles loading a Drive API access token from environment
variables using python-dotenv. Acquiring or refreshing the token is left to
the caller (gcloud, a CI step, a service account helper); this module only
validates that one is present.
"""

import os
from typing import NamedTuple

from dotenv import load_dotenv

from .errors import InvalidCredentialsError

DEFAULT_API_URL = "https://www.googleapis.com/drive/v3"


class Credentials(NamedTuple):
    """Google Drive API credentials."""
    api_url: str
    access_token: str


class Authenticator:
    """Loads and validates Drive credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged.

    Environment variables:
        GOOGLE_DRIVE_ACCESS_TOKEN: OAuth2 bearer token with drive.readonly scope
        GOOGLE_DRIVE_API_URL: Optional Drive v3 base URL
            (default: https://www.googleapis.com/drive/v3)

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Connecting to {creds.api_url}")
    """

    def __init__(self):
        """Initialize the authenticator by loading environment variables from .env file."""
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get Drive credentials from environment variables.

        Returns:
            Credentials: A named tuple containing api_url and access_token

        Raises:
            InvalidCredentialsError: If the access token is missing
        """
        api_url = os.getenv('GOOGLE_DRIVE_API_URL') or DEFAULT_API_URL
        access_token = os.getenv('GOOGLE_DRIVE_ACCESS_TOKEN')

        if not access_token:
            raise InvalidCredentialsError(
                endpoint=api_url,
                reason="GOOGLE_DRIVE_ACCESS_TOKEN is not set"
            )

        return Credentials(api_url=api_url.rstrip('/'), access_token=access_token)
