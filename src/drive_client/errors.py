"""Typed exception hierarchy for Google Drive-related errors.

This module defines all custom exceptions used by the Drive client library.
All exceptions inherit from DriveError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all drive-mirror errors.

    Use this to catch any application-level error from the mirror tool.
    """
    pass


class DriveError(SyncError):
    """Base exception for all Google Drive-related errors."""
    pass


class InvalidCredentialsError(DriveError):
    """Raised when the access token is missing, invalid or expired."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"Drive credentials are invalid (endpoint: {endpoint})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class PermissionDeniedError(DriveError):
    """Raised when the caller may not read a folder or file."""

    def __init__(self, resource_id: str):
        super().__init__(f"Permission denied for {resource_id}")
        self.resource_id = resource_id


class FileNotFoundInDriveError(DriveError):
    """Raised when a requested file or folder does not exist."""

    def __init__(self, resource_id: str):
        super().__init__(f"File {resource_id} not found")
        self.resource_id = resource_id


class APIUnreachableError(DriveError):
    """Raised when the Drive API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(DriveError):
    """Raised when an API call fails for any other reason."""

    def __init__(self, message: str = "Google Drive API failure"):
        super().__init__(message)


class ConversionError(DriveError):
    """Raised when content conversion between formats fails."""

    def __init__(self, message: str):
        super().__init__(message)
