"""Google Drive client library for the mirror.

This package provides async Python abstractions over the Google Drive REST
API v3, enabling clean and type-safe read access to folders and files.
"""

from .errors import (
    SyncError,
    DriveError,
    InvalidCredentialsError,
    PermissionDeniedError,
    FileNotFoundInDriveError,
    APIUnreachableError,
    APIAccessError,
    ConversionError,
)

__all__ = [
    "SyncError",
    "DriveError",
    "InvalidCredentialsError",
    "PermissionDeniedError",
    "FileNotFoundInDriveError",
    "APIUnreachableError",
    "APIAccessError",
    "ConversionError",
]
