"""Data models for Google Drive nodes and listings."""

from src.models.drive_node import (
    DriveNode,
    ListingPage,
    NodeType,
    FOLDER_MIME_TYPE,
    DOCUMENT_MIME_TYPE,
    SPREADSHEET_MIME_TYPE,
)

__all__ = [
    'DriveNode',
    'ListingPage',
    'NodeType',
    'FOLDER_MIME_TYPE',
    'DOCUMENT_MIME_TYPE',
    'SPREADSHEET_MIME_TYPE',
]
