"""Typed exception hierarchy for tree mirror errors.

This module defines all custom exceptions used by the tree mirror library.
All exceptions inherit from TreeMirrorError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import List, Optional

from src.drive_client.errors import SyncError


class TreeMirrorError(SyncError):
    """Base exception for all tree mirror errors."""
    pass


class FilesystemError(TreeMirrorError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ConfigError(TreeMirrorError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class PathResolutionError(TreeMirrorError):
    """Raised when folder parent pointers form a cycle."""

    def __init__(self, container_id: str, chain: List[str]):
        super().__init__(
            f"Parent cycle detected while resolving folder {container_id}: "
            f"{' -> '.join(chain)}"
        )
        self.container_id = container_id
        self.chain = chain
