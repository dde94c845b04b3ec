"""Command-line interface for the Google Drive mirror.

This package provides the `drive-mirror` CLI tool that mirrors a Drive
folder hierarchy into a local Markdown tree, with progress indication,
a run summary and exit codes per failure class.
"""

from .mirror_command import MirrorCommand
from .models import ExitCode
from .errors import CLIError, ConfigNotFoundError

__all__ = [
    'MirrorCommand',
    'ExitCode',
    'CLIError',
    'ConfigNotFoundError',
]
