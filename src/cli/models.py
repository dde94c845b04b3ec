"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Mirror completed (individual files may have been skipped)
    - GENERAL_ERROR (1): Configuration, filesystem or unexpected failure
    - AUTH_ERROR (3): Credentials rejected or access to the root folder denied
    - NETWORK_ERROR (4): Drive API unreachable or failing

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
