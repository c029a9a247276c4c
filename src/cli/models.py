"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Tree read and written successfully
    - GENERAL_ERROR (1): Config issues, invalid URL, conversion or filesystem failures
    - AUTH_ERROR (3): Token rejected or access forbidden
    - NETWORK_ERROR (4): Host unreachable or a non-success API response
    - NOT_FOUND (5): Page or attachment does not exist

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    NOT_FOUND = 5
