"""Typed exception hierarchy for tree reader errors.

This module defines the exceptions raised while resolving URLs, loading
configuration and materializing a page tree. All exceptions inherit from
TreeReaderError and carry the offending value as an attribute.
"""

from typing import Optional

from src.confluence_client.errors import ReaderError


class TreeReaderError(ReaderError):
    """Base exception for all tree reader errors."""
    pass


class InvalidUrlError(TreeReaderError):
    """Raised when no page id can be extracted from a URL."""

    def __init__(self, url: str, reason: Optional[str] = None):
        message = f"Invalid Confluence page URL: {url}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.url = url
        self.reason = reason


class FilesystemError(TreeReaderError):
    """Raised when materializing files to disk fails or a path is unsafe."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ConfigError(TreeReaderError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class NotModifiedError(TreeReaderError):
    """Raised when a tree's etag matches the one the caller already has."""

    def __init__(self, etag: str):
        super().__init__(f"Page tree not modified (etag {etag})")
        self.etag = etag
