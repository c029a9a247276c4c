"""Typed exception hierarchy for Confluence-related errors.

This module defines all custom exceptions raised while talking to the
Confluence REST API. All exceptions inherit from ConfluenceError so callers
can catch every remote failure in one place, and each carries the context
(page id, host, status) needed to explain what went wrong.
"""

from typing import Optional


class ReaderError(Exception):
    """Base exception for all confluence-tree-reader errors.

    Use this to catch any application-level error from the reader.
    """
    pass


class ConfluenceError(ReaderError):
    """Base exception for all Confluence-related errors."""
    pass


class InvalidCredentialsError(ConfluenceError):
    """Raised when the host rejects the configured token (HTTP 401)."""

    def __init__(self, host: str):
        super().__init__(f"API token was rejected by {host}")
        self.host = host


class ForbiddenError(ConfluenceError):
    """Raised when the token is valid but lacks access to a resource (HTTP 403)."""

    def __init__(self, host: str, resource: str):
        super().__init__(f"Access to {resource} is forbidden on {host}")
        self.host = host
        self.resource = resource


class PageNotFoundError(ConfluenceError):
    """Raised when a requested page or attachment does not exist."""

    def __init__(self, page_id: str, attachment_id: Optional[str] = None):
        if attachment_id:
            message = f"Attachment {attachment_id} of page {page_id} not found"
        else:
            message = f"Page {page_id} not found"
        super().__init__(message)
        self.page_id = page_id
        self.attachment_id = attachment_id


class APIUnreachableError(ConfluenceError):
    """Raised when the Confluence API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class RemoteError(ConfluenceError):
    """Raised on any other non-success response or a malformed payload."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConversionError(ConfluenceError):
    """Raised when page HTML cannot be converted to markdown."""

    def __init__(self, message: str):
        super().__init__(message)
