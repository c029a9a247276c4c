"""Confluence client library for reading page trees.

This package provides Python abstractions over the Confluence Cloud REST API,
exposing typed read operations for pages, child pages and attachments.
"""

from .api_wrapper import APIWrapper
from .auth import Authenticator, Credentials
from .errors import (
    ReaderError,
    ConfluenceError,
    InvalidCredentialsError,
    ForbiddenError,
    PageNotFoundError,
    APIUnreachableError,
    RemoteError,
    ConversionError,
)

__all__ = [
    "APIWrapper",
    "Authenticator",
    "Credentials",
    "ReaderError",
    "ConfluenceError",
    "InvalidCredentialsError",
    "ForbiddenError",
    "PageNotFoundError",
    "APIUnreachableError",
    "RemoteError",
    "ConversionError",
]
