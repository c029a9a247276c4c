"""Command-line interface for reading Confluence page trees.

This package provides the `confluence-tree` CLI tool that reads a page,
its descendants and attachments, and writes them as markdown files or a
tar archive.
"""

from .models import ExitCode
from .errors import CLIError, ConfigNotFoundError

__all__ = [
    'ExitCode',
    'CLIError',
    'ConfigNotFoundError',
]
