"""Page tree reader for Confluence.

This package turns a Confluence page URL into an ordered list of files:
attachments, pages converted to markdown, and a synthesized index, ready
to be handed to a documentation pipeline.
"""

from .config_loader import ConfigLoader
from .errors import (
    TreeReaderError,
    InvalidUrlError,
    FilesystemError,
    ConfigError,
    NotModifiedError,
)
from .models import ConfluenceIntegrationConfig, ReaderConfig
from .path_namer import PathNamer
from .tree_builder import TreeBuilder
from .tree_response import TreeResponse
from .url_parser import PageUrl, parse_page_id, parse_page_url
from .url_reader import ConfluenceUrlReader, select_reader

__all__ = [
    'ConfigLoader',
    'TreeReaderError',
    'InvalidUrlError',
    'FilesystemError',
    'ConfigError',
    'NotModifiedError',
    'ConfluenceIntegrationConfig',
    'ReaderConfig',
    'PathNamer',
    'TreeBuilder',
    'TreeResponse',
    'PageUrl',
    'parse_page_id',
    'parse_page_url',
    'ConfluenceUrlReader',
    'select_reader',
]
