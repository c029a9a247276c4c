"""Content conversion module for Confluence HTML to markdown.

This module provides the MarkdownConverter used to turn rendered page
bodies into markdown documents.
"""

from .markdown_converter import MarkdownConverter

__all__ = ['MarkdownConverter']
