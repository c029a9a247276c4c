"""Data models for Confluence pages and materialized tree entries."""

from src.models.confluence_page import PageRef, AttachmentRef
from src.models.tree_entry import EntryKind, TreeEntry, ReadTreeFile

__all__ = ['PageRef', 'AttachmentRef', 'EntryKind', 'TreeEntry', 'ReadTreeFile']
