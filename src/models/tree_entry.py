"""Tree entry data models."""

from dataclasses import dataclass
from enum import Enum


class EntryKind(Enum):
    """What produced a tree entry."""
    PAGE = "page"
    ATTACHMENT = "attachment"
    INDEX = "index"


@dataclass(frozen=True)
class TreeEntry:
    """One materialized file of a page tree.

    Page and attachment paths start with "/", the index path does not.
    Entries are emitted in traversal order and never revised.

    Attributes:
        path: Forward-slash relative path
        content: File bytes (UTF-8 markdown for pages and the index)
        kind: Page, attachment or index
    """
    path: str
    content: bytes
    kind: EntryKind


@dataclass(frozen=True)
class ReadTreeFile:
    """A file as handed back to callers of TreeResponse.files()."""
    path: str
    content: bytes
