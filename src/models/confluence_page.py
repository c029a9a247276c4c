"""Confluence page and attachment identities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PageRef:
    """Identity of a remote Confluence page.

    Created from a PageClient response and never modified afterwards.

    Attributes:
        id: Host-unique page identifier (numeric string)
        title: Display title of the page
        version: Page version number, metadata only (never used in paths)
        is_root: True only for the page a traversal started from
    """
    id: str
    title: str
    version: int = 1
    is_root: bool = False


@dataclass(frozen=True)
class AttachmentRef:
    """Identity of a file attached to a page.

    Attributes:
        id: Attachment identifier, unique within its page
        title: Original filename (may need sanitizing before use in a path)
        parent_page_id: ID of the page owning the attachment
    """
    id: str
    title: str
    parent_page_id: str
