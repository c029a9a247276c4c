"""Test fixtures for Confluence tree reader tests.

This module provides:
- Confluence v2 API payloads for pages, children and attachments
- A routed fake Confluence client for end-to-end tree reads
"""

from .sample_pages import (
    MOCK_HOST,
    MOCK_TOKEN,
    MOCK_PAGE_ID,
    MOCK_CHILD_PAGE_ID,
    MOCK_ATTACHMENT_ID,
    MOCK_PAGE_URL,
    ATTACHMENT_BYTES,
    FakeConfluence,
    make_response,
    page_payload,
    children_payload,
    attachments_payload,
)

__all__ = [
    "MOCK_HOST",
    "MOCK_TOKEN",
    "MOCK_PAGE_ID",
    "MOCK_CHILD_PAGE_ID",
    "MOCK_ATTACHMENT_ID",
    "MOCK_PAGE_URL",
    "ATTACHMENT_BYTES",
    "FakeConfluence",
    "make_response",
    "page_payload",
    "children_payload",
    "attachments_payload",
]
