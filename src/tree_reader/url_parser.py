"""Confluence page URL parsing."""

import re
from typing import NamedTuple, Optional
from urllib.parse import urlparse

from .errors import InvalidUrlError


class PageUrl(NamedTuple):
    """Parts of a Confluence page URL."""
    host: str
    space_key: Optional[str]
    page_id: str


# /wiki/spaces/SPACE/pages/PAGE_ID[/slug]
_PAGE_PATH = re.compile(r'^(?:/wiki)?(?:/spaces/([^/]+))?/pages/(\d+)(?:/.*)?$')


def parse_page_url(url: str) -> PageUrl:
    """Split a page URL into host, space key and page id.

    Examples:
        >>> parse_page_url(
        ...     "https://mycompany.atlassian.net/wiki/spaces/BB/pages/3032744732/some+page"
        ... )
        PageUrl(host='mycompany.atlassian.net', space_key='BB', page_id='3032744732')

    Raises:
        InvalidUrlError: If the URL is not absolute or has no numeric page id
    """
    if not url or not isinstance(url, str):
        raise InvalidUrlError(str(url), "empty URL")

    parsed = urlparse(url.strip())
    if parsed.scheme not in ('http', 'https') or not parsed.hostname:
        raise InvalidUrlError(url, "expected an absolute http(s) URL")

    match = _PAGE_PATH.match(parsed.path)
    if not match:
        raise InvalidUrlError(url, "no page id after /pages/")

    return PageUrl(host=parsed.hostname, space_key=match.group(1), page_id=match.group(2))


def parse_page_id(url: str) -> str:
    """Extract the page id from a Confluence page URL.

    Raises:
        InvalidUrlError: If no page id can be extracted
    """
    return parse_page_url(url).page_id
