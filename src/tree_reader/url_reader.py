"""URL reader that turns a Confluence page URL into a page tree.

One reader exists per configured Confluence host. A reader resolves the
page id from the URL, builds the tree and wraps the entries in a
TreeResponse.
"""

import logging
from typing import List, Optional, Sequence

from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.auth import Authenticator
from src.content_converter.markdown_converter import MarkdownConverter
from .errors import InvalidUrlError, NotModifiedError
from .models import ConfluenceIntegrationConfig, ReaderConfig
from .tree_builder import TreeBuilder
from .tree_response import TreeResponse
from .url_parser import parse_page_url

logger = logging.getLogger(__name__)


class ConfluenceUrlReader:
    """Reads page trees from a single Confluence host.

    Example:
        >>> readers = ConfluenceUrlReader.factory(config)
        >>> reader = select_reader(readers, url)
        >>> response = reader.read_tree(url)
        >>> files = response.files()
    """

    def __init__(
        self,
        integration: ConfluenceIntegrationConfig,
        api: Optional[APIWrapper] = None,
        converter: Optional[MarkdownConverter] = None
    ):
        """Initialize the reader.

        Args:
            integration: Host and token for the Confluence instance
            api: Optional APIWrapper instance for testing
            converter: Optional converter instance for testing
        """
        self.integration = integration
        self._api = api or APIWrapper(Authenticator(integration.host, integration.api_token))
        self._converter = converter or MarkdownConverter()

    @classmethod
    def factory(cls, config: ReaderConfig) -> List['ConfluenceUrlReader']:
        """Create one reader per configured Confluence integration.

        Returns:
            Readers in configuration order; empty when nothing is configured
        """
        readers = [cls(integration) for integration in config.integrations]
        logger.debug(f"Created {len(readers)} Confluence reader(s)")
        return readers

    @property
    def host(self) -> str:
        return self.integration.host.lower()

    def can_read(self, url: str) -> bool:
        """True if the URL points at this reader's host."""
        try:
            return parse_page_url(url).host == self.host
        except InvalidUrlError:
            return False

    def read_tree(self, url: str, etag: Optional[str] = None) -> TreeResponse:
        """Read the page at url together with its descendants and attachments.

        Args:
            url: Confluence page URL
            etag: Etag of a previous response; unchanged trees raise NotModifiedError

        Returns:
            TreeResponse with all files in emission order

        Raises:
            InvalidUrlError: If the URL has no page id or targets another host
            NotModifiedError: If the tree's etag equals the given etag
            ConfluenceError: Any remote or conversion failure, unmodified
        """
        page_url = parse_page_url(url)
        if page_url.host != self.host:
            raise InvalidUrlError(url, f"host does not match {self.host}")

        builder = TreeBuilder(self._api, self._converter)
        response = TreeResponse(builder.build(page_url.page_id))

        if etag is not None and etag == response.etag:
            logger.info(f"Page tree for {url} not modified")
            raise NotModifiedError(etag)
        return response


def select_reader(readers: Sequence[ConfluenceUrlReader], url: str) -> ConfluenceUrlReader:
    """Pick the reader configured for the URL's host.

    Raises:
        InvalidUrlError: If the URL is malformed or no reader handles its host
    """
    host = parse_page_url(url).host
    for reader in readers:
        if reader.host == host:
            return reader
    raise InvalidUrlError(url, f"no Confluence integration configured for {host}")
