"""API wrapper for the Confluence Cloud REST API.

This module wraps the atlassian-python-api Confluence client and exposes the
four read operations needed to materialize a page tree: fetch a page, list
its children, list its attachments and download an attachment. HTTP status
codes and transport failures are translated into the typed exception
hierarchy from errors.py. Every call is single-shot; nothing is retried.
"""

import logging
import re
from typing import Any, Dict, Iterator, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

import requests
from atlassian import Confluence
from requests.exceptions import Timeout, ConnectionError

from src.models.confluence_page import AttachmentRef, PageRef
from .auth import Authenticator
from .errors import (
    APIUnreachableError,
    ForbiddenError,
    InvalidCredentialsError,
    PageNotFoundError,
    RemoteError,
)

logger = logging.getLogger(__name__)


class APIWrapper:
    """Read-only wrapper around the atlassian-python-api Confluence client.

    This class provides a thin wrapper over the Confluence API client that:
    1. Sends the configured token as the Authorization header
    2. Translates HTTP status codes to typed exceptions
    3. Parses v2 API payloads into PageRef / AttachmentRef values
    4. Follows cursor links so list operations return every result

    Example:
        >>> auth = Authenticator("mycompany.atlassian.net", "Basic dXNlcjpwYXNz")
        >>> api = APIWrapper(auth)
        >>> page, html = api.get_page("3032744732")
    """

    # Largest page size accepted by the v2 list endpoints
    LIST_LIMIT = 250

    def __init__(self, authenticator: Authenticator, timeout: int = 30):
        """Initialize the API wrapper.

        Args:
            authenticator: Authenticator for the target host
            timeout: Per-request transport timeout in seconds
        """
        self._authenticator = authenticator
        self._timeout = timeout
        self._client: Optional[Confluence] = None

    def _get_client(self) -> Confluence:
        """Get or create the Confluence API client.

        The client is created lazily so that constructing a wrapper never
        touches credentials or the network.

        Returns:
            Confluence: Initialized atlassian-python-api Confluence client

        Raises:
            InvalidCredentialsError: If no token is available
        """
        if self._client is None:
            creds = self._authenticator.get_credentials()
            session = requests.Session()
            session.headers.update({'Authorization': creds.api_token})
            self._client = Confluence(
                url=creds.base_url,
                session=session,
                cloud=True,
                timeout=self._timeout,
            )
        return self._client

    def _validate_page_id(self, page_id: str) -> None:
        """Validate that a page ID is numeric.

        Raises:
            ValueError: If page_id is empty or not a numeric string
        """
        if not page_id or not str(page_id).strip():
            raise ValueError("page_id cannot be empty")

        if not re.match(r'^\d+$', str(page_id).strip()):
            raise ValueError(
                f"Invalid page_id format: '{page_id}'. "
                f"Page IDs must contain only numeric characters."
            )

    def _sanitize_credentials(self, text: str) -> str:
        """Mask tokens and URL passwords in text that is about to be logged.

        Example:
            >>> api._sanitize_credentials("Authorization: Basic dXNlcjpwYXNz")
            'Authorization: ***REDACTED***'
        """
        if not text:
            return text

        sanitized = re.sub(r'://([\w.-]+):([\w.-]+)@', r'://***:***@', text)
        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'(Basic|Bearer)\s+[^\s\n\r]+',
            r'\1 ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        return sanitized

    def _request(self, path: str, operation: str, params: Optional[Dict[str, Any]] = None):
        """Issue one GET request and return the raw response.

        Args:
            path: API path relative to the /wiki base URL
            operation: Description of the operation (for errors and logging)
            params: Optional query parameters

        Returns:
            requests.Response with a 2xx status

        Raises:
            APIUnreachableError: On timeouts and connection failures
            InvalidCredentialsError, ForbiddenError, PageNotFoundError,
            RemoteError: On non-success status codes
        """
        client = self._get_client()
        host = self._authenticator.host
        logger.debug(f"Confluence API: GET {path} {params or ''}")
        try:
            response = client.get(path, params=params, advanced_mode=True)
        except (Timeout, ConnectionError) as e:
            logger.error(
                f"API operation failed: {operation} - "
                f"{self._sanitize_credentials(str(e))}"
            )
            raise APIUnreachableError(endpoint=f"https://{host}/wiki") from e

        if response is None:
            raise RemoteError(f"No response from Confluence during {operation}")

        status = response.status_code
        if 200 <= status < 300:
            return response
        if status == 401:
            raise InvalidCredentialsError(host=host)
        if status == 403:
            raise ForbiddenError(host=host, resource=path)

        logger.error(
            f"API operation failed: {operation} - HTTP {status} "
            f"{self._sanitize_credentials(getattr(response, 'text', '') or '')[:200]}"
        )
        raise RemoteError(
            f"Confluence API failure during {operation} (HTTP {status})",
            status_code=status,
        )

    def _get_json(
        self,
        path: str,
        operation: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """GET a JSON object, rejecting anything that is not a dict."""
        response = self._request(path, operation, params)
        try:
            payload = response.json()
        except ValueError as e:
            raise RemoteError(f"Malformed JSON payload during {operation}") from e
        if not isinstance(payload, dict):
            raise RemoteError(f"Unexpected payload type during {operation}")
        return payload

    def _iter_results(self, path: str, operation: str) -> Iterator[Dict[str, Any]]:
        """Yield every item of a cursor-paginated v2 list endpoint in host order."""
        params: Dict[str, Any] = {'limit': self.LIST_LIMIT}
        while True:
            payload = self._get_json(path, operation, params)
            results = payload.get('results', [])
            if not isinstance(results, list):
                raise RemoteError(f"Field 'results' is not a list during {operation}")
            for item in results:
                if not isinstance(item, dict) or not item.get('id'):
                    raise RemoteError(f"Result without an id during {operation}")
                yield item

            cursor = self._next_cursor(payload)
            if not cursor:
                return
            params = {'limit': self.LIST_LIMIT, 'cursor': cursor}

    @staticmethod
    def _next_cursor(payload: Dict[str, Any]) -> Optional[str]:
        """Extract the cursor parameter from a payload's _links.next URL."""
        next_link = (payload.get('_links') or {}).get('next')
        if not next_link:
            return None
        cursor = parse_qs(urlparse(next_link).query).get('cursor')
        return cursor[0] if cursor else None

    @staticmethod
    def _parse_version(page_data: Dict[str, Any]) -> int:
        version_info = page_data.get('version') or {}
        try:
            return int(version_info.get('number', 1))
        except (TypeError, ValueError):
            return 1

    def get_page(self, page_id: str) -> Tuple[PageRef, str]:
        """Fetch a page's metadata and export_view HTML body.

        Args:
            page_id: The Confluence page ID

        Returns:
            Tuple of (PageRef, body HTML); is_root is always False here

        Raises:
            PageNotFoundError: If the page doesn't exist
            InvalidCredentialsError / ForbiddenError: On auth failures
            RemoteError: On other failures or a malformed payload
        """
        self._validate_page_id(page_id)
        operation = f"get_page({page_id})"
        try:
            data = self._get_json(
                f"api/v2/pages/{page_id}",
                operation,
                params={'body-format': 'export_view'},
            )
        except RemoteError as e:
            if e.status_code == 404:
                raise PageNotFoundError(page_id=page_id) from e
            raise

        title = data.get('title')
        if not isinstance(title, str):
            raise RemoteError(f"Page {page_id} payload has no title")

        body = (data.get('body') or {}).get('export_view') or {}
        html = body.get('value') or ''

        page = PageRef(
            id=str(data.get('id') or page_id),
            title=title,
            version=self._parse_version(data),
        )
        logger.debug(f"Fetched page {page.id} '{page.title}' v{page.version}")
        return page, html

    def list_children(self, page_id: str) -> List[PageRef]:
        """List the direct child pages of a page in host order.

        Raises:
            PageNotFoundError: If the parent page doesn't exist
            RemoteError: On other failures or a malformed payload
        """
        self._validate_page_id(page_id)
        operation = f"list_children({page_id})"
        try:
            children = [
                PageRef(
                    id=str(item['id']),
                    title=str(item.get('title', '')),
                    version=self._parse_version(item),
                )
                for item in self._iter_results(f"api/v2/pages/{page_id}/children", operation)
            ]
        except RemoteError as e:
            if e.status_code == 404:
                raise PageNotFoundError(page_id=page_id) from e
            raise

        logger.debug(f"Found {len(children)} children for page {page_id}")
        return children

    def list_attachments(self, page_id: str) -> List[AttachmentRef]:
        """List the attachments of a page in host order.

        Raises:
            PageNotFoundError: If the page doesn't exist
            RemoteError: On other failures or a malformed payload
        """
        self._validate_page_id(page_id)
        operation = f"list_attachments({page_id})"
        try:
            attachments = [
                AttachmentRef(
                    id=str(item['id']),
                    title=str(item.get('title', '')),
                    parent_page_id=str(item.get('pageId') or page_id),
                )
                for item in self._iter_results(f"api/v2/pages/{page_id}/attachments", operation)
            ]
        except RemoteError as e:
            if e.status_code == 404:
                raise PageNotFoundError(page_id=page_id) from e
            raise

        logger.debug(f"Found {len(attachments)} attachments for page {page_id}")
        return attachments

    def download_attachment(self, page_id: str, attachment_id: str) -> bytes:
        """Download the raw bytes of an attachment.

        Raises:
            PageNotFoundError: If the attachment doesn't exist
            RemoteError: On other non-success statuses
        """
        self._validate_page_id(page_id)
        operation = f"download_attachment({page_id}, {attachment_id})"
        try:
            response = self._request(
                f"rest/api/content/{page_id}/child/attachment/{attachment_id}/download",
                operation,
            )
        except RemoteError as e:
            if e.status_code == 404:
                raise PageNotFoundError(page_id=page_id, attachment_id=attachment_id) from e
            raise
        return response.content or b''
