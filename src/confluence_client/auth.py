"""Authentication module for Confluence integration credentials.

Credentials come from a configured integration entry (host + API token).
When the entry has no token, the token is read from the environment using
python-dotenv so it can live in a local .env file instead of the config.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidCredentialsError


class Credentials(NamedTuple):
    """Confluence host and the Authorization header value used for it."""
    host: str
    api_token: str

    @property
    def base_url(self) -> str:
        return f"https://{self.host}/wiki"


class Authenticator:
    """Resolves credentials for a single Confluence host.

    The token is sent verbatim as the Authorization header, so it must
    already carry its scheme (e.g. "Basic dXNlcjpwYXNz" or "Bearer abc").
    Tokens are never cached beyond this object or logged.

    Fallback environment variable:
        CONFLUENCE_API_TOKEN: used when the integration entry has no token

    Example:
        >>> auth = Authenticator("mycompany.atlassian.net", "Basic dXNlcjpwYXNz")
        >>> auth.get_credentials().base_url
        'https://mycompany.atlassian.net/wiki'
    """

    TOKEN_ENV_VAR = 'CONFLUENCE_API_TOKEN'

    def __init__(self, host: str, api_token: Optional[str] = None):
        """Initialize the authenticator for a host.

        Args:
            host: Confluence host name (e.g. mycompany.atlassian.net)
            api_token: Authorization header value; None to use the environment
        """
        self.host = host
        self._api_token = api_token
        if not api_token:
            load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get credentials for the configured host.

        Returns:
            Credentials: named tuple with host and api_token

        Raises:
            InvalidCredentialsError: If no token is configured or in the environment
        """
        api_token = self._api_token or os.getenv(self.TOKEN_ENV_VAR)
        if not self.host or not api_token:
            raise InvalidCredentialsError(host=self.host or "unknown")

        return Credentials(host=self.host, api_token=api_token)
