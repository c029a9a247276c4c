"""Configuration models for the tree reader."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ConfluenceIntegrationConfig:
    """Connection settings for one Confluence host.

    Attributes:
        host: Host name, e.g. mycompany.atlassian.net
        api_token: Authorization header value ("Basic ..." or "Bearer ...");
                   None to read CONFLUENCE_API_TOKEN from the environment
    """
    host: str
    api_token: Optional[str] = None


@dataclass
class ReaderConfig:
    """Top-level reader configuration.

    Attributes:
        integrations: One entry per configured Confluence host
    """
    integrations: List[ConfluenceIntegrationConfig] = field(default_factory=list)
