"""YAML configuration loading and validation.

Configuration lists the Confluence hosts the reader may talk to and the
token used for each. The token may be left out and supplied through the
CONFLUENCE_API_TOKEN environment variable instead.
"""

from typing import Any, Dict

import yaml

from .errors import ConfigError, FilesystemError
from .models import ConfluenceIntegrationConfig, ReaderConfig


class ConfigLoader:
    """Handles configuration file loading and validation.

    Configuration file structure:
        integrations:
          confluence:
            - host: mycompany.atlassian.net
              api_token: "Basic dXNlcjpwYXNz"

    integrations.confluence section is valid and yields no integrations.
    Hosts are matched case-insensitively and stored lowercased.
    integrations.confluence section is valid and yields no integrations.
    """

    DEFAULT_CONFIG_PATH = ".confluence-tree/config.yaml"

    REQUIRED_INTEGRATION_FIELDS = {'host'}

    @classmethod
    def load(cls, config_path: str) -> ReaderConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ReaderConfig object with parsed configuration

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(config_path, 'read', 'Configuration file not found')
        except PermissionError:
            raise FilesystemError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise FilesystemError(config_path, 'read', str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls.parse(config_dict)

    @classmethod
    def parse(cls, config_dict: Dict[str, Any]) -> ReaderConfig:
        """Parse and validate a configuration dictionary.

        Raises:
            ConfigError: If configuration is invalid
        """
        integrations_raw = config_dict.get('integrations') or {}
        if not isinstance(integrations_raw, dict):
            raise ConfigError("Field 'integrations' must be a dictionary", 'integrations')

        confluence_raw = integrations_raw.get('confluence') or []
        if not isinstance(confluence_raw, list):
            raise ConfigError(
                "Field 'confluence' must be a list",
                'integrations.confluence'
            )

        integrations = []
        seen_hosts = set()
        for i, entry in enumerate(confluence_raw):
            field_prefix = f'integrations.confluence[{i}]'
            if not isinstance(entry, dict):
                raise ConfigError(
                    f"Integration at index {i} must be a dictionary",
                    field_prefix
                )

            missing = cls.REQUIRED_INTEGRATION_FIELDS - set(entry.keys())
            if missing:
                raise ConfigError(
                    f"Missing required fields in integration {i}: {', '.join(sorted(missing))}",
                    field_prefix
                )

            host = str(entry['host']).strip().lower()
            if not host:
                raise ConfigError(
                    f"Field 'host' in integration {i} cannot be empty",
                    f'{field_prefix}.host'
                )
            if '/' in host:
                raise ConfigError(
                    f"Field 'host' in integration {i} must be a bare host name, got '{host}'",
                    f'{field_prefix}.host'
                )
            if host in seen_hosts:
                raise ConfigError(
                    f"Host '{host}' is configured more than once",
                    f'{field_prefix}.host'
                )
            seen_hosts.add(host)

            token = entry.get('api_token', entry.get('apiToken'))
            if token is not None and not isinstance(token, str):
                raise ConfigError(
                    f"Field 'api_token' in integration {i} must be a string",
                    f'{field_prefix}.api_token'
                )

            integrations.append(ConfluenceIntegrationConfig(
                host=host,
                api_token=token or None,
            ))

        return ReaderConfig(integrations=integrations)
