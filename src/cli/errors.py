"""Typed exception hierarchy for CLI-related errors."""

from src.confluence_client.errors import ReaderError


class CLIError(ReaderError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigNotFoundError(CLIError):
    """Raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(
            f"Configuration file not found at {config_path}"
        )
        self.config_path = config_path
