"""Unit tests for the error hierarchies."""

import pytest

from src.cli.errors import CLIError, ConfigNotFoundError
from src.confluence_client.errors import (
    APIUnreachableError,
    ConfluenceError,
    ConversionError,
    ForbiddenError,
    InvalidCredentialsError,
    PageNotFoundError,
    ReaderError,
    RemoteError,
)
from src.tree_reader.errors import (
    ConfigError,
    FilesystemError,
    InvalidUrlError,
    NotModifiedError,
    TreeReaderError,
)


class TestHierarchy:
    """Every application error can be caught as ReaderError."""

    @pytest.mark.parametrize('error', [
        InvalidCredentialsError('h'),
        ForbiddenError('h', 'r'),
        PageNotFoundError('1'),
        APIUnreachableError('https://h/wiki'),
        RemoteError('boom'),
        ConversionError('bad html'),
    ])
    def test_confluence_errors(self, error):
        assert isinstance(error, ConfluenceError)
        assert isinstance(error, ReaderError)

    @pytest.mark.parametrize('error', [
        InvalidUrlError('x'),
        FilesystemError('/tmp/x', 'write'),
        ConfigError('bad'),
        NotModifiedError('abc'),
    ])
    def test_tree_reader_errors(self, error):
        assert isinstance(error, TreeReaderError)
        assert isinstance(error, ReaderError)
        assert not isinstance(error, ConfluenceError)

    def test_cli_errors(self):
        error = ConfigNotFoundError('.confluence-tree/config.yaml')
        assert isinstance(error, CLIError)
        assert isinstance(error, ReaderError)


class TestMessages:
    """Errors carry their context as attributes and in the message."""

    def test_invalid_credentials(self):
        error = InvalidCredentialsError('mycompany.atlassian.net')
        assert error.host == 'mycompany.atlassian.net'
        assert 'mycompany.atlassian.net' in str(error)

    def test_forbidden(self):
        error = ForbiddenError('h', 'api/v2/pages/1')
        assert error.resource == 'api/v2/pages/1'
        assert 'api/v2/pages/1' in str(error)

    def test_page_not_found(self):
        error = PageNotFoundError('123')
        assert error.page_id == '123'
        assert error.attachment_id is None
        assert str(error) == 'Page 123 not found'

    def test_attachment_not_found(self):
        error = PageNotFoundError('123', attachment_id='9')
        assert str(error) == 'Attachment 9 of page 123 not found'

    def test_remote_error_status(self):
        assert RemoteError('boom', status_code=502).status_code == 502
        assert RemoteError('boom').status_code is None

    def test_invalid_url_reason(self):
        error = InvalidUrlError('https://x', 'no page id after /pages/')
        assert error.url == 'https://x'
        assert str(error) == 'Invalid Confluence page URL: https://x (no page id after /pages/)'

    def test_filesystem_error(self):
        error = FilesystemError('/tmp/a', 'write', 'disk full')
        assert error.operation == 'write'
        assert str(error) == "Filesystem operation 'write' failed for /tmp/a: disk full"

    def test_config_error_with_field(self):
        error = ConfigError('must be a list', 'integrations.confluence')
        assert error.config_field == 'integrations.confluence'
        assert error.original_message == 'must be a list'
        assert "'integrations.confluence'" in str(error)

    def test_config_error_without_field(self):
        assert str(ConfigError('empty')) == 'Configuration error: empty'

    def test_not_modified_carries_etag(self):
        assert NotModifiedError('abc').etag == 'abc'

    def test_config_not_found(self):
        error = ConfigNotFoundError('conf.yaml')
        assert error.config_path == 'conf.yaml'
        assert 'conf.yaml' in str(error)
