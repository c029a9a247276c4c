"""Unit tests for tree_reader.url_reader module.

These run the full reader stack (APIWrapper, TreeBuilder, TreeResponse)
against a routed fake of the atlassian Confluence client.
"""

import pytest

from src.confluence_client.errors import (
    ForbiddenError,
    InvalidCredentialsError,
    PageNotFoundError,
)
from src.tree_reader.config_loader import ConfigLoader
from src.tree_reader.errors import InvalidUrlError, NotModifiedError
from src.tree_reader.models import ConfluenceIntegrationConfig, ReaderConfig
from src.tree_reader.url_reader import ConfluenceUrlReader, select_reader
from tests.fixtures.sample_pages import (
    ATTACHMENT_BYTES,
    MOCK_ATTACHMENT_ID,
    MOCK_CHILD_PAGE_ID,
    MOCK_HOST,
    MOCK_PAGE_ID,
    MOCK_PAGE_URL,
    MOCK_TOKEN,
)


@pytest.fixture
def reader():
    return ConfluenceUrlReader(ConfluenceIntegrationConfig(host=MOCK_HOST, api_token=MOCK_TOKEN))


def file_list(response):
    return [(f.path, f.content) for f in response.files()]


class TestReadTree:
    """End-to-end reads of small page trees."""

    def test_page_with_attachment(self, reader, fake_confluence):
        fake_confluence.add_page(MOCK_PAGE_ID)
        fake_confluence.add_attachment(MOCK_PAGE_ID, MOCK_ATTACHMENT_ID)
        fake_confluence.add_no_children(MOCK_PAGE_ID)

        response = reader.read_tree(MOCK_PAGE_URL)

        assert file_list(response) == [
            ('/docs/attachments/Attachment-1.png', ATTACHMENT_BYTES),
            ('/docs/Page title.md', b'Docs html goes here!\n'),
            ('docs/index.md', b'# Page title\n\n[Page title](Page%20title.md)\n'),
        ]

    def test_page_with_child(self, reader, fake_confluence):
        fake_confluence.add_page(MOCK_PAGE_ID)
        fake_confluence.add_no_attachments(MOCK_PAGE_ID)
        fake_confluence.add_children(MOCK_PAGE_ID, {'id': MOCK_CHILD_PAGE_ID, 'title': 'Page title'})
        fake_confluence.add_page(MOCK_CHILD_PAGE_ID)
        fake_confluence.add_no_attachments(MOCK_CHILD_PAGE_ID)
        fake_confluence.add_no_children(MOCK_CHILD_PAGE_ID)

        response = reader.read_tree(MOCK_PAGE_URL)

        assert [f.path for f in response.files()] == [
            '/docs/Page title.md',
            '/docs/page-title/Page title.md',
            'docs/index.md',
        ]

    def test_page_with_attachment_and_child(self, reader, fake_confluence):
        fake_confluence.add_page(MOCK_PAGE_ID)
        fake_confluence.add_attachment(MOCK_PAGE_ID, MOCK_ATTACHMENT_ID)
        fake_confluence.add_children(MOCK_PAGE_ID, {'id': MOCK_CHILD_PAGE_ID})
        fake_confluence.add_page(MOCK_CHILD_PAGE_ID, title='Child page 1')
        fake_confluence.add_no_attachments(MOCK_CHILD_PAGE_ID)
        fake_confluence.add_no_children(MOCK_CHILD_PAGE_ID)

        response = reader.read_tree(MOCK_PAGE_URL)

        assert [f.path for f in response.files()] == [
            '/docs/attachments/Attachment-1.png',
            '/docs/Page title.md',
            '/docs/page-title/Child page 1.md',
            'docs/index.md',
        ]

    def test_request_sequence(self, reader, fake_confluence):
        """Page, attachments, downloads, then children."""
        fake_confluence.add_page(MOCK_PAGE_ID)
        fake_confluence.add_attachment(MOCK_PAGE_ID, MOCK_ATTACHMENT_ID)
        fake_confluence.add_no_children(MOCK_PAGE_ID)

        reader.read_tree(MOCK_PAGE_URL)

        assert [path for path, _ in fake_confluence.calls] == [
            f'api/v2/pages/{MOCK_PAGE_ID}',
            f'api/v2/pages/{MOCK_PAGE_ID}/attachments',
            f'rest/api/content/{MOCK_PAGE_ID}/child/attachment/{MOCK_ATTACHMENT_ID}/download',
            f'api/v2/pages/{MOCK_PAGE_ID}/children',
        ]

    def test_client_uses_configured_host_and_token(self, reader, fake_confluence):
        fake_confluence.add_page(MOCK_PAGE_ID)
        fake_confluence.add_no_attachments(MOCK_PAGE_ID)
        fake_confluence.add_no_children(MOCK_PAGE_ID)

        reader.read_tree(MOCK_PAGE_URL)

        kwargs = fake_confluence.constructor.call_args.kwargs
        assert kwargs['url'] == f'https://{MOCK_HOST}/wiki'
        assert kwargs['session'].headers['Authorization'] == MOCK_TOKEN

    def test_missing_page(self, reader, fake_confluence):
        with pytest.raises(PageNotFoundError):
            reader.read_tree(MOCK_PAGE_URL)

    def test_rejected_token(self, reader, fake_confluence):
        fake_confluence.add_json(f'api/v2/pages/{MOCK_PAGE_ID}', {'message': 'Unauthorized'}, 401)

        with pytest.raises(InvalidCredentialsError):
            reader.read_tree(MOCK_PAGE_URL)

    def test_forbidden_child(self, reader, fake_confluence):
        fake_confluence.add_page(MOCK_PAGE_ID)
        fake_confluence.add_no_attachments(MOCK_PAGE_ID)
        fake_confluence.add_children(MOCK_PAGE_ID, {'id': MOCK_CHILD_PAGE_ID})
        fake_confluence.add_json(f'api/v2/pages/{MOCK_CHILD_PAGE_ID}', {}, 403)

        with pytest.raises(ForbiddenError):
            reader.read_tree(MOCK_PAGE_URL)

    def test_url_without_page_id(self, reader, fake_confluence):
        with pytest.raises(InvalidUrlError):
            reader.read_tree(f'https://{MOCK_HOST}/wiki/spaces/BB/overview')
        assert fake_confluence.calls == []

    def test_url_for_other_host(self, reader, fake_confluence):
        with pytest.raises(InvalidUrlError):
            reader.read_tree('https://other.atlassian.net/wiki/spaces/BB/pages/1')
        assert fake_confluence.calls == []


class TestEtag:
    """Conditional reads."""

    def _routes(self, fake_confluence):
        fake_confluence.add_page(MOCK_PAGE_ID)
        fake_confluence.add_no_attachments(MOCK_PAGE_ID)
        fake_confluence.add_no_children(MOCK_PAGE_ID)

    def test_matching_etag_raises_not_modified(self, reader, fake_confluence):
        self._routes(fake_confluence)
        etag = reader.read_tree(MOCK_PAGE_URL).etag

        with pytest.raises(NotModifiedError) as exc_info:
            reader.read_tree(MOCK_PAGE_URL, etag=etag)

        assert exc_info.value.etag == etag

    def test_stale_etag_returns_response(self, reader, fake_confluence):
        self._routes(fake_confluence)

        response = reader.read_tree(MOCK_PAGE_URL, etag='stale')

        assert response.etag != 'stale'


class TestFactory:
    """Reader construction and selection."""

    def test_factory_creates_one_reader_per_integration(self):
        config = ReaderConfig(integrations=[
            ConfluenceIntegrationConfig('a.atlassian.net', 'Basic a'),
            ConfluenceIntegrationConfig('b.atlassian.net', 'Basic b'),
        ])

        readers = ConfluenceUrlReader.factory(config)

        assert [r.host for r in readers] == ['a.atlassian.net', 'b.atlassian.net']

    def test_factory_without_integrations(self):
        assert ConfluenceUrlReader.factory(ReaderConfig()) == []

    def test_can_read(self, reader):
        assert reader.can_read(MOCK_PAGE_URL)
        assert not reader.can_read('https://other.atlassian.net/wiki/spaces/BB/pages/1')
        assert not reader.can_read('not a url')

    def test_select_reader(self):
        readers = ConfluenceUrlReader.factory(ReaderConfig(integrations=[
            ConfluenceIntegrationConfig('a.atlassian.net', 'Basic a'),
            ConfluenceIntegrationConfig(MOCK_HOST, MOCK_TOKEN),
        ]))

        assert select_reader(readers, MOCK_PAGE_URL).host == MOCK_HOST

    def test_mixed_case_configured_host_matches(self):
        """A host configured with capitals still reads URLs for that host."""
        readers = ConfluenceUrlReader.factory(ConfigLoader.parse({
            'integrations': {'confluence': [{'host': 'MyCompany.atlassian.net', 'api_token': 'Basic a'}]}
        }))
        url = f'https://MyCompany.atlassian.net/wiki/spaces/BB/pages/{MOCK_PAGE_ID}/x'

        assert readers[0].can_read(url)
        assert select_reader(readers, url) is readers[0]

    def test_reader_host_ignores_case(self):
        reader = ConfluenceUrlReader(ConfluenceIntegrationConfig('MyCompany.atlassian.net', 'Basic a'))

        assert reader.host == MOCK_HOST
        assert reader.can_read(MOCK_PAGE_URL)

    def test_select_reader_without_match(self):
        with pytest.raises(InvalidUrlError):
            select_reader([], MOCK_PAGE_URL)
