"""Root pytest configuration for all tests.

This conftest applies to every test under tests/.
"""

import logging
from unittest.mock import patch

import pytest

from tests.fixtures.sample_pages import FakeConfluence

# Suppress noisy ERROR logs from atlassian-python-api for expected 4xx responses.
logging.getLogger("atlassian").setLevel(logging.WARNING)


@pytest.fixture
def fake_confluence():
    """Patch the atlassian Confluence client with a routed fake.

    Yields:
        FakeConfluence: add routes to it before triggering API calls
    """
    fake = FakeConfluence()
    with patch('src.confluence_client.api_wrapper.Confluence', return_value=fake) as mock_class:
        fake.constructor = mock_class
        yield fake
