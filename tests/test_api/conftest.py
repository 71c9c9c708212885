"""Pytest fixtures for API tests."""
import pytest
from fastapi.testclient import TestClient

from feedwriter.api.main import app


@pytest.fixture
def client(clean_env):
    """Create a test client."""
    return TestClient(app)


@pytest.fixture
def feed_payload():
    """A valid JSON feed document."""
    return {
        "title": "API feed",
        "description": "Rendered over HTTP",
        "link": "http://www.example.com",
        "language": "en",
        "categories": [{"term": "news"}],
    }
