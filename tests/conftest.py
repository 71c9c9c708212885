"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def valid_document():
    """Create a document with only the required fields set."""
    from feedwriter.model.document import FeedDocument

    return FeedDocument(
        title="This is a test feed.",
        description="This is a test description.",
        link="http://www.example.com",
    )


@pytest.fixture
def render_and_read():
    """Render a document and parse the result back."""
    from feedwriter.generator.rss_renderer import RSSRenderer
    from feedwriter.reader.rss_reader import read_feed

    def _render_and_read(document):
        return read_feed(RSSRenderer(document).render().to_xml_string())

    return _render_and_read


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Clear feedwriter variables and run from an empty directory."""
    for name in ("FEEDWRITER_LOG_LEVEL", "FEEDWRITER_LOG_FILE", "FEEDWRITER_PRETTY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
