"""Tests for the RSS reader."""

import pytest

SAMPLE_FEED = """<?xml version='1.0' encoding='UTF-8'?>
<rss xmlns:atom="http://www.w3.org/2005/Atom" xmlns:dc="http://purl.org/dc/elements/1.1/" version="2.0">
  <channel>
    <title>Sample</title>
    <link>http://www.example.com</link>
    <description>Sample feed</description>
    <atom:link href="http://www.example.com/rss" rel="self" type="application/rss+xml"/>
    <atom:link href="http://hub.example.com" rel="hub"/>
    <dc:creator>Joe</dc:creator>
    <category domain="http://www.example.com/scheme">news</category>
    <pubDate>Fri, 13 Feb 2009 23:31:30 +0000</pubDate>
    <image>
      <url>http://www.example.com/logo.png</url>
      <title>Logo</title>
      <link>http://www.example.com</link>
      <width>88</width>
    </image>
    <item>
      <title>First</title>
      <link>http://www.example.com/1</link>
      <guid isPermaLink="true">http://www.example.com/1</guid>
    </item>
  </channel>
</rss>
"""


class TestReadFeed:
    """Tests for read_feed."""

    def test_channel_fields(self):
        """Test that channel values are read."""
        from feedwriter.reader.rss_reader import read_feed

        feed = read_feed(SAMPLE_FEED)

        assert feed.encoding == "UTF-8"
        assert feed.title == "Sample"
        assert feed.link == "http://www.example.com"
        assert feed.feed_link == "http://www.example.com/rss"
        assert feed.hubs == ["http://hub.example.com"]
        assert feed.author == {"name": "Joe"}
        assert feed.categories == [
            {"term": "news", "label": "news", "scheme": "http://www.example.com/scheme"}
        ]
        assert feed.date_modified.year == 2009

    def test_absent_fields_are_none(self):
        """Test that missing elements are not defaulted."""
        from feedwriter.reader.rss_reader import read_feed

        feed = read_feed(SAMPLE_FEED)

        assert feed.language is None
        assert feed.generator is None
        assert feed.last_build_date is None
        assert feed.base_url is None

    def test_image_subset(self):
        """Test that the image holds only the elements present."""
        from feedwriter.reader.rss_reader import read_feed

        assert read_feed(SAMPLE_FEED).image == {
            "uri": "http://www.example.com/logo.png",
            "link": "http://www.example.com",
            "title": "Logo",
            "width": "88",
        }

    def test_entries(self):
        """Test that items are read."""
        from feedwriter.reader.rss_reader import read_feed

        entries = read_feed(SAMPLE_FEED.encode("utf-8")).entries
        assert len(entries) == 1
        assert entries[0].title == "First"
        assert entries[0].id == "http://www.example.com/1"

    def test_to_dict(self):
        """Test that to_dict gives JSON-friendly values."""
        import json
        from feedwriter.reader.rss_reader import read_feed

        data = read_feed(SAMPLE_FEED).to_dict()
        assert data["date_modified"] == "2009-02-13T23:31:30+00:00"
        assert data["entries"][0]["title"] == "First"
        json.dumps(data)

    def test_malformed_xml(self):
        """Test that broken XML is an INVALID_ARGUMENT error with a cause."""
        from feedwriter.exceptions import ErrorKind, FeedWriterError
        from feedwriter.reader.rss_reader import read_feed

        with pytest.raises(FeedWriterError) as exc_info:
            read_feed("<rss><channel>")
        assert exc_info.value.kind == ErrorKind.INVALID_ARGUMENT
        assert exc_info.value.cause is not None

    def test_not_rss(self):
        """Test that other root elements are rejected."""
        from feedwriter.exceptions import ErrorKind, FeedWriterError
        from feedwriter.reader.rss_reader import read_feed

        with pytest.raises(FeedWriterError) as exc_info:
            read_feed('<feed xmlns="http://www.w3.org/2005/Atom"/>')
        assert exc_info.value.kind == ErrorKind.INVALID_ARGUMENT

    def test_missing_channel(self):
        """Test that an rss root without a channel is rejected."""
        from feedwriter.exceptions import FeedWriterError
        from feedwriter.reader.rss_reader import read_feed

        with pytest.raises(FeedWriterError):
            read_feed('<rss version="2.0"/>')

    def test_entities_not_expanded(self):
        """Test that external entities are not resolved."""
        from feedwriter.exceptions import FeedWriterError
        from feedwriter.reader.rss_reader import read_feed

        xml = (
            '<?xml version="1.0"?>'
            '<!DOCTYPE rss [<!ENTITY secret SYSTEM "file:///etc/passwd">]>'
            '<rss version="2.0"><channel><title>&secret;</title></channel></rss>'
        )
        try:
            feed = read_feed(xml)
        except FeedWriterError:
            return
        assert "root:" not in (feed.title or "")
