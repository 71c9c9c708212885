"""Tests for feed endpoints."""


class TestRenderEndpoint:
    """Tests for POST /api/feeds/render."""

    def test_render_returns_rss(self, client, feed_payload):
        """Test that a valid document comes back as RSS."""
        from feedwriter.reader.rss_reader import read_feed

        response = client.post("/api/feeds/render", json=feed_payload)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/rss+xml")

        feed = read_feed(response.content)
        assert feed.title == "API feed"
        assert feed.language == "en"
        assert feed.categories == [{"term": "news", "label": "news", "scheme": None}]

    def test_render_encoding(self, client, feed_payload):
        """Test that the charset follows the document encoding."""
        feed_payload["encoding"] = "iso-8859-1"

        response = client.post("/api/feeds/render", json=feed_payload)

        assert response.status_code == 200
        assert "iso-8859-1" in response.headers["content-type"]

    def test_render_validation_failure(self, client, feed_payload):
        """Test that validation problems give 422 with the problem list."""
        del feed_payload["link"]

        response = client.post("/api/feeds/render", json=feed_payload)

        assert response.status_code == 422
        assert response.json()["detail"] == ["Feed link is required"]

    def test_render_unknown_field(self, client, feed_payload):
        """Test that malformed documents give 400."""
        feed_payload["subtitle"] = "Not a field"

        response = client.post("/api/feeds/render", json=feed_payload)

        assert response.status_code == 400
        assert "subtitle" in response.json()["detail"]

    def test_render_bad_feed_link_kind(self, client, feed_payload):
        """Test that an unknown feed link kind gives 400."""
        feed_payload["feed_links"] = {"json": "http://www.example.com/feed.json"}

        response = client.post("/api/feeds/render", json=feed_payload)
        assert response.status_code == 400


class TestValidateEndpoint:
    """Tests for POST /api/feeds/validate."""

    def test_valid(self, client, feed_payload):
        """Test that a valid document reports no problems."""
        response = client.post("/api/feeds/validate", json=feed_payload)

        assert response.status_code == 200
        assert response.json() == {"valid": True, "problems": []}

    def test_invalid(self, client):
        """Test that every problem is listed."""
        response = client.post("/api/feeds/validate", json={
            "title": "Only a title",
            "image": {"uri": "http://www.example.com/logo.png", "height": 500},
        })

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert data["problems"] == [
            "Feed description is required",
            "Feed link is required",
            "Image link is required",
            "Image title is required",
            "Image height must not exceed 400, got 500",
        ]


class TestNonXmlText:
    """Tests for text XML cannot carry."""

    def test_render_control_character(self, client, feed_payload):
        """Test that a control character gives 422, not a server error."""
        feed_payload["title"] = "a\x01"

        response = client.post("/api/feeds/render", json=feed_payload)

        assert response.status_code == 422
        assert response.json()["detail"] == [
            "Feed title contains a character XML cannot hold: U+0001"
        ]

    def test_validate_control_character(self, client, feed_payload):
        """Test that validate agrees with render about control characters."""
        feed_payload["description"] = "Bell\x07here"

        response = client.post("/api/feeds/validate", json=feed_payload)

        assert response.json()["valid"] is False

    def test_render_python_only_encoding(self, client, feed_payload):
        """Test that an encoding the serializer cannot write gives 422."""
        feed_payload["encoding"] = "utf-8-sig"

        response = client.post("/api/feeds/render", json=feed_payload)

        assert response.status_code == 422
        assert response.json()["detail"] == ["Unknown feed encoding 'utf-8-sig'"]

    def test_render_string_for_list(self, client, feed_payload):
        """Test that a string where a list belongs gives 400."""
        feed_payload["hubs"] = "http://hub.example.com"

        response = client.post("/api/feeds/render", json=feed_payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "Feed 'hubs' must be a list, got str"
