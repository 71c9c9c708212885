"""Canonical constants for feedwriter."""

# Identity written to <generator> when a document does not set one
GENERATOR_NAME = "FeedWriter"
GENERATOR_URI = "https://pypi.org/project/feedwriter/"

DEFAULT_ENCODING = "UTF-8"

# RSS 2.0 limits for <image>
IMAGE_MAX_WIDTH = 144
IMAGE_MAX_HEIGHT = 400

FEED_LINK_KINDS = {
    'rss',
    'atom',
}

RSS_MIME_TYPE = "application/rss+xml"

# Namespaces
ATOM_NS = "http://www.w3.org/2005/Atom"
DC_NS = "http://purl.org/dc/elements/1.1/"
XML_NS = "http://www.w3.org/XML/1998/namespace"
