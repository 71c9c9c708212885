"""Parse RSS 2.0 documents back into plain values."""

import logging
import re
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Union

import dateutil.parser
from lxml import etree

from feedwriter.constants import ATOM_NS, DC_NS, DEFAULT_ENCODING, XML_NS
from feedwriter.exceptions import ErrorKind, FeedWriterError

logger = logging.getLogger("feedwriter")

# No DTDs, no entity expansion, no network access
_PARSER = etree.XMLParser(
    attribute_defaults=False,
    dtd_validation=False,
    load_dtd=False,
    no_network=True,
    recover=False,
    remove_pis=True,
    resolve_entities=False,
    huge_tree=False,
)

_DECLARED_ENCODING = re.compile(rb"""^\s*<\?xml[^>]*?encoding\s*=\s*["']([A-Za-z0-9._:-]+)["']""")

IMAGE_FIELDS = (
    ("url", "uri"),
    ("link", "link"),
    ("title", "title"),
    ("height", "height"),
    ("width", "width"),
    ("description", "description"),
)


@dataclass
class ReadEntry:
    """An <item> as read from the document."""

    title: Optional[str] = None
    link: Optional[str] = None
    description: Optional[str] = None
    id: Optional[str] = None
    date_modified: Optional[datetime] = None
    authors: List[Dict[str, str]] = field(default_factory=list)
    categories: List[Dict[str, Optional[str]]] = field(default_factory=list)


@dataclass
class ReadFeed:
    """Channel-level values as read from an RSS document.

    Missing elements read back as None (or an empty list); nothing is
    defaulted.
    """

    encoding: str = DEFAULT_ENCODING
    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    feed_link: Optional[str] = None
    base_url: Optional[str] = None
    date_modified: Optional[datetime] = None
    last_build_date: Optional[datetime] = None
    generator: Optional[str] = None
    language: Optional[str] = None
    copyright: Optional[str] = None
    authors: List[Dict[str, str]] = field(default_factory=list)
    categories: List[Dict[str, Optional[str]]] = field(default_factory=list)
    hubs: List[str] = field(default_factory=list)
    image: Optional[Dict[str, str]] = None
    entries: List[ReadEntry] = field(default_factory=list)

    @property
    def author(self) -> Optional[Dict[str, str]]:
        """First author, or None."""
        return self.authors[0] if self.authors else None

    def to_dict(self) -> dict:
        """JSON-friendly form; dates become ISO-8601 strings."""
        def convert(value):
            if isinstance(value, datetime):
                return value.isoformat()
            if isinstance(value, list):
                return [convert(v) for v in value]
            if isinstance(value, dict):
                return {k: convert(v) for k, v in value.items()}
            return value

        return convert(asdict(self))


def _declared_encoding(data: bytes) -> str:
    match = _DECLARED_ENCODING.match(data[:200])
    return match.group(1).decode("ascii") if match else DEFAULT_ENCODING


def _text(parent, tag: str) -> Optional[str]:
    """Text of the first matching child, or None if the element is absent."""
    element = parent.find(tag)
    if element is None:
        return None
    return element.text or ""


def _date(parent, tag: str) -> Optional[datetime]:
    text = _text(parent, tag)
    if not text:
        return None
    try:
        return dateutil.parser.parse(text)
    except (ValueError, OverflowError):
        logger.warning(f"Could not parse <{tag}> date '{text}'")
        return None


def _categories(parent) -> List[Dict[str, Optional[str]]]:
    categories = []
    for element in parent.findall("category"):
        term = element.text or ""
        categories.append({
            "term": term,
            "label": term,
            "scheme": element.get("domain"),
        })
    return categories


def _creators(parent) -> List[Dict[str, str]]:
    return [{"name": element.text or ""} for element in parent.findall(f"{{{DC_NS}}}creator")]


def _atom_links(channel, rel: str) -> List[str]:
    return [
        element.get("href")
        for element in channel.findall(f"{{{ATOM_NS}}}link")
        if element.get("rel") == rel and element.get("href")
    ]


def _image(channel) -> Optional[Dict[str, str]]:
    element = channel.find("image")
    if element is None:
        return None
    image = {}
    for tag, key in IMAGE_FIELDS:
        value = _text(element, tag)
        if value is not None:
            image[key] = value
    return image


def _entry(item) -> ReadEntry:
    return ReadEntry(
        title=_text(item, "title"),
        link=_text(item, "link"),
        description=_text(item, "description"),
        id=_text(item, "guid"),
        date_modified=_date(item, "pubDate"),
        authors=_creators(item),
        categories=_categories(item),
    )


def read_feed(data: Union[str, bytes]) -> ReadFeed:
    """Parse an RSS 2.0 document.

    Args:
        data: The document as bytes, or as text carrying its XML declaration.

    Returns:
        ReadFeed with the channel values.

    Raises:
        FeedWriterError: INVALID_ARGUMENT if the data is not well-formed XML
            or is not an RSS document.
    """
    if isinstance(data, str):
        head = data.lstrip()[:200].encode("ascii", errors="ignore")
        data = data.encode(_declared_encoding(head))

    try:
        root = etree.fromstring(data, _PARSER)
    except etree.XMLSyntaxError as e:
        raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, f"Malformed feed XML: {e}", cause=e)

    if etree.QName(root).localname.lower() != "rss":
        raise FeedWriterError(
            ErrorKind.INVALID_ARGUMENT,
            f"Expected an <rss> document, got <{etree.QName(root).localname}>"
        )

    channel = root.find("channel")
    if channel is None:
        raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, "RSS document has no <channel>")

    self_links = _atom_links(channel, "self")

    feed = ReadFeed(
        encoding=_declared_encoding(data),
        title=_text(channel, "title"),
        description=_text(channel, "description"),
        link=_text(channel, "link"),
        feed_link=self_links[0] if self_links else None,
        base_url=root.get(f"{{{XML_NS}}}base"),
        date_modified=_date(channel, "pubDate"),
        last_build_date=_date(channel, "lastBuildDate"),
        generator=_text(channel, "generator"),
        language=_text(channel, "language"),
        copyright=_text(channel, "copyright"),
        authors=_creators(channel),
        categories=_categories(channel),
        hubs=_atom_links(channel, "hub"),
        image=_image(channel),
        entries=[_entry(item) for item in channel.findall("item")],
    )

    logger.debug(f"Read RSS feed '{feed.title}' with {len(feed.entries)} entries")
    return feed
