"""In-memory feed document consumed by the renderer."""

import logging
from dataclasses import MISSING, dataclass, field, fields
from typing import Any, Dict, List, Optional, Union

from feedwriter.constants import DEFAULT_ENCODING, FEED_LINK_KINDS
from feedwriter.exceptions import ErrorKind, FeedWriterError

logger = logging.getLogger("feedwriter")

# Anything the renderer can turn into a timestamp: datetime, epoch seconds or a date string
Timestamp = Any


@dataclass
class Author:
    """A feed or entry author. RSS output only carries the name."""

    name: str
    email: Optional[str] = None
    uri: Optional[str] = None


@dataclass
class Category:
    """A category; label and scheme are optional."""

    term: str
    label: Optional[str] = None
    scheme: Optional[str] = None


@dataclass
class Generator:
    """Software that produced the feed."""

    name: str
    version: Optional[str] = None
    uri: Optional[str] = None

    def __str__(self) -> str:
        text = self.name
        if self.version:
            text += f" {self.version}"
        if self.uri:
            text += f" ({self.uri})"
        return text


@dataclass
class Image:
    """Channel image.

    Values are stored as given. Width and height may be ints or digit
    strings; they are checked when the feed is rendered.
    """

    uri: Optional[str] = None
    link: Optional[str] = None
    title: Optional[str] = None
    width: Optional[Union[int, str]] = None
    height: Optional[Union[int, str]] = None
    description: Optional[Any] = None


def _list_from(data: Dict[str, Any], key: str, owner: str) -> List[Any]:
    """Return data[key] as a list; a missing or null value is an empty list."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise FeedWriterError(
            ErrorKind.INVALID_ARGUMENT,
            f"{owner} '{key}' must be a list, got {type(value).__name__}"
        )
    return value


def _image_from(value: Union["Image", Dict[str, Any]]) -> Image:
    if isinstance(value, Image):
        return value
    if not isinstance(value, dict):
        raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, "Image must be an Image or a dict")
    allowed = {f.name for f in fields(Image)}
    unknown = set(value) - allowed
    if unknown:
        raise FeedWriterError(
            ErrorKind.INVALID_ARGUMENT,
            f"Unknown image keys: {', '.join(sorted(unknown))}"
        )
    return Image(**value)


def _authors_from(items: List[Any]) -> List[Author]:
    authors = []
    for item in items:
        if isinstance(item, Author):
            authors.append(item)
        elif isinstance(item, str):
            authors.append(Author(name=item))
        elif isinstance(item, dict):
            authors.append(Author(
                name=item.get("name"),
                email=item.get("email"),
                uri=item.get("uri"),
            ))
        else:
            raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, f"Invalid author: {item!r}")
    return authors


def _categories_from(items: List[Any]) -> List[Category]:
    categories = []
    for item in items:
        if isinstance(item, Category):
            categories.append(item)
        elif isinstance(item, dict):
            categories.append(Category(
                term=item.get("term"),
                label=item.get("label"),
                scheme=item.get("scheme"),
            ))
        else:
            raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, f"Invalid category: {item!r}")
    return categories


@dataclass
class FeedEntry:
    """A single <item> in the channel."""

    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    id: Optional[str] = None
    date_modified: Optional[Timestamp] = None
    authors: List[Author] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)

    def add_author(self, name: str, email: Optional[str] = None, uri: Optional[str] = None) -> None:
        self.authors.append(Author(name=name, email=email, uri=uri))

    def add_category(self, term: str, label: Optional[str] = None, scheme: Optional[str] = None) -> None:
        self.categories.append(Category(term=term, label=label, scheme=scheme))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeedEntry":
        """Build an entry from JSON-style data."""
        allowed = {f.name for f in fields(cls)}
        unknown = set(data) - allowed
        if unknown:
            raise FeedWriterError(
                ErrorKind.INVALID_ARGUMENT,
                f"Unknown entry fields: {', '.join(sorted(unknown))}"
            )
        values = dict(data)
        values["authors"] = _authors_from(_list_from(data, "authors", "Entry"))
        values["categories"] = _categories_from(_list_from(data, "categories", "Entry"))
        return cls(**values)


@dataclass
class FeedDocument:
    """A syndication feed before serialization.

    Every field can be set, changed or removed at any time. Nothing is
    checked on assignment; the renderer validates the whole document each
    time it renders.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    feed_links: Dict[str, str] = field(default_factory=dict)
    date_modified: Optional[Timestamp] = None
    last_build_date: Optional[Timestamp] = None
    generator: Optional[Generator] = None
    language: Optional[str] = None
    base_url: Optional[str] = None
    authors: List[Author] = field(default_factory=list)
    copyright: Optional[str] = None
    categories: List[Category] = field(default_factory=list)
    hubs: List[str] = field(default_factory=list)
    image: Optional[Image] = None
    encoding: str = DEFAULT_ENCODING
    entries: List[FeedEntry] = field(default_factory=list)

    def set_feed_link(self, url: str, kind: str) -> None:
        """Set the URL where the feed itself is published in the given format."""
        kind = kind.lower()
        if kind not in FEED_LINK_KINDS:
            raise FeedWriterError(
                ErrorKind.INVALID_ARGUMENT,
                f"Unknown feed link type '{kind}', expected one of: {', '.join(sorted(FEED_LINK_KINDS))}"
            )
        self.feed_links[kind] = url

    def set_generator(self, name: str, version: Optional[str] = None, uri: Optional[str] = None) -> None:
        self.generator = Generator(name=name, version=version, uri=uri)

    def set_image(self, image: Union[Image, Dict[str, Any]]) -> None:
        self.image = _image_from(image)

    def add_author(self, name: str, email: Optional[str] = None, uri: Optional[str] = None) -> None:
        self.authors.append(Author(name=name, email=email, uri=uri))

    def add_authors(self, authors: List[Any]) -> None:
        self.authors.extend(_authors_from(authors))

    def add_category(self, term: str, label: Optional[str] = None, scheme: Optional[str] = None) -> None:
        self.categories.append(Category(term=term, label=label, scheme=scheme))

    def add_categories(self, categories: List[Any]) -> None:
        self.categories.extend(_categories_from(categories))

    def add_hub(self, url: str) -> None:
        self.hubs.append(url)

    def add_hubs(self, urls: List[str]) -> None:
        self.hubs.extend(urls)

    def add_entry(self, entry: Optional[FeedEntry] = None, **kwargs) -> FeedEntry:
        """Append an entry, creating one from keyword arguments if none is given."""
        if entry is None:
            entry = FeedEntry(**kwargs)
        self.entries.append(entry)
        return entry

    def remove(self, name: str) -> None:
        """Reset a field to its unset value."""
        for f in fields(self):
            if f.name == name:
                if f.default_factory is not MISSING:
                    setattr(self, name, f.default_factory())
                else:
                    setattr(self, name, f.default)
                logger.debug(f"Removed feed field '{name}'")
                return
        raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, f"Unknown feed field '{name}'")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeedDocument":
        """Build a document from JSON-style data.

        Keys match the attribute names. ``generator`` may be a string or a
        dict with name/version/uri; ``authors`` may hold names or dicts.
        """
        if not isinstance(data, dict):
            raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, "Feed document must be a JSON object")

        allowed = {f.name for f in fields(cls)}
        unknown = set(data) - allowed
        if unknown:
            raise FeedWriterError(
                ErrorKind.INVALID_ARGUMENT,
                f"Unknown feed fields: {', '.join(sorted(unknown))}"
            )

        document = cls()
        for key in ("title", "description", "link", "date_modified", "last_build_date",
                    "language", "base_url", "copyright"):
            if key in data:
                setattr(document, key, data[key])
        if data.get("encoding"):
            document.encoding = data["encoding"]

        feed_links = data.get("feed_links") or {}
        if not isinstance(feed_links, dict):
            raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, "Feed 'feed_links' must be an object")
        for kind, url in feed_links.items():
            document.set_feed_link(url, kind)

        generator = data.get("generator")
        if isinstance(generator, str):
            document.set_generator(generator)
        elif isinstance(generator, dict):
            document.set_generator(generator.get("name"), generator.get("version"), generator.get("uri"))
        elif generator is not None:
            raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, "Generator must be a string or an object")

        if data.get("image") is not None:
            document.set_image(data["image"])

        document.add_authors(_list_from(data, "authors", "Feed"))
        document.add_categories(_list_from(data, "categories", "Feed"))
        document.add_hubs(_list_from(data, "hubs", "Feed"))

        for entry in _list_from(data, "entries", "Feed"):
            if not isinstance(entry, dict):
                raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, f"Invalid entry: {entry!r}")
            document.add_entry(FeedEntry.from_dict(entry))

        return document
