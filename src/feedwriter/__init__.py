"""FeedWriter - RSS 2.0 feed rendering."""

from importlib import metadata
from pathlib import Path


def _read_version() -> str:
    # Source checkouts carry VERSION at the project root; installs have metadata
    version_file = Path(__file__).parent.parent.parent / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    try:
        return metadata.version("feedwriter")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__version__ = _read_version()

from .exceptions import ErrorKind, FeedWriterError  # noqa: E402
from .model import Author, Category, FeedDocument, FeedEntry, Generator, Image  # noqa: E402
from .generator.rss_renderer import RenderedFeed, RSSRenderer, render  # noqa: E402
from .reader import ReadEntry, ReadFeed, read_feed  # noqa: E402

__all__ = [
    "__version__",
    "Author",
    "Category",
    "ErrorKind",
    "FeedDocument",
    "FeedEntry",
    "FeedWriterError",
    "Generator",
    "Image",
    "ReadEntry",
    "ReadFeed",
    "RenderedFeed",
    "RSSRenderer",
    "read_feed",
    "render",
]
