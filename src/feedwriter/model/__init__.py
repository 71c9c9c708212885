"""Feed document model."""

from .document import Author, Category, FeedDocument, FeedEntry, Generator, Image

__all__ = ["Author", "Category", "FeedDocument", "FeedEntry", "Generator", "Image"]
