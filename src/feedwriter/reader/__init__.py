"""RSS reader used for round-trip checks and inspection."""

from .rss_reader import ReadEntry, ReadFeed, read_feed

__all__ = ["ReadEntry", "ReadFeed", "read_feed"]
