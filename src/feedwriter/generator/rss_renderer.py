"""RSS 2.0 rendering using feedgen."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from feedgen.entry import FeedEntry as FeedgenEntry
from feedgen.feed import FeedGenerator

from feedwriter import __version__
from feedwriter.constants import GENERATOR_NAME, GENERATOR_URI, RSS_MIME_TYPE
from feedwriter.generator.channel_extension import ChannelExtension
from feedwriter.generator.validation import coerce_timestamp, validate
from feedwriter.model.document import FeedDocument, FeedEntry, Generator

logger = logging.getLogger("feedwriter")


def default_generator() -> Generator:
    """Generator written when the document does not name one."""
    return Generator(name=GENERATOR_NAME, version=__version__, uri=GENERATOR_URI)


@dataclass(frozen=True)
class RenderedFeed:
    """Serialized RSS document."""

    xml: bytes
    encoding: str

    def to_xml_bytes(self) -> bytes:
        return self.xml

    def to_xml_string(self) -> str:
        """Return the document as text, XML declaration included."""
        return self.xml.decode(self.encoding)

    def save(self, output_path: Union[str, Path]) -> None:
        """Write the document to a file.

        Args:
            output_path: Path to write the RSS XML file
        """
        # Ensure parent directory exists
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.xml)

        logger.info(f"RSS feed saved to {output_path}")


class RSSRenderer:
    """Render a FeedDocument as RSS 2.0.

    The renderer keeps a reference to the document, not a copy: changes made
    to the document after construction show up in the next ``render()``. Each
    call validates the document again and builds a fresh FeedGenerator.
    """

    def __init__(self, document: FeedDocument, pretty: bool = True):
        """Initialize the renderer.

        Args:
            document: Feed document to render.
            pretty: Indent the XML output.
        """
        self.document = document
        self.pretty = pretty

    def get_data_container(self) -> FeedDocument:
        return self.document

    def _add_categories(self, target, categories) -> None:
        # RSS carries the term as text and the scheme as domain; labels have no place
        for category in categories:
            if category.scheme:
                target.category(term=category.term, scheme=category.scheme)
            else:
                target.category(term=category.term)

    def _build_channel(self, fg: FeedGenerator) -> None:
        """Copy channel-level fields from the document onto the generator."""
        doc = self.document

        fg.title(doc.title)
        fg.description(doc.description)

        # feedgen uses the last link added as the RSS <link>, so the self link goes first
        rss_feed_link = doc.feed_links.get("rss")
        if rss_feed_link:
            fg.link(href=rss_feed_link, rel="self", type=RSS_MIME_TYPE)
        fg.link(href=doc.link, rel="alternate")

        if doc.date_modified is not None:
            fg.pubDate(coerce_timestamp(doc.date_modified))

        if doc.last_build_date is not None:
            fg.lastBuildDate(coerce_timestamp(doc.last_build_date))
            fg.channel.keep_last_build_date(True)

        generator = doc.generator if doc.generator is not None else default_generator()
        fg.generator(str(generator))

        if doc.language:
            fg.language(doc.language)

        if doc.copyright:
            fg.copyright(doc.copyright)

        if doc.base_url:
            fg.channel.base_url(doc.base_url)

        if doc.authors:
            fg.dc.dc_creator([author.name for author in doc.authors])

        self._add_categories(fg, doc.categories)

        for hub in doc.hubs:
            fg.channel.hub(hub)

        if doc.image is not None:
            image = doc.image
            fg.image(
                url=image.uri,
                title=image.title,
                link=image.link,
                width=str(image.width) if image.width is not None else None,
                height=str(image.height) if image.height is not None else None,
            )
            if image.description:
                fg.channel.image_description(image.description)

    def _add_entry(self, fg: FeedGenerator, entry: FeedEntry) -> FeedgenEntry:
        """Add one entry to the feed, keeping document order."""
        fe = fg.add_entry(order="append")

        if entry.title:
            fe.title(entry.title)

        if entry.link:
            fe.link(href=entry.link)

        if entry.description:
            fe.description(entry.description)

        if entry.id:
            fe.guid(entry.id, permalink=entry.id == entry.link)

        if entry.date_modified is not None:
            fe.pubDate(coerce_timestamp(entry.date_modified))

        if entry.authors:
            fe.dc.dc_creator([author.name for author in entry.authors])

        self._add_categories(fe, entry.categories)

        logger.debug(f"Added entry to feed: {entry.title or entry.id or entry.link}")
        return fe

    def render(self) -> RenderedFeed:
        """Validate the document and serialize it.

        Returns:
            RenderedFeed holding the XML in the document's encoding.

        Raises:
            FeedWriterError: VALIDATION if the document breaks a rule.
                No output is produced in that case.
        """
        validate(self.document)

        fg = FeedGenerator()
        fg.load_extension("dc")
        fg.register_extension("channel", ChannelExtension)

        self._build_channel(fg)
        for entry in self.document.entries:
            self._add_entry(fg, entry)

        encoding = self.document.encoding
        xml = fg.rss_str(pretty=self.pretty, encoding=encoding)

        logger.debug(
            f"Rendered RSS feed '{self.document.title}' with {len(self.document.entries)} entries "
            f"({len(xml)} bytes, {encoding})"
        )
        return RenderedFeed(xml=xml, encoding=encoding)


def render(document: FeedDocument, pretty: bool = True) -> RenderedFeed:
    """Render a document as RSS 2.0 in one call."""
    return RSSRenderer(document, pretty=pretty).render()
