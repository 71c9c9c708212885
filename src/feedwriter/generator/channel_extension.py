"""feedgen extension for RSS channel elements feedgen does not write itself.

Registered on a FeedGenerator under the ``channel`` namespace:

    fg.register_extension("channel", ChannelExtension)
    fg.channel.hub("https://example.com/hub")

It adds <atom:link rel="hub"> elements, the xml:base attribute, the image
description, and drops the lastBuildDate feedgen stamps on every feed unless
a build date was set explicitly.
"""

from typing import List, Optional

from feedgen.ext.base import BaseExtension
from lxml import etree

from feedwriter.constants import ATOM_NS, XML_NS


class ChannelExtension(BaseExtension):
    """Extra channel-level data for RSS output."""

    def __init__(self):
        self._hubs: List[str] = []
        self._base_url: Optional[str] = None
        self._image_description: Optional[str] = None
        self._keep_last_build_date = False

    def hub(self, href: Optional[str] = None, replace: bool = False) -> List[str]:
        """Get or add WebSub hub URLs."""
        if href is not None:
            if replace:
                self._hubs = []
            self._hubs.append(href)
        return self._hubs

    def base_url(self, url: Optional[str] = None) -> Optional[str]:
        """Get or set the xml:base of the feed."""
        if url is not None:
            self._base_url = url
        return self._base_url

    def image_description(self, description: Optional[str] = None) -> Optional[str]:
        """Get or set the <description> of the channel <image>."""
        if description is not None:
            self._image_description = description
        return self._image_description

    def keep_last_build_date(self, keep: Optional[bool] = None) -> bool:
        """Get or set whether feedgen's <lastBuildDate> stays in the output."""
        if keep is not None:
            self._keep_last_build_date = keep
        return self._keep_last_build_date

    def extend_rss(self, rss_feed):
        """Apply the channel data to the generated RSS tree.

        :param rss_feed: The feed root element.
        :returns: The feed root element.
        """
        channel = rss_feed[0]

        if self._base_url:
            rss_feed.set(f"{{{XML_NS}}}base", self._base_url)

        if not self._keep_last_build_date:
            for element in channel.findall("lastBuildDate"):
                channel.remove(element)

        if self._image_description:
            image = channel.find("image")
            if image is not None:
                description = etree.SubElement(image, "description")
                description.text = self._image_description

        for href in self._hubs:
            etree.SubElement(channel, f"{{{ATOM_NS}}}link", href=href, rel="hub")

        return rss_feed
