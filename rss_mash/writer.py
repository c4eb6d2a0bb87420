"""RSS 2.0 serialisation of the aggregated feed."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from email.utils import format_datetime
from pathlib import Path
from xml.etree import ElementTree as ET

from .models import AggregatedFeed, FeedEntry

logger = logging.getLogger(__name__)

GENERATOR = "rss-mash"

ATOM_NS = "http://www.w3.org/2005/Atom"
CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
DC_NS = "http://purl.org/dc/elements/1.1/"

for _prefix, _uri in (("atom", ATOM_NS), ("content", CONTENT_NS), ("dc", DC_NS)):
    ET.register_namespace(_prefix, _uri)


def _rfc822(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.astimezone()
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def _iso8601(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _text(parent: ET.Element, tag: str, value) -> None:
    if value:
        ET.SubElement(parent, tag).text = value


def _build_item(channel: ET.Element, entry: FeedEntry) -> None:
    item = ET.SubElement(channel, "item")
    _text(item, "title", entry.title)
    _text(item, "link", entry.link)
    _text(item, "description", entry.summary)
    # RSS <author> must be an e-mail address; names go to dc:creator
    if entry.author and "@" in entry.author:
        _text(item, "author", entry.author)
    else:
        _text(item, f"{{{DC_NS}}}creator", entry.author)
    for contributor in entry.contributors:
        _text(item, f"{{{DC_NS}}}contributor", contributor)
    for category in entry.categories:
        _text(item, "category", category)
    _text(item, "comments", entry.comments)
    for enclosure in entry.enclosures:
        element = ET.SubElement(
            item, "enclosure", url=enclosure.url, length=enclosure.length or "0"
        )
        if enclosure.type:
            element.set("type", enclosure.type)
    if entry.guid:
        guid = ET.SubElement(item, "guid")
        guid.text = entry.guid
        if not entry.guid_is_permalink:
            guid.set("isPermaLink", "false")
    if entry.published is not None:
        _text(item, "pubDate", _rfc822(entry.published))
    if entry.updated is not None:
        _text(item, f"{{{ATOM_NS}}}updated", _iso8601(entry.updated))
    if entry.source_url:
        source = ET.SubElement(item, "source", url=entry.source_url)
        source.text = entry.source_title or entry.source_url
    _text(item, f"{{{CONTENT_NS}}}encoded", entry.content)
    for extension in entry.extensions:
        try:
            ET.register_namespace(extension.prefix, extension.uri)
        except ValueError:
            logger.debug(
                "Cannot reuse prefix %r; ElementTree will pick one", extension.prefix
            )
        _text(item, f"{{{extension.uri}}}{extension.name}", extension.value)


def build_rss(feed: AggregatedFeed) -> ET.ElementTree:
    """Return an indented RSS 2.0 element tree for ``feed``."""
    rss = ET.Element("rss", version="2.0")
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = feed.title
    ET.SubElement(channel, "link").text = feed.link
    ET.SubElement(channel, "description").text = feed.description
    ET.SubElement(channel, "lastBuildDate").text = _rfc822(feed.last_updated)
    ET.SubElement(channel, "generator").text = GENERATOR

    for entry in feed.entries:
        _build_item(channel, entry)

    tree = ET.ElementTree(rss)
    ET.indent(tree, space="  ")
    return tree


def write_feed(feed: AggregatedFeed, path: str) -> int:
    """Write ``feed`` to ``path`` as RSS 2.0 and return the item count."""
    logger.info("Writing aggregated feed to '%s'...", path)
    tree = build_rss(feed)
    with Path(path).open("wb") as handle:
        tree.write(handle, encoding="utf-8", xml_declaration=True)
    logger.info("Feed written successfully.")
    return len(feed.entries)
