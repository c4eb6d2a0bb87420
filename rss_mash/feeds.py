"""Feed retrieval and parsing helpers."""

from __future__ import annotations

import calendar
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import unquote, urlsplit

import feedparser
import requests

from .models import (
    Enclosure,
    Extension,
    FeedEntry,
    FeedFetchError,
    FeedParseError,
    FetchResult,
    InvalidFeedURL,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "rss-mash/0.1 (+https://pypi.org/project/feedparser/)"

_REMOTE_SCHEMES = ("http", "https")
# Namespaces feedparser already folds into the standard entry fields
_MAPPED_PREFIXES = frozenset({"atom", "content", "dc", "dcterms", "rdf", "xhtml", "xml"})


def to_datetime(value: Optional[time.struct_time]) -> Optional[datetime]:
    """Convert feedparser UTC timestamps to timezone-aware datetimes."""
    if value is None:
        return None
    return datetime.fromtimestamp(calendar.timegm(value), tz=timezone.utc)


def fetch_feed(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: Optional[str] = None,
) -> FetchResult:
    """Fetch and parse a single feed, reporting failures in the result."""
    try:
        content = _download(url, timeout, user_agent or DEFAULT_USER_AGENT)
        title, entries = _parse(url, content)
    except (InvalidFeedURL, FeedParseError, FeedFetchError) as exc:
        return FetchResult(url=url, error=exc)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Unexpected failure processing %s", url, exc_info=True)
        return FetchResult(url=url, error=FeedFetchError(str(exc)))
    return FetchResult(url=url, entries=entries, title=title)


def _download(url: str, timeout: float, user_agent: str) -> bytes:
    parts = urlsplit(url)
    scheme = parts.scheme.lower()

    if scheme == "file":
        return _read_local(Path(unquote(parts.path)))

    # Bare paths, including Windows drive paths such as C:\feeds\x.xml
    if not scheme or len(scheme) == 1:
        path = Path(url)
        if path.is_file():
            return _read_local(path)
        raise InvalidFeedURL(f"'{url}' is not a URL or an existing file")

    if scheme not in _REMOTE_SCHEMES or not parts.netloc:
        raise InvalidFeedURL(f"'{url}' is not a valid http(s) or file URL")

    try:
        response = requests.get(
            url, timeout=timeout, headers={"User-Agent": user_agent}
        )
    except (
        requests.exceptions.MissingSchema,
        requests.exceptions.InvalidSchema,
        requests.exceptions.InvalidURL,
    ) as exc:
        raise InvalidFeedURL(str(exc)) from exc
    except requests.RequestException as exc:
        raise FeedFetchError(str(exc)) from exc

    try:
        response.raise_for_status()
        return response.content
    except requests.RequestException as exc:
        raise FeedFetchError(str(exc)) from exc
    finally:
        response.close()


def _read_local(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FeedFetchError(str(exc)) from exc


def _parse(url: str, content: bytes):
    parsed = feedparser.parse(content)

    if parsed.bozo and not parsed.entries:
        raise FeedParseError(str(parsed.get("bozo_exception", "malformed feed")))
    if not parsed.get("version") and not parsed.entries:
        raise FeedParseError("document is not a recognised RSS or Atom feed")

    title = parsed.feed.get("title")
    namespaces = {
        prefix: uri
        for prefix, uri in (parsed.get("namespaces") or {}).items()
        if prefix and prefix not in _MAPPED_PREFIXES
    }
    entries = [_to_entry(item, url, title, namespaces) for item in parsed.entries]
    logger.debug("Parsed %d entries from %s", len(entries), url)
    return title, entries


def _first_value(items) -> Optional[str]:
    if not items:
        return None
    try:
        return items[0].get("value")
    except (TypeError, KeyError, IndexError, AttributeError):
        return None


def _extensions(item, namespaces: Dict[str, str]) -> List[Extension]:
    """Collect simple text elements from foreign namespaces, e.g. itunes:duration."""
    found: List[Extension] = []
    for key, value in item.items():
        if not isinstance(value, str) or "_" not in key:
            continue
        prefix, name = key.split("_", 1)
        if prefix in namespaces and name and not name.endswith(("_detail", "_parsed")):
            found.append(Extension(namespaces[prefix], prefix, name, value))
    return found


def _to_entry(item, url: str, feed_title: Optional[str], namespaces=None) -> FeedEntry:
    content = _first_value(item.get("content"))

    summary = item.get("summary")
    if not summary:
        summary_detail = item.get("summary_detail")
        if summary_detail:
            summary = summary_detail.get("value")
    if not summary:
        summary = content

    published = None
    for attr in ("published_parsed", "updated_parsed", "created_parsed"):
        published = item.get(attr)
        if published:
            break

    # membership test bypasses feedparser's updated -> published alias
    updated = to_datetime(item["updated_parsed"]) if "updated_parsed" in item else None

    categories: List[str] = [
        tag.get("term") for tag in item.get("tags") or [] if tag.get("term")
    ]
    enclosures = [
        Enclosure(url=enc.get("href"), length=enc.get("length"), type=enc.get("type"))
        for enc in item.get("enclosures") or []
        if enc.get("href")
    ]
    contributors = [
        person.get("name") or person.get("email")
        for person in item.get("contributors") or []
        if person.get("name") or person.get("email")
    ]

    return FeedEntry(
        title=item.get("title"),
        link=item.get("link"),
        summary=summary,
        content=content,
        published=to_datetime(published),
        updated=updated,
        guid=item.get("id"),
        guid_is_permalink=bool(item.get("guidislink")),
        author=item.get("author"),
        contributors=contributors,
        categories=categories,
        comments=item.get("comments"),
        enclosures=enclosures,
        extensions=_extensions(item, namespaces or {}),
        source_title=feed_title,
        source_url=url,
        raw=dict(item),
    )
