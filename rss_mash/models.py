"""Shared data models for rss_mash."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


class FeedError(Exception):
    """Base class for problems with a single feed source."""

    kind = "error"


class InvalidFeedURL(FeedError):
    """The feed address is not a usable URL."""

    kind = "invalid URL"


class FeedParseError(FeedError):
    """The downloaded document is not a readable RSS/Atom feed."""

    kind = "parse error"


class FeedFetchError(FeedError):
    """The feed could not be retrieved."""

    kind = "fetch error"


@dataclass
class Enclosure:
    """Media attached to an entry, such as podcast audio."""

    url: str
    length: Optional[str] = None
    type: Optional[str] = None


@dataclass
class Extension:
    """A namespaced element passed through from the source feed."""

    uri: str
    prefix: str
    name: str
    value: str


@dataclass
class FeedEntry:
    """A single syndicated item, carried through to the output unchanged.

    ``extensions`` holds simple namespaced elements the source carried, such
    as ``itunes:duration``. ``raw`` keeps the parser's own view of the entry
    for anything not mapped onto a field.
    """

    title: Optional[str] = None
    link: Optional[str] = None
    summary: Optional[str] = None
    content: Optional[str] = None
    published: Optional[datetime] = None
    updated: Optional[datetime] = None
    guid: Optional[str] = None
    guid_is_permalink: bool = False
    author: Optional[str] = None
    contributors: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    comments: Optional[str] = None
    enclosures: List[Enclosure] = field(default_factory=list)
    extensions: List[Extension] = field(default_factory=list)
    source_title: Optional[str] = None
    source_url: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass
class FetchResult:
    """Outcome of fetching one feed source."""

    url: str
    entries: List[FeedEntry] = field(default_factory=list)
    error: Optional[FeedError] = None
    title: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class AggregatedFeed:
    """The combined output feed envelope."""

    title: str
    description: str
    link: str
    last_updated: datetime
    entries: List[FeedEntry] = field(default_factory=list)
    results: List[FetchResult] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)
