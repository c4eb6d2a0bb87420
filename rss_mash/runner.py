"""High-level orchestration for the rss_mash application."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from functools import partial
from typing import Optional

from .aggregator import aggregate_feeds
from .config import ChannelConfig
from .dates import EPOCH
from .feeds import DEFAULT_TIMEOUT, fetch_feed
from .sources import load_feed_urls
from .writer import write_feed

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """Runtime options for executing the application."""

    input_path: str
    output_path: str
    on_or_after: datetime = EPOCH
    timeout: float = DEFAULT_TIMEOUT
    user_agent: Optional[str] = None
    channel: ChannelConfig = field(default_factory=ChannelConfig)


@dataclass
class RunResult:
    """Returned data after executing the app."""

    source_count: int
    item_count: int
    failed_sources: int = 0
    written: bool = False


def execute(config: RunConfig, now: Optional[datetime] = None) -> RunResult:
    """Load the source list, aggregate the feeds and write the output file."""
    urls = load_feed_urls(config.input_path)
    if not urls:
        logger.warning(
            "No feed URLs found in '%s'. Please add URLs, one per line.",
            config.input_path,
        )
        return RunResult(source_count=0, item_count=0)

    fetch = partial(fetch_feed, timeout=config.timeout, user_agent=config.user_agent)
    feed = aggregate_feeds(
        urls, config.on_or_after, fetch=fetch, now=now, channel=config.channel
    )
    item_count = write_feed(feed, config.output_path)

    return RunResult(
        source_count=len(urls),
        item_count=item_count,
        failed_sources=sum(1 for result in feed.results if not result.ok),
        written=True,
    )
