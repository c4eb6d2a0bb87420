"""Merging, filtering and ordering of entries from many feeds."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from .config import ChannelConfig
from .dates import EPOCH
from .feeds import fetch_feed
from .models import AggregatedFeed, FeedEntry, FetchResult

logger = logging.getLogger(__name__)

_UNDATED = datetime.min.replace(tzinfo=timezone.utc)


def collect_entries(results: Iterable[FetchResult]) -> List[FeedEntry]:
    """Concatenate entries from successful fetches, preserving order."""
    entries: List[FeedEntry] = []
    for result in results:
        if result.ok:
            entries.extend(result.entries)
    return entries


def filter_entries(
    entries: Iterable[FeedEntry], on_or_after: datetime
) -> List[FeedEntry]:
    """Keep entries published on or after the threshold.

    Undated entries only survive when the threshold is the epoch.
    """
    keep_undated = on_or_after <= EPOCH
    selected: List[FeedEntry] = []
    for entry in entries:
        if entry.published is None:
            if keep_undated:
                selected.append(entry)
            continue
        if entry.published >= on_or_after:
            selected.append(entry)
        else:
            logger.debug(
                "Skipping entry older than threshold (%s < %s): %s",
                entry.published,
                on_or_after,
                entry.link,
            )
    return selected


def sort_entries(entries: Iterable[FeedEntry]) -> List[FeedEntry]:
    """Newest first; ties keep their original order and undated entries go last."""
    return sorted(
        entries, key=lambda item: item.published or _UNDATED, reverse=True
    )


def aggregate_feeds(
    urls: Iterable[str],
    on_or_after: datetime,
    fetch: Callable[[str], FetchResult] = fetch_feed,
    now: Optional[datetime] = None,
    channel: Optional[ChannelConfig] = None,
) -> AggregatedFeed:
    """Fetch every source in turn and build the combined feed."""
    channel = channel or ChannelConfig()
    logger.info(
        "Aggregating feed items on or after %s...", on_or_after.strftime("%Y-%m-%d")
    )

    results: List[FetchResult] = []
    for url in urls:
        logger.info("  Processing feed: %s", url)
        result = fetch(url)
        results.append(result)
        if result.ok:
            logger.info("    Added %d items from %s", len(result.entries), url)
        else:
            logger.warning(
                "    Error (%s) for '%s': %s. Skipping.",
                result.error.kind,
                url,
                result.error,
            )

    entries = sort_entries(filter_entries(collect_entries(results), on_or_after))
    logger.info("Total aggregated items: %d", len(entries))

    return AggregatedFeed(
        title=channel.title,
        description=channel.description,
        link=channel.link,
        last_updated=now or datetime.now(timezone.utc),
        entries=entries,
        results=results,
    )
