"""Loading of the feed source list."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


class SourceListNotFound(FileNotFoundError):
    """Raised when the feed URL list file does not exist."""


def load_feed_urls(path: str) -> List[str]:
    """Return the non-blank lines of the source list file, in order."""
    logger.info("Reading feed URLs from '%s'...", path)
    location = Path(path)
    if not location.is_file():
        raise SourceListNotFound(f"The input file '{path}' was not found.")

    with location.open(encoding="utf-8-sig") as handle:
        urls = [line.strip() for line in handle if line.strip()]

    logger.info("Found %d URLs.", len(urls))
    return urls
