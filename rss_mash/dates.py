"""Resolution of the on-or-after date argument."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from dateutil import parser as dateparser

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def start_of_day(day: date) -> datetime:
    """Return local midnight of ``day`` as an aware datetime."""
    return datetime.combine(day, time.min).astimezone()


def resolve_threshold(raw: Optional[str], now: Optional[datetime] = None) -> datetime:
    """Turn ``today``, ``yesterday`` or a date string into a day-start threshold.

    Missing or unparseable values resolve to the epoch, which keeps every entry.
    """
    if raw is None:
        return EPOCH

    current = now or datetime.now()
    today = current.astimezone().date() if current.tzinfo else current.date()
    value = raw.strip().lower()

    if value == "today":
        return start_of_day(today)
    if value == "yesterday":
        return start_of_day(today - timedelta(days=1))

    try:
        day = _parse_calendar_date(value)
        return start_of_day(day)
    except (ValueError, OverflowError):
        logger.warning("Could not parse date '%s'; not filtering by date.", raw)
        return EPOCH


def _parse_calendar_date(value: str) -> date:
    """Parse ``value`` only if it names a year, month and day explicitly."""
    # dateutil fills missing fields from ``default``; two defaults expose them
    first = dateparser.parse(value, default=datetime(2000, 1, 1))
    second = dateparser.parse(value, default=datetime(2001, 2, 2))
    if first.date() != second.date():
        raise ValueError(f"'{value}' is not a complete calendar date")
    return first.date()
