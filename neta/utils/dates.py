"""Date parsing utilities with timezone normalization."""

from __future__ import annotations

import time
from datetime import UTC, datetime, tzinfo
from typing import Mapping

from dateutil import parser as date_parser
from dateutil import tz

TZ_ALIASES: Mapping[str, tzinfo | None] = {
    "JST": tz.gettz("Asia/Tokyo"),
    "EST": tz.gettz("America/New_York"),
    "EDT": tz.gettz("America/New_York"),
    "PST": tz.gettz("America/Los_Angeles"),
    "PDT": tz.gettz("America/Los_Angeles"),
    "UTC": UTC,
    "GMT": UTC,
}


def parse_date_with_tz(
    value: str | datetime | time.struct_time | None, default_tz: tzinfo = UTC
) -> datetime | None:
    """Parse a date value and return a timezone-aware UTC datetime.

    Args:
        value: Date string, datetime, or feedparser ``*_parsed`` struct_time.
        default_tz: Applied when the parsed datetime is naive.

    Returns:
        A timezone-aware datetime normalized to UTC, or None if parsing fails.
    """
    if value is None:
        return None

    if isinstance(value, time.struct_time):
        # feedparser normalizes *_parsed values to UTC
        parsed = datetime(*value[:6], tzinfo=UTC)
    elif isinstance(value, datetime):
        parsed = value
    else:
        if not value.strip():
            return None
        try:
            parsed = date_parser.parse(value, tzinfos=TZ_ALIASES)
        except (ValueError, TypeError, OverflowError, date_parser.ParserError):
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=default_tz)
    else:
        parsed = parsed.astimezone(UTC)

    return parsed


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(UTC).isoformat()


def to_iso_timestamp(value: str | datetime | time.struct_time | None) -> str:
    """Normalize a source timestamp to ISO-8601, falling back to the current time."""
    parsed = parse_date_with_tz(value)
    if parsed is None:
        return utc_now_iso()
    return parsed.isoformat()
