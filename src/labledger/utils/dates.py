"""Timestamp helpers for the ISO-8601 strings kept in snapshots.

Snapshots store dates the way the browser serializes them: either a bare
calendar date (`2026-10-19`) or a full timestamp (`2026-10-19T08:30:00.000Z`).
Both are parsed into timezone-aware UTC datetimes here.
"""

from __future__ import annotations

import datetime
import math
from zoneinfo import ZoneInfo


def parse_timestamp(value: str | None) -> datetime.datetime | None:
    """Parse an ISO-8601 date or timestamp string into an aware UTC datetime.

    Naive values are treated as UTC, so a bare date maps to midnight UTC.

    Args:
        value (str | None): The stored date string.

    Returns:
        datetime.datetime | None: The parsed timestamp, or `None` when the value
            is missing or cannot be parsed.

    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=datetime.UTC)
    return parsed.astimezone(datetime.UTC)


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


def ensure_utc(moment: datetime.datetime) -> datetime.datetime:
    """Return `moment` as an aware UTC datetime (naive values are taken as UTC)."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=datetime.UTC)
    return moment.astimezone(datetime.UTC)


def to_iso(moment: datetime.datetime) -> str:
    """Format a datetime the way `Date.toISOString` does (millisecond precision, `Z`)."""
    moment = ensure_utc(moment)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def epoch_millis(moment: datetime.datetime) -> int:
    return int(ensure_utc(moment).timestamp() * 1000)


def ceil_days(later: datetime.datetime, earlier: datetime.datetime) -> int:
    """Return the whole number of days from `earlier` to `later`, rounded up.

    Args:
        later (datetime.datetime): End of the interval.
        earlier (datetime.datetime): Start of the interval.

    Returns:
        int: `ceil((later - earlier) / 1 day)`;
            negative when `later` is before `earlier`.

    """
    delta = ensure_utc(later) - ensure_utc(earlier)
    return math.ceil(delta / datetime.timedelta(days=1))


def format_date(value: str | None, date_format: str, tz: str = "UTC") -> str | None:
    """Render a stored date string as a calendar date in the display timezone.

    Args:
        value (str | None): Stored ISO date or timestamp.
        date_format (str): `strftime` pattern for the output.
        tz (str): IANA timezone name used to pick the calendar day.

    Returns:
        str | None: The formatted date, or `None` when `value` cannot be parsed.

    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.astimezone(ZoneInfo(tz)).strftime(date_format)
