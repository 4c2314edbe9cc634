"""Timestamp coercion and display formatting."""

from __future__ import annotations

from datetime import datetime

import pendulum

# Matches the DATETIME text form the store returns, e.g. 2026-02-02 22:21:29
DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_timestamp(value: str | datetime) -> datetime:
    """Coerce a stored timestamp into a datetime.

    Drivers normally hand back ``datetime`` objects, but some return the
    column text (``2026-02-02 22:21:29`` or ISO 8601 variants). Strings
    without a timezone are read as UTC.
    """
    if isinstance(value, datetime):
        return value

    parsed = pendulum.parse(value.strip(), tz="UTC", strict=False)
    if not isinstance(parsed, pendulum.DateTime):
        # pendulum.parse returns Date for date-only strings
        parsed = pendulum.datetime(
            parsed.year, parsed.month, parsed.day, tz="UTC"  # type: ignore[union-attr]
        )
    return parsed


def format_timestamp(dt: datetime) -> str:
    """Format a timestamp for display next to a post title."""
    return dt.strftime(DISPLAY_FORMAT)
