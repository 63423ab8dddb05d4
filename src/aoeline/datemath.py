"""Calendar arithmetic shared by layout, constraints and countdowns.

Layout and ordering work on whole days: any time-of-day component is dropped
before comparing or subtracting. Countdown math is the exception and works on
instants, anchored to "Anywhere on Earth" (AoE, UTC-12).
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone

AOE = timezone(timedelta(hours=-12), "AoE")

# Midnight AoE on day D is 12:00 UTC on day D
AOE_MIDNIGHT_UTC_HOUR = 12

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


def truncate_day(value: date | datetime) -> date:
    """Drop the time-of-day component, keeping the calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Signed whole days from ``start`` to ``end`` (negative if end is earlier)."""
    return (truncate_day(end) - truncate_day(start)).days


def days_apart(first: date | datetime, second: date | datetime) -> int:
    """Unsigned whole days between two dates."""
    return abs(days_between(first, second))


def shift_days(value: date | datetime, days: int) -> date:
    return truncate_day(value) + timedelta(days=days)


def js_round(value: float) -> int:
    """Round half up, so +0.5 and -0.5 both move toward the future."""
    return math.floor(value + 0.5)


def parse_date(text: str | date | datetime | None) -> date | None:
    """Parse user or document input into a date.

    Accepts ``YYYY-MM-DD`` and ISO datetimes (the time is dropped). Returns
    None for empty or unparsable input instead of raising, so callers at an
    input boundary can simply ignore bad values.
    """
    if text is None:
        return None
    if isinstance(text, (date, datetime)):
        return truncate_day(text)

    text = text.strip()
    if not text:
        return None

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_date(value: date | datetime) -> str:
    """Serialize as YYYY-MM-DD."""
    return truncate_day(value).isoformat()


def aoe_target_instant(target: date | datetime) -> datetime:
    """The instant at which ``target`` begins in AoE (12:00 UTC that day)."""
    day = truncate_day(target)
    return datetime(
        day.year, day.month, day.day, AOE_MIDNIGHT_UTC_HOUR, tzinfo=timezone.utc
    )


def to_aoe(instant: datetime) -> datetime:
    """Express an instant in AoE. Naive datetimes are taken to be UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(AOE)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
