"""Clamping of candidate dates to the window and to neighboring milestones."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime

from ..datemath import format_date, truncate_day
from ..logger import checks_enabled, get_logger
from ..models import TimePoint

logger = get_logger()


def clamp(
    candidate: date | datetime,
    today: date | datetime,
    deadline: date | datetime,
    prev_date: date | datetime | None = None,
    next_date: date | datetime | None = None,
) -> date:
    """Return the nearest legal date for a time point.

    Bounds apply in a fixed order: today, deadline, previous neighbor, next
    neighbor. Landing on the same day as a neighbor is allowed; crossing it is
    not. When the bounds contradict each other (for example the previous
    neighbor is after the next one) the last applicable bound wins and the
    result may violate an earlier one. Idempotent for consistent bounds.
    """
    value = truncate_day(candidate)
    original = value

    value = max(value, truncate_day(today))
    value = min(value, truncate_day(deadline))

    if prev_date is not None:
        value = max(value, truncate_day(prev_date))

    if next_date is not None:
        value = min(value, truncate_day(next_date))

    if value != original and checks_enabled():
        logger.checks(
            "Clamped %s -> %s (window %s..%s, neighbors %s..%s)",
            format_date(original),
            format_date(value),
            format_date(today),
            format_date(deadline),
            format_date(prev_date) if prev_date is not None else "-",
            format_date(next_date) if next_date is not None else "-",
        )

    return value


def neighbor_dates(
    time_points: Sequence[TimePoint], index: int
) -> tuple[date | None, date | None]:
    """Dates of the time points immediately before and after ``index``."""
    prev_date = time_points[index - 1].date if index > 0 else None
    next_date = time_points[index + 1].date if index < len(time_points) - 1 else None
    return prev_date, next_date
