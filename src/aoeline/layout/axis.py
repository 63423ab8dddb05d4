"""Date-to-pixel mapping for a single timeline."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from ..datemath import days_between
from ..models import Geometry

# Adjacent days stay visually distinct even on narrow containers
MIN_PIXELS_PER_DAY = 2.0
MIN_TOTAL_DAYS = 1


def _default_positions() -> list[float]:
    return []


@dataclass(frozen=True)
class AxisLayout:
    """Result of mapping a window and a list of dates onto the x axis."""

    pixels_per_day: float
    today_pos: float
    deadline_pos: float
    total_days: int
    end_offset: float = 0.0
    positions: list[float] = field(default_factory=_default_positions)

    @property
    def timeline_width(self) -> float:
        return self.total_days * self.pixels_per_day

    @property
    def total_width(self) -> float:
        """Rendered width including both offsets.

        This can exceed the container width once the per-day floor kicks in,
        so renderers should size from here rather than from the container.
        """
        return self.deadline_pos + self.end_offset


def compute_layout(
    today: date,
    deadline: date,
    dates: Sequence[date],
    geometry: Geometry,
) -> AxisLayout:
    """Compute the pixel scale and positions for ``dates``.

    Never raises: a deadline on or before today collapses to a one-day scale,
    and a tiny or negative available width falls back to the per-day floor.
    Dates before today map left of the today anchor (not clamped here).
    """
    total_days = max(MIN_TOTAL_DAYS, days_between(today, deadline))
    pixels_per_day = max(MIN_PIXELS_PER_DAY, geometry.available_width / total_days)

    positions = [
        geometry.start_offset + days_between(today, d) * pixels_per_day for d in dates
    ]

    return AxisLayout(
        pixels_per_day=pixels_per_day,
        today_pos=geometry.start_offset,
        deadline_pos=geometry.start_offset + total_days * pixels_per_day,
        total_days=total_days,
        positions=positions,
        end_offset=geometry.end_offset,
    )
