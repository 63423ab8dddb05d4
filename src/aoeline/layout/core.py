"""One layout pass for a program: positions, stacking levels and labels."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..datemath import days_apart, format_date
from ..logger import debug_enabled, get_logger
from ..models import Geometry, Program, TimelineWindow
from .axis import AxisLayout, compute_layout
from .constraints import neighbor_dates
from .stacking import DEFAULT_CARD_HALF_WIDTH, DEFAULT_MAX_LEVELS, assign_levels

logger = get_logger()


@dataclass(frozen=True)
class Placement:
    """Where and how one time point is drawn."""

    id: str
    name: str
    date: date
    position: float
    level: int
    can_drag: bool
    prev_date: date | None = None
    next_date: date | None = None


@dataclass(frozen=True)
class GapLabel:
    """The "N days apart" label drawn under the later of two adjacent nodes."""

    after_id: str
    position: float
    days: int


@dataclass(frozen=True)
class Segment:
    start: float
    end: float

    @property
    def width(self) -> float:
        return self.end - self.start


def _default_placements() -> list[Placement]:
    return []


def _default_gap_labels() -> list[GapLabel]:
    return []


@dataclass(frozen=True)
class ProgramLayout:
    """Everything a renderer needs for one program row.

    Derived from the program and the window on every pass; never cached.
    """

    program_id: str
    program_name: str
    color: str
    window: TimelineWindow
    axis: AxisLayout
    placements: list[Placement] = field(default_factory=_default_placements)
    gap_labels: list[GapLabel] = field(default_factory=_default_gap_labels)
    deadline_placement: Placement | None = None
    main_line: Segment | None = None
    gray_line: Segment | None = None

    @property
    def pixels_per_day(self) -> float:
        return self.axis.pixels_per_day

    def placement(self, time_point_id: str) -> Placement | None:
        for placement in self.placements:
            if placement.id == time_point_id:
                return placement
        if self.deadline_placement and self.deadline_placement.id == time_point_id:
            return self.deadline_placement
        return None

    def levels(self) -> dict[str, int]:
        """Stacking assignment keyed by time point ID."""
        return {p.id: p.level for p in self.placements}


def layout_program(  # noqa: PLR0913 - layout knobs are keyword-only
    program: Program,
    today: date,
    geometry: Geometry | None = None,
    *,
    locked: bool = False,
    card_half_width: float = DEFAULT_CARD_HALF_WIDTH,
    max_levels: int = DEFAULT_MAX_LEVELS,
) -> ProgramLayout:
    """Lay out one program against the shared ``today`` anchor.

    A program without a deadline is laid out on a degenerate one-day window
    and none of its nodes can be dragged.
    """
    geometry = geometry or Geometry()
    deadline = program.deadline
    window = TimelineWindow(
        today=today, deadline=deadline if deadline is not None else today, geometry=geometry
    )

    time_points = program.time_points
    axis = compute_layout(window.today, window.deadline, [tp.date for tp in time_points], geometry)
    levels = assign_levels(axis.positions, card_half_width, max_levels)
    can_drag = deadline is not None and not locked

    placements: list[Placement] = []
    for index, time_point in enumerate(time_points):
        prev_date, next_date = neighbor_dates(time_points, index)
        placements.append(
            Placement(
                id=time_point.id,
                name=time_point.name,
                date=time_point.date,
                position=axis.positions[index],
                level=levels[index],
                can_drag=can_drag,
                prev_date=prev_date,
                next_date=next_date,
            )
        )

    gap_labels = [
        GapLabel(
            after_id=time_points[index + 1].id,
            position=axis.positions[index + 1],
            days=days_apart(time_points[index].date, time_points[index + 1].date),
        )
        for index in range(len(time_points) - 1)
    ]

    deadline_placement = None
    if program.conference is not None:
        deadline_placement = Placement(
            id=program.conference.id,
            name=program.conference.name,
            date=program.conference.date,
            position=axis.deadline_pos,
            level=0,
            can_drag=False,
        )

    main_line = None
    gray_line = None
    if axis.positions:
        last = axis.positions[-1]
        main_line = Segment(axis.today_pos, last)
        if program.conference is not None:
            gray_line = Segment(last, axis.deadline_pos)

    if debug_enabled():
        logger.debug(
            "Layout %s: %s..%s, %d days at %.2f px/day, levels %s",
            program.id,
            format_date(window.today),
            format_date(window.deadline),
            axis.total_days,
            axis.pixels_per_day,
            levels,
        )

    return ProgramLayout(
        program_id=program.id,
        program_name=program.name,
        color=program.color,
        window=window,
        axis=axis,
        placements=placements,
        gap_labels=gap_labels,
        deadline_placement=deadline_placement,
        main_line=main_line,
        gray_line=gray_line,
    )
