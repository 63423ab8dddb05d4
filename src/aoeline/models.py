"""Data models for Aoeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .datemath import format_date

DEFAULT_CONFERENCE_NAME = "Conference"


@dataclass(frozen=True)
class TimePoint:
    """A single dated milestone.

    Frozen: edits produce a new record via ``with_date`` so the owner can swap
    it in, rather than the layout code mutating shared state.
    """

    id: str
    name: str
    date: date

    def with_date(self, new_date: date) -> TimePoint:
        return TimePoint(id=self.id, name=self.name, date=new_date)

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "date": format_date(self.date)}


def _default_time_points() -> list[TimePoint]:
    return []


@dataclass
class Program:
    """A named track of time points ending at a conference deadline.

    ``time_points`` are kept in the order they were given. They are expected
    to be chronological but are never re-sorted; edits go through the clamp
    so that order is preserved instead.
    """

    id: str
    name: str
    color: str
    time_points: list[TimePoint] = field(default_factory=_default_time_points)
    conference: TimePoint | None = None

    @property
    def deadline(self) -> date | None:
        """Right-hand anchor of the timeline."""
        return self.conference.date if self.conference else None

    def get_time_point(self, time_point_id: str) -> TimePoint | None:
        for time_point in self.time_points:
            if time_point.id == time_point_id:
                return time_point
        return None

    def index_of(self, time_point_id: str) -> int:
        """Position of a time point in the sequence, or -1."""
        for index, time_point in enumerate(self.time_points):
            if time_point.id == time_point_id:
                return index
        return -1

    def is_conference(self, time_point_id: str) -> bool:
        return self.conference is not None and self.conference.id == time_point_id

    def replace_time_point(self, updated: TimePoint) -> Program:
        """Return a copy of this program with one time point swapped out."""
        return Program(
            id=self.id,
            name=self.name,
            color=self.color,
            time_points=[updated if tp.id == updated.id else tp for tp in self.time_points],
            conference=self.conference,
        )


@dataclass(frozen=True)
class Geometry:
    """Horizontal rendering geometry, in pixels."""

    container_width: float = 1000.0
    start_offset: float = 100.0
    end_offset: float = 100.0
    padding: float = 30.0

    @property
    def available_width(self) -> float:
        return self.container_width - self.start_offset - self.end_offset - self.padding


@dataclass(frozen=True)
class TimelineWindow:
    """Left/right anchors plus geometry for one layout pass. Never persisted."""

    today: date
    deadline: date
    geometry: Geometry = field(default_factory=Geometry)
