"""Application state: the programs being edited and the shared anchors."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date

from .config import AoelineConfig
from .datemath import format_date
from .exceptions import UnknownEntityError
from .interaction import DragInteractionController, EditContext
from .layout import ProgramLayout, compute_layout, layout_program, neighbor_dates
from .logger import get_logger
from .models import Geometry, Program

logger = get_logger()

ChangeListener = Callable[[str, str, date], None]


class TimelineBoard:
    """Owns program records and applies committed edits.

    Layout is never cached: ``layout`` recomputes from the current records
    each time it is called. Edits replace records instead of mutating them.
    While the board is locked every edit is ignored.
    """

    def __init__(
        self,
        programs: Iterable[Program],
        *,
        today: date | None = None,
        config: AoelineConfig | None = None,
        container_width: float | None = None,
        viewport_width: float | None = None,
    ) -> None:
        self.config = config or AoelineConfig()
        self.today = today or self.config.today or date.today()  # noqa: DTZ011
        self.locked = False
        self._programs: list[Program] = list(programs)
        self._listeners: list[ChangeListener] = []
        self.container_width = (
            container_width if container_width is not None else self.config.layout.container_width
        )
        self.viewport_width = viewport_width

    @property
    def programs(self) -> list[Program]:
        return list(self._programs)

    @property
    def geometry(self) -> Geometry:
        return self.config.select_geometry(self.viewport_width, self.container_width)

    def get_program(self, program_id: str) -> Program:
        for program in self._programs:
            if program.id == program_id:
                return program
        raise UnknownEntityError(f"Unknown program: {program_id}")

    def resize(self, container_width: float, viewport_width: float | None = None) -> None:
        self.container_width = container_width
        self.viewport_width = viewport_width

    def layout(self, program_id: str) -> ProgramLayout:
        return self._layout(self.get_program(program_id))

    def layouts(self) -> list[ProgramLayout]:
        """Lay out every program, in document order."""
        return [self._layout(program) for program in self._programs]

    def _layout(self, program: Program) -> ProgramLayout:
        return layout_program(
            program,
            self.today,
            self.geometry,
            locked=self.locked,
            card_half_width=self.config.layout.card_half_width,
            max_levels=self.config.layout.max_levels,
        )

    def _pixels_per_day(self, program: Program) -> float:
        deadline = program.deadline if program.deadline is not None else self.today
        return compute_layout(self.today, deadline, [], self.geometry).pixels_per_day

    def lock(self) -> None:
        self.locked = True
        logger.changes("Timeline locked")

    def unlock(self) -> None:
        self.locked = False
        logger.changes("Timeline unlocked")

    def restore(self, programs: Iterable[Program]) -> None:
        """Replace all records, e.g. after reloading the document."""
        self._programs = list(programs)
        logger.changes("Restored %d programs", len(self._programs))

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Call ``listener(program_id, time_point_id, new_date)`` on every commit.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def update_time_point_date(self, program_id: str, time_point_id: str, new_date: date) -> bool:
        """Commit a new date for a time point. Returns False if ignored."""
        if self.locked:
            logger.checks("Ignored change to %s/%s: timeline is locked", program_id, time_point_id)
            return False

        program = self.get_program(program_id)
        current = program.get_time_point(time_point_id)
        if current is None:
            raise UnknownEntityError(f"Unknown time point in {program_id}: {time_point_id}")
        if current.date == new_date:
            return False

        index = self._programs.index(program)
        self._programs[index] = program.replace_time_point(current.with_date(new_date))
        logger.changes(
            "%s / %s: %s -> %s",
            program.name,
            current.name,
            format_date(current.date),
            format_date(new_date),
        )

        for listener in list(self._listeners):
            listener(program_id, time_point_id, new_date)
        return True

    def edit_context(self, program_id: str, time_point_id: str) -> EditContext:
        """Current dates, neighbors and scale for one node."""
        program = self.get_program(program_id)

        if program.is_conference(time_point_id):
            assert program.conference is not None
            deadline = program.conference.date
            return EditContext(
                date=deadline,
                today=self.today,
                deadline=deadline,
                pixels_per_day=self._pixels_per_day(program),
                enabled=False,
            )

        index = program.index_of(time_point_id)
        if index < 0:
            raise UnknownEntityError(f"Unknown time point in {program_id}: {time_point_id}")

        prev_date, next_date = neighbor_dates(program.time_points, index)
        deadline = program.deadline
        return EditContext(
            date=program.time_points[index].date,
            today=self.today,
            deadline=deadline if deadline is not None else self.today,
            pixels_per_day=self._pixels_per_day(program),
            prev_date=prev_date,
            next_date=next_date,
            enabled=deadline is not None and not self.locked,
        )

    def controller(self, program_id: str, time_point_id: str) -> DragInteractionController:
        """Interaction controller wired to this board for one node."""
        # Fail fast on unknown IDs rather than on the first pointer event
        self.edit_context(program_id, time_point_id)

        return DragInteractionController(
            lambda: self.edit_context(program_id, time_point_id),
            lambda new_date: self.update_time_point_date(program_id, time_point_id, new_date),
            label=f"{program_id}/{time_point_id}",
        )
