"""Pointer drag and direct date entry for a single time point.

The controller turns input into candidate dates, clamps them and publishes the
result. It never touches program records itself: it reads a fresh
``EditContext`` from its owner on every step and hands legal dates back
through ``publish``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from .datemath import format_date, js_round, parse_date, shift_days
from .layout.constraints import clamp
from .logger import get_logger

logger = get_logger()


class InteractionState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    EDITING = "editing"


@dataclass(frozen=True)
class EditContext:
    """What the controller needs to know about its node, as of right now."""

    date: date
    today: date
    deadline: date
    pixels_per_day: float
    prev_date: date | None = None
    next_date: date | None = None
    # False when the board is locked or the node is the deadline node
    enabled: bool = True


class DragInteractionController:
    """State machine for one node: Idle -> Dragging -> Idle, Idle -> Editing -> Idle.

    Drag math always measures from the pointer position and date captured in
    ``begin_drag``, so repeated small moves cannot accumulate rounding drift.
    Every call is synchronous and does no I/O; ``update_drag`` runs once per
    pointer-move event.
    """

    def __init__(
        self,
        context: Callable[[], EditContext],
        publish: Callable[[date], None],
        *,
        label: str = "",
    ) -> None:
        self._context = context
        self._publish = publish
        self.label = label
        self.state = InteractionState.IDLE
        self._start_x = 0.0
        self._start_date: date | None = None

    @property
    def enabled(self) -> bool:
        return self._context().enabled

    def begin_drag(self, pointer_x: float, current_date: date | None = None) -> bool:
        """Capture the starting pointer position and date.

        Returns False, staying idle, when the node cannot be dragged or
        another interaction is in progress.
        """
        if self.state is not InteractionState.IDLE:
            return False

        context = self._context()
        if not context.enabled:
            logger.checks("Drag ignored for %s: editing disabled", self.label)
            return False

        self._start_x = pointer_x
        self._start_date = current_date if current_date is not None else context.date
        self.state = InteractionState.DRAGGING
        return True

    def update_drag(self, pointer_x: float) -> date | None:
        """Propose the date under the pointer, clamped, and publish it."""
        if self.state is not InteractionState.DRAGGING or self._start_date is None:
            return None

        context = self._context()
        if not context.enabled:
            return None

        days_change = js_round((pointer_x - self._start_x) / context.pixels_per_day)
        candidate = shift_days(self._start_date, days_change)
        legal = clamp(
            candidate, context.today, context.deadline, context.prev_date, context.next_date
        )
        self._publish(legal)
        return legal

    def end_drag(self) -> None:
        """Release the pointer. Safe to call when not dragging."""
        if self.state is InteractionState.DRAGGING:
            self.state = InteractionState.IDLE
        self._start_date = None

    def begin_edit(self) -> str | None:
        """Enter direct-entry mode, returning the current date as YYYY-MM-DD."""
        if self.state is not InteractionState.IDLE:
            return None

        context = self._context()
        if not context.enabled:
            logger.checks("Edit ignored for %s: editing disabled", self.label)
            return None

        self.state = InteractionState.EDITING
        return format_date(context.date)

    def cancel_edit(self) -> None:
        if self.state is InteractionState.EDITING:
            self.state = InteractionState.IDLE

    def submit_direct_date(self, text: str) -> date | None:
        """Parse typed input, clamp it and publish it.

        Unparsable input is dropped without publishing anything. Either way
        an open edit is closed.
        """
        if self.state is InteractionState.DRAGGING:
            return None
        self.state = InteractionState.IDLE

        parsed = parse_date(text)
        if parsed is None:
            logger.checks("Rejected date input %r for %s", text, self.label)
            return None

        context = self._context()
        if not context.enabled:
            logger.checks("Edit ignored for %s: editing disabled", self.label)
            return None

        legal = clamp(parsed, context.today, context.deadline, context.prev_date, context.next_date)
        self._publish(legal)
        return legal
