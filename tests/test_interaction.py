"""Tests for the drag / direct-entry controller."""

from dataclasses import replace
from datetime import date

import pytest

from aoeline.interaction import DragInteractionController, EditContext, InteractionState

from tests.conftest import DEADLINE, TODAY


class Harness:
    """A node on Jan 10 between neighbors on Jan 5 and Jan 20, 10px per day."""

    def __init__(self) -> None:
        self.context = EditContext(
            date=date(2026, 1, 10),
            today=TODAY,
            deadline=DEADLINE,
            pixels_per_day=10.0,
            prev_date=date(2026, 1, 5),
            next_date=date(2026, 1, 20),
        )
        self.published: list[date] = []
        self.controller = DragInteractionController(
            lambda: self.context, self.publish, label="p1/t2"
        )

    def publish(self, new_date: date) -> None:
        self.published.append(new_date)
        # The owner commits the date, so the live context follows it
        self.context = replace(self.context, date=new_date)


@pytest.fixture
def harness() -> Harness:
    return Harness()


class TestDrag:
    """Pointer drag."""

    def test_drag_moves_by_whole_days(self, harness: Harness) -> None:
        assert harness.controller.begin_drag(100)
        assert harness.controller.state is InteractionState.DRAGGING

        assert harness.controller.update_drag(130) == date(2026, 1, 13)
        assert harness.published == [date(2026, 1, 13)]

    def test_drag_measures_from_captured_start(self, harness: Harness) -> None:
        """Small moves do not accumulate even though each one is published."""
        harness.controller.begin_drag(100)
        for x in (104, 108, 112, 116):
            harness.controller.update_drag(x)

        assert harness.published == [
            date(2026, 1, 10),
            date(2026, 1, 11),
            date(2026, 1, 11),
            date(2026, 1, 12),
        ]

    def test_half_day_rounds_toward_future(self, harness: Harness) -> None:
        harness.controller.begin_drag(100)
        assert harness.controller.update_drag(115) == date(2026, 1, 12)
        assert harness.controller.update_drag(85) == date(2026, 1, 9)

    def test_drag_clamped_to_previous_neighbor(self, harness: Harness) -> None:
        harness.controller.begin_drag(100)
        assert harness.controller.update_drag(40) == date(2026, 1, 5)

    def test_drag_clamped_to_next_neighbor(self, harness: Harness) -> None:
        harness.controller.begin_drag(100)
        assert harness.controller.update_drag(600) == date(2026, 1, 20)

    def test_end_drag_returns_to_idle(self, harness: Harness) -> None:
        harness.controller.begin_drag(100)
        harness.controller.end_drag()

        assert harness.controller.state is InteractionState.IDLE
        assert harness.controller.update_drag(200) is None
        assert harness.published == []

    def test_update_without_begin_is_ignored(self, harness: Harness) -> None:
        assert harness.controller.update_drag(200) is None

    def test_explicit_start_date(self, harness: Harness) -> None:
        harness.controller.begin_drag(0, date(2026, 1, 15))
        assert harness.controller.update_drag(10) == date(2026, 1, 16)

    def test_disabled_node_cannot_start(self, harness: Harness) -> None:
        harness.context = replace(harness.context, enabled=False)

        assert not harness.controller.begin_drag(100)
        assert harness.controller.state is InteractionState.IDLE

    def test_locking_mid_drag_stops_updates(self, harness: Harness) -> None:
        harness.controller.begin_drag(100)
        harness.context = replace(harness.context, enabled=False)

        assert harness.controller.update_drag(150) is None
        assert harness.published == []


class TestDirectEntry:
    """Typed dates."""

    def test_begin_edit_returns_current_value(self, harness: Harness) -> None:
        assert harness.controller.begin_edit() == "2026-01-10"
        assert harness.controller.state is InteractionState.EDITING

    def test_submit_publishes_clamped_date(self, harness: Harness) -> None:
        harness.controller.begin_edit()
        assert harness.controller.submit_direct_date("2026-01-03") == date(2026, 1, 5)
        assert harness.published == [date(2026, 1, 5)]
        assert harness.controller.state is InteractionState.IDLE

    def test_invalid_input_is_rejected(self, harness: Harness) -> None:
        harness.controller.begin_edit()
        assert harness.controller.submit_direct_date("next tuesday") is None
        assert harness.controller.submit_direct_date("") is None
        assert harness.published == []
        assert harness.controller.state is InteractionState.IDLE

    def test_cancel_edit(self, harness: Harness) -> None:
        harness.controller.begin_edit()
        harness.controller.cancel_edit()
        assert harness.controller.state is InteractionState.IDLE
        assert harness.published == []

    def test_disabled_node_cannot_be_edited(self, harness: Harness) -> None:
        harness.context = replace(harness.context, enabled=False)
        assert harness.controller.begin_edit() is None
        assert harness.controller.submit_direct_date("2026-01-12") is None
        assert harness.published == []


class TestStateMachine:
    """Dragging and editing never overlap."""

    def test_no_edit_while_dragging(self, harness: Harness) -> None:
        harness.controller.begin_drag(100)
        assert harness.controller.begin_edit() is None
        assert harness.controller.submit_direct_date("2026-01-12") is None
        assert harness.controller.state is InteractionState.DRAGGING

    def test_no_drag_while_editing(self, harness: Harness) -> None:
        harness.controller.begin_edit()
        assert not harness.controller.begin_drag(100)
        assert harness.controller.state is InteractionState.EDITING
