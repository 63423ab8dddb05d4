"""Tests for clamping candidate dates."""

from datetime import date, datetime, timedelta

import pytest

from aoeline.layout import clamp, neighbor_dates

from tests.conftest import DEADLINE, TODAY, make_program


class TestClamp:
    """Window and neighbor bounds."""

    def test_legal_date_unchanged(self) -> None:
        assert clamp(date(2026, 1, 10), TODAY, DEADLINE) == date(2026, 1, 10)

    def test_before_today_moves_to_today(self) -> None:
        assert clamp(date(2025, 12, 1), TODAY, DEADLINE) == TODAY

    def test_after_deadline_moves_to_deadline(self) -> None:
        assert clamp(date(2026, 3, 1), TODAY, DEADLINE) == DEADLINE

    def test_cannot_cross_previous_neighbor(self) -> None:
        """Dragging to Jan 3 with the previous node on Jan 5 stops at Jan 5."""
        result = clamp(date(2026, 1, 3), TODAY, DEADLINE, prev_date=date(2026, 1, 5))
        assert result == date(2026, 1, 5)

    def test_cannot_cross_next_neighbor(self) -> None:
        result = clamp(date(2026, 1, 25), TODAY, DEADLINE, next_date=date(2026, 1, 20))
        assert result == date(2026, 1, 20)

    def test_same_day_as_neighbor_allowed(self) -> None:
        result = clamp(
            date(2026, 1, 5), TODAY, DEADLINE, prev_date=date(2026, 1, 5), next_date=date(2026, 1, 5)
        )
        assert result == date(2026, 1, 5)

    def test_time_of_day_is_dropped(self) -> None:
        assert clamp(datetime(2026, 1, 10, 18, 45), TODAY, DEADLINE) == date(2026, 1, 10)

    def test_neighbor_bounds_apply_after_window(self) -> None:
        """A neighbor before today still wins, because it is applied last."""
        result = clamp(date(2025, 12, 1), TODAY, DEADLINE, next_date=date(2025, 12, 20))
        assert result == date(2025, 12, 20)

    def test_conflicting_neighbors_last_bound_wins(self) -> None:
        result = clamp(
            date(2026, 1, 12), TODAY, DEADLINE, prev_date=date(2026, 1, 15), next_date=date(2026, 1, 10)
        )
        assert result == date(2026, 1, 10)


class TestClampProperties:
    """Idempotence and order preservation over a spread of inputs."""

    CANDIDATES = [TODAY + timedelta(days=n) for n in range(-10, 45, 4)]

    @pytest.mark.parametrize("candidate", CANDIDATES)
    @pytest.mark.parametrize(
        ("prev_date", "next_date"),
        [
            (None, None),
            (date(2026, 1, 5), None),
            (None, date(2026, 1, 20)),
            (date(2026, 1, 5), date(2026, 1, 20)),
            (date(2026, 1, 15), date(2026, 1, 10)),
        ],
    )
    def test_idempotent(self, candidate: date, prev_date: date | None, next_date: date | None) -> None:
        once = clamp(candidate, TODAY, DEADLINE, prev_date, next_date)
        assert clamp(once, TODAY, DEADLINE, prev_date, next_date) == once

    @pytest.mark.parametrize("candidate", CANDIDATES)
    def test_order_preserved_for_every_node(self, candidate: date) -> None:
        """Moving any node of an ordered program keeps the program ordered."""
        program = make_program()
        for index in range(len(program.time_points)):
            dates = [tp.date for tp in program.time_points]
            prev_date, next_date = neighbor_dates(program.time_points, index)
            dates[index] = clamp(candidate, TODAY, DEADLINE, prev_date, next_date)
            assert dates == sorted(dates)


class TestNeighborDates:
    def test_middle(self) -> None:
        program = make_program()
        assert neighbor_dates(program.time_points, 1) == (date(2026, 1, 5), date(2026, 1, 20))

    def test_ends(self) -> None:
        program = make_program()
        assert neighbor_dates(program.time_points, 0) == (None, date(2026, 1, 11))
        assert neighbor_dates(program.time_points, 2) == (date(2026, 1, 11), None)

    def test_single(self) -> None:
        program = make_program(dates=(date(2026, 1, 5),))
        assert neighbor_dates(program.time_points, 0) == (None, None)
