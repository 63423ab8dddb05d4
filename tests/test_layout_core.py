"""Tests for a full layout pass over a program."""

from datetime import date

import pytest

from aoeline.layout import layout_program
from aoeline.models import Geometry

from tests.conftest import TODAY, make_program


class TestLayoutProgram:
    """Positions, levels and labels for a program row."""

    def test_positions_and_levels(self) -> None:
        layout = layout_program(make_program(), TODAY, Geometry())

        positions = [p.position for p in layout.placements]
        assert positions == pytest.approx([100 + 4 * 770 / 30, 100 + 10 * 770 / 30, 100 + 19 * 770 / 30])
        assert [p.level for p in layout.placements] == [0, 1, 0]
        assert layout.levels() == {"t1": 0, "t2": 1, "t3": 0}

    def test_window_built_from_today_deadline_and_geometry(self) -> None:
        geometry = Geometry(container_width=600, start_offset=80, end_offset=80, padding=20)
        layout = layout_program(make_program(), TODAY, geometry)

        assert layout.window.today == TODAY
        assert layout.window.deadline == date(2026, 1, 31)
        assert layout.window.geometry == geometry
        assert layout.axis.today_pos == 80

    def test_neighbor_dates_carried(self) -> None:
        layout = layout_program(make_program(), TODAY)
        middle = layout.placement("t2")
        assert middle is not None
        assert middle.prev_date == date(2026, 1, 5)
        assert middle.next_date == date(2026, 1, 20)

    def test_gap_labels_under_later_node(self) -> None:
        layout = layout_program(make_program(), TODAY)

        assert [(g.after_id, g.days) for g in layout.gap_labels] == [("t2", 6), ("t3", 9)]
        assert layout.gap_labels[0].position == layout.placements[1].position

    def test_deadline_node(self) -> None:
        layout = layout_program(make_program(), TODAY)

        deadline = layout.deadline_placement
        assert deadline is not None
        assert deadline.id == "p1-conference"
        assert deadline.can_drag is False
        assert deadline.level == 0
        assert deadline.position == pytest.approx(layout.axis.deadline_pos)
        assert layout.placement("p1-conference") is deadline

    def test_line_segments(self) -> None:
        layout = layout_program(make_program(), TODAY)

        assert layout.main_line is not None
        assert layout.gray_line is not None
        assert layout.main_line.start == layout.axis.today_pos
        assert layout.main_line.end == pytest.approx(layout.placements[-1].position)
        assert layout.gray_line.end == pytest.approx(layout.axis.deadline_pos)
        assert layout.gray_line.width == pytest.approx(11 * 770 / 30)

    def test_regular_nodes_draggable_unless_locked(self) -> None:
        assert all(p.can_drag for p in layout_program(make_program(), TODAY).placements)
        locked = layout_program(make_program(), TODAY, locked=True)
        assert not any(p.can_drag for p in locked.placements)

    def test_program_without_deadline(self) -> None:
        layout = layout_program(make_program(deadline=None), TODAY)

        assert layout.deadline_placement is None
        assert layout.gray_line is None
        assert layout.axis.total_days == 1
        assert not any(p.can_drag for p in layout.placements)

    def test_program_without_time_points(self) -> None:
        layout = layout_program(make_program(dates=()), TODAY)

        assert layout.placements == []
        assert layout.gap_labels == []
        assert layout.main_line is None
        assert layout.deadline_placement is not None
        assert layout.axis.deadline_pos == pytest.approx(870)

    def test_recomputed_from_current_records(self) -> None:
        """Layout is a pure function of the program: a changed date moves the node."""
        program = make_program()
        before = layout_program(program, TODAY).placement("t2")
        moved = program.replace_time_point(program.time_points[1].with_date(date(2026, 1, 12)))
        after = layout_program(moved, TODAY).placement("t2")

        assert before is not None and after is not None
        assert after.position - before.position == pytest.approx(770 / 30)

    def test_max_levels_from_caller(self) -> None:
        program = make_program(dates=(date(2026, 1, 10),) * 4)
        layout = layout_program(program, TODAY, max_levels=2)
        assert [p.level for p in layout.placements] == [0, 1, 1, 1]
