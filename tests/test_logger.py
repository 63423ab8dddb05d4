"""Tests for log output at different verbosity levels."""

from datetime import date
from io import StringIO

from aoeline.board import TimelineBoard
from aoeline.layout import clamp, layout_program
from aoeline.logger import checks_enabled, debug_enabled, reset_logger, setup_logger

from tests.conftest import DEADLINE, TODAY, make_program


def _edit_and_layout() -> None:
    board = TimelineBoard([make_program()], today=TODAY)
    board.update_time_point_date("p1", "t2", date(2026, 1, 12))
    clamp(date(2025, 12, 1), TODAY, DEADLINE)
    layout_program(make_program(), TODAY)


def test_verbosity_0_silent():
    """Nothing is printed by default."""
    output_stream = StringIO()
    setup_logger(0, stream=output_stream)

    try:
        _edit_and_layout()
        output = output_stream.getvalue()
    finally:
        reset_logger()

    assert output == ""


def test_verbosity_1_shows_changes():
    """Committed edits are printed, clamp decisions are not."""
    output_stream = StringIO()
    setup_logger(1, stream=output_stream)

    try:
        _edit_and_layout()
        output = output_stream.getvalue()
    finally:
        reset_logger()

    assert "Paper A / Milestone 2: 2026-01-11 -> 2026-01-12" in output
    assert "Clamped" not in output
    assert "Layout p1" not in output


def test_verbosity_2_shows_checks():
    """Clamp decisions are printed with the window that caused them."""
    output_stream = StringIO()
    setup_logger(2, stream=output_stream)

    try:
        _edit_and_layout()
        assert checks_enabled()
        assert not debug_enabled()
        output = output_stream.getvalue()
    finally:
        reset_logger()

    assert "Clamped 2025-12-01 -> 2026-01-01" in output
    assert "Layout p1" not in output


def test_verbosity_3_shows_layout_numbers():
    """Debug output includes the scale of each layout pass."""
    output_stream = StringIO()
    setup_logger(3, stream=output_stream)

    try:
        _edit_and_layout()
        assert debug_enabled()
        output = output_stream.getvalue()
    finally:
        reset_logger()

    assert "Layout p1: 2026-01-01..2026-01-31, 30 days at 25.67 px/day" in output


def test_lock_is_logged():
    output_stream = StringIO()
    setup_logger(1, stream=output_stream)

    try:
        board = TimelineBoard([make_program()], today=TODAY)
        board.lock()
        board.update_time_point_date("p1", "t1", date(2026, 1, 6))
        board.unlock()
        output = output_stream.getvalue()
    finally:
        reset_logger()

    assert output.splitlines() == ["Timeline locked", "Timeline unlocked"]
