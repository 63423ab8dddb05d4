"""Pytest configuration and fixtures for aoeline tests."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from aoeline import context
from aoeline.logger import reset_logger
from aoeline.models import Program, TimePoint

TODAY = date(2026, 1, 1)
DEADLINE = date(2026, 1, 31)


@pytest.fixture(autouse=True)
def clean_global_state() -> None:
    """Reset logger and CLI context between tests."""
    reset_logger()
    context.reset()


def make_program(
    program_id: str = "p1",
    dates: tuple[date, ...] = (date(2026, 1, 5), date(2026, 1, 11), date(2026, 1, 20)),
    deadline: date | None = DEADLINE,
    name: str = "Paper A",
) -> Program:
    """Build a program with time points t1..tN on the given dates."""
    return Program(
        id=program_id,
        name=name,
        color="3498db",
        time_points=[
            TimePoint(id=f"t{index + 1}", name=f"Milestone {index + 1}", date=d)
            for index, d in enumerate(dates)
        ],
        conference=(
            TimePoint(id=f"{program_id}-conference", name="Conference", date=deadline)
            if deadline is not None
            else None
        ),
    )


@pytest.fixture
def program() -> Program:
    return make_program()


def sample_document() -> dict[str, Any]:
    return {
        "today": "2026-01-01",
        "programs": [
            {
                "id": "p1",
                "name": "Paper A",
                "conference": {"date": "2026-01-31"},
                "timePoints": [
                    {"id": "t1", "name": "Abstract", "date": "2026-01-05"},
                    {"id": "t2", "name": "Full paper", "date": "2026-01-11"},
                    {"id": "t3", "name": "Camera ready", "date": "2026-01-20"},
                ],
            },
            {
                "id": "p2",
                "name": "Workshop B",
                "timePoints": [
                    {"id": "w1", "name": "Proposal", "date": "2026-01-10"},
                ],
            },
        ],
    }


@pytest.fixture
def document_path(tmp_path: Path) -> Path:
    """Sample document written as JSON in a fresh directory."""
    path = tmp_path / "timeline.json"
    path.write_text(json.dumps(sample_document()), encoding="utf-8")
    return path
