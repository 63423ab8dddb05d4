"""Flat spreadsheet export of every milestone across programs."""

from __future__ import annotations

import csv
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from .config import CONFERENCE_COLOR
from .datemath import format_date
from .models import Program, TimePoint

EXPORT_HEADER = ["DATE", "EVENT", "COLOR"]


@dataclass(frozen=True)
class ExportRow:
    date: date
    event: str
    color: str


def _latest_conference(programs: Sequence[Program]) -> TimePoint | None:
    latest: TimePoint | None = None
    for program in programs:
        if program.conference is None:
            continue
        if latest is None or program.conference.date > latest.date:
            latest = program.conference
    return latest


def export_rows(programs: Sequence[Program]) -> list[ExportRow]:
    """One row per milestone, grouped by program and dated within a program.

    A single conference row for the latest deadline across all programs
    closes the list.
    """
    rows: list[ExportRow] = []
    for program in programs:
        ordered = sorted(program.time_points, key=lambda tp: tp.date)
        rows.extend(
            ExportRow(date=tp.date, event=f"{program.name} - {tp.name}", color=program.color)
            for tp in ordered
        )

    conference = _latest_conference(programs)
    if conference is not None:
        rows.append(ExportRow(date=conference.date, event=conference.name, color=CONFERENCE_COLOR))

    return rows


def write_csv(path: Path, programs: Sequence[Program]) -> int:
    """Write the export to a CSV file. Returns the number of data rows.

    COLOR carries the program color each row is drawn in, as ``#rrggbb``.
    """
    rows = export_rows(programs)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(EXPORT_HEADER)
        for row in rows:
            writer.writerow([format_date(row.date), row.event, f"#{row.color}"])
    return len(rows)
