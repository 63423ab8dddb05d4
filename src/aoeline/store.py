"""Writing edited programs back out in the document shape they came in."""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from .datemath import format_date
from .models import Program
from .parser import TimelineDocument, TimelineParser

if TYPE_CHECKING:
    from .config import AoelineConfig


def dump_program(program: Program) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": program.id,
        "name": program.name,
        "color": program.color,
        "timePoints": [tp.to_dict() for tp in program.time_points],
    }
    if program.conference is not None:
        data["conference"] = {
            "name": program.conference.name,
            "date": format_date(program.conference.date),
        }
    return data


def dump_document(
    programs: Iterable[Program],
    *,
    today: date | None = None,
    ddl_gap_days: int | None = None,
) -> dict[str, Any]:
    """Serialize programs to plain data with YYYY-MM-DD dates.

    The result parses back into the same programs.
    """
    output: dict[str, Any] = {}
    if today is not None:
        output["today"] = format_date(today)
    if ddl_gap_days is not None:
        output["ddlGapDays"] = ddl_gap_days
    output["programs"] = [dump_program(program) for program in programs]
    return output


def write_document(
    path: Path,
    programs: Iterable[Program],
    *,
    today: date | None = None,
    ddl_gap_days: int | None = None,
) -> None:
    """Write programs to ``path``: JSON for ``.json`` files, YAML otherwise."""
    output = dump_document(programs, today=today, ddl_gap_days=ddl_gap_days)

    with path.open("w", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            json.dump(output, f, indent=2)
            f.write("\n")
        else:
            yaml.safe_dump(output, f, default_flow_style=False, sort_keys=False)


def read_document(path: Path, config: AoelineConfig | None = None) -> TimelineDocument:
    return TimelineParser().parse_file(path, config=config)
