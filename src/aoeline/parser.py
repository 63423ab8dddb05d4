"""Parser for timeline documents.

Turns a JSON or YAML document into validated ``Program`` records with every
deadline resolved. The layout code downstream assumes this has happened and
never re-validates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .config import COLOR_POOL, DEFAULT_DDL_GAP_DAYS
from .datemath import shift_days
from .exceptions import ParseError, ValidationError
from .models import DEFAULT_CONFERENCE_NAME, Program, TimePoint
from .schemas import ProgramSchema, TimelineDocumentSchema

if TYPE_CHECKING:
    from .config import AoelineConfig


def _default_programs() -> list[Program]:
    return []


@dataclass
class TimelineDocument:
    """A parsed document: programs plus the document-level anchors."""

    programs: list[Program] = field(default_factory=_default_programs)
    today: date | None = None
    ddl_gap_days: int = DEFAULT_DDL_GAP_DAYS

    def get_program(self, program_id: str) -> Program | None:
        for program in self.programs:
            if program.id == program_id:
                return program
        return None


def _summarize(error: PydanticValidationError) -> str:
    """Flatten a pydantic error into ``field.path: message`` pairs."""
    parts: list[str] = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(parts)


def _program_label(raw: dict[str, Any], index: int) -> str:
    for key in ("name", "id"):
        value = raw.get(key)
        if isinstance(value, str) and value:
            return value
    return f"#{index + 1}"


def resolve_deadline(
    time_points: list[TimePoint],
    explicit: date | None,
    ddl_gap_days: int,
) -> date:
    """Deadline for a program: the explicit date, else latest milestone + gap."""
    if explicit is not None:
        return explicit
    latest = max(tp.date for tp in time_points)
    return shift_days(latest, ddl_gap_days)


class TimelineParser:
    """Parser for timeline documents.

    Handles reading and validation only. Config discovery lives in
    ``aoeline.loader``.
    """

    def parse_file(
        self, file_path: Path | str, config: AoelineConfig | None = None
    ) -> TimelineDocument:
        """Parse a JSON or YAML file into a TimelineDocument."""
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            with path.open(encoding="utf-8") as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ParseError(f"Failed to parse document: {e}") from e

        return self.parse_data(data, config)

    def parse_data(self, data: Any, config: AoelineConfig | None = None) -> TimelineDocument:
        """Validate already-loaded document data."""
        if not isinstance(data, dict):
            raise ValidationError("Invalid config file format: not a valid JSON object")
        if not isinstance(data.get("programs"), list):
            raise ValidationError("Invalid config file format: missing 'programs' array")
        if not data["programs"]:
            raise ValidationError("Invalid config file format: 'programs' array is empty")

        try:
            schema = TimelineDocumentSchema.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid config file format: {_summarize(e)}") from e

        ddl_gap_days = schema.ddl_gap_days
        if ddl_gap_days is None:
            ddl_gap_days = config.ddl_gap_days if config else DEFAULT_DDL_GAP_DAYS
        colors = config.colors if config else COLOR_POOL

        seen_ids: set[str] = set()
        programs: list[Program] = []
        for index, raw in enumerate(schema.programs):
            label = _program_label(raw, index)
            try:
                program_schema = ProgramSchema.model_validate(raw)
            except PydanticValidationError as e:
                raise ValidationError(f'Program "{label}" is invalid: {_summarize(e)}') from e

            if program_schema.id in seen_ids:
                raise ValidationError(f'Duplicate program id "{program_schema.id}"')
            seen_ids.add(program_schema.id)

            programs.append(
                self._build_program(
                    program_schema,
                    color=program_schema.color or colors[index % len(colors)],
                    default_deadline=schema.conference_date,
                    ddl_gap_days=ddl_gap_days,
                )
            )

        today = schema.today
        if today is None and config is not None:
            today = config.today

        return TimelineDocument(programs=programs, today=today, ddl_gap_days=ddl_gap_days)

    def _build_program(
        self,
        schema: ProgramSchema,
        *,
        color: str,
        default_deadline: date | None,
        ddl_gap_days: int,
    ) -> Program:
        time_points: list[TimePoint] = []
        seen: set[str] = set()
        for tp in schema.time_points:
            if tp.id in seen:
                raise ValidationError(f'Program "{schema.name}" has duplicate TimePoint id "{tp.id}"')
            seen.add(tp.id)
            time_points.append(TimePoint(id=tp.id, name=tp.name, date=tp.date))

        explicit = schema.conference.date if schema.conference else None
        conference_name = (
            schema.conference.name if schema.conference and schema.conference.name else None
        )
        deadline = resolve_deadline(
            time_points, explicit if explicit is not None else default_deadline, ddl_gap_days
        )

        return Program(
            id=schema.id,
            name=schema.name,
            color=color,
            time_points=time_points,
            conference=TimePoint(
                id=f"{schema.id}-conference",
                name=conference_name or DEFAULT_CONFERENCE_NAME,
                date=deadline,
            ),
        )
