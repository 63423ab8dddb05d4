"""Pydantic schemas for timeline documents (JSON or YAML)."""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .datemath import parse_date


def _coerce_date(v: Any) -> dt.date | None:
    if v is None:
        return None
    parsed = parse_date(v if isinstance(v, dt.date) else str(v))
    if parsed is None:
        raise ValueError(f'invalid date format: "{v}"')
    return parsed


class _DocumentModel(BaseModel):
    # Documents use camelCase keys; snake_case is accepted too
    model_config = ConfigDict(populate_by_name=True)


class TimePointSchema(_DocumentModel):
    """Schema for a single milestone."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    date: dt.date

    @field_validator("date", mode="before")
    @classmethod
    def parse_day(cls, v: Any) -> dt.date | None:
        """YAML hands over date objects, JSON hands over strings."""
        return _coerce_date(v)


class ConferenceSchema(_DocumentModel):
    """Explicit deadline node for a program."""

    name: str | None = None
    date: dt.date | None = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_day(cls, v: Any) -> dt.date | None:
        return _coerce_date(v)


class ProgramSchema(_DocumentModel):
    """Schema for one program track."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    color: str | None = None
    time_points: list[TimePointSchema] = Field(alias="timePoints", min_length=1)
    conference: ConferenceSchema | None = None

    @field_validator("color", mode="before")
    @classmethod
    def normalize_color(cls, v: Any) -> str | None:
        """Accept ``#rrggbb`` as well as ``rrggbb``."""
        if v is None:
            return None
        return str(v).lstrip("#")


class TimelineDocumentSchema(_DocumentModel):
    """Schema for the whole document.

    Programs are kept raw so each one can be validated separately and errors
    can name the program they came from.
    """

    programs: list[dict[str, Any]] = Field(min_length=1)
    ddl_gap_days: int | None = Field(default=None, alias="ddlGapDays", ge=0)
    today: dt.date | None = None
    conference_date: dt.date | None = Field(default=None, alias="conferenceDate")

    @field_validator("today", "conference_date", mode="before")
    @classmethod
    def parse_day(cls, v: Any) -> dt.date | None:
        return _coerce_date(v)
