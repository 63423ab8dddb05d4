"""Configuration loader for layout geometry, defaults and access control.

Configuration lives in a single YAML file (aoeline_config.yaml). Every
section is optional.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigError
from .models import Geometry

DEFAULT_CONFIG_NAME = "aoeline_config.yaml"
DEFAULT_DDL_GAP_DAYS = 30

COLOR_POOL = [
    "e74c3c",
    "3498db",
    "2ecc71",
    "f39c12",
    "9b59b6",
    "1abc9c",
    "e67e22",
    "34495e",
]
CONFERENCE_COLOR = "000000"


class GeometryPreset(BaseModel):
    """Offsets used while the viewport is at most ``max_viewport`` wide.

    A preset without ``max_viewport`` applies to any width.
    """

    max_viewport: int | None = None
    start_offset: float = 100.0
    end_offset: float = 100.0
    padding: float = 30.0


def _default_presets() -> list[GeometryPreset]:
    return [
        GeometryPreset(max_viewport=480, start_offset=60, end_offset=60, padding=15),
        GeometryPreset(max_viewport=768, start_offset=80, end_offset=80, padding=20),
        GeometryPreset(),
    ]


class LayoutConfig(BaseModel):
    """Card and container sizing."""

    container_width: float = 1000.0
    card_half_width: float = 130.0
    max_levels: int = Field(default=4, ge=1)


class CountdownConfig(BaseModel):
    interval_seconds: float = Field(default=1.0, gt=0)


class AuthConfig(BaseModel):
    """Whether mutating commands require the access password."""

    enabled: bool = False


class AoelineConfig(BaseModel):
    """Top-level configuration."""

    geometry: list[GeometryPreset] = Field(default_factory=_default_presets)
    layout: LayoutConfig = LayoutConfig()
    countdown: CountdownConfig = CountdownConfig()
    auth: AuthConfig = AuthConfig()
    ddl_gap_days: int = Field(default=DEFAULT_DDL_GAP_DAYS, ge=0)
    today: date | None = None
    colors: list[str] = Field(default_factory=lambda: list(COLOR_POOL))

    @field_validator("colors", mode="before")
    @classmethod
    def strip_hash(cls, v: Any) -> list[str]:
        """Accept ``#rrggbb`` as well as ``rrggbb``."""
        if v is None:
            return list(COLOR_POOL)
        if not isinstance(v, list) or not v:
            raise ValueError("colors must be a non-empty list")
        return [str(item).lstrip("#") for item in v]  # type: ignore[misc]

    def select_geometry(
        self, viewport_width: float | None = None, container_width: float | None = None
    ) -> Geometry:
        """Pick offsets for the viewport and build the geometry for a pass.

        Presets are checked narrowest first. With no viewport width the
        container width is used for the lookup.
        """
        width = container_width if container_width is not None else self.layout.container_width
        viewport = viewport_width if viewport_width is not None else width

        bounded = sorted(
            (p for p in self.geometry if p.max_viewport is not None),
            key=lambda p: p.max_viewport or 0,
        )
        fallback = next((p for p in self.geometry if p.max_viewport is None), GeometryPreset())

        preset = next((p for p in bounded if viewport <= (p.max_viewport or 0)), fallback)
        return Geometry(
            container_width=width,
            start_offset=preset.start_offset,
            end_offset=preset.end_offset,
            padding=preset.padding,
        )

    def color_for(self, index: int) -> str:
        return self.colors[index % len(self.colors)]


def load_config(config_path: Path | str) -> AoelineConfig:
    """Load configuration from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is empty
        ConfigError: If a value is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open(encoding="utf-8") as f:
        try:
            data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config YAML: {e}") from e

    if not data:
        raise ValueError("Empty configuration file")
    if not isinstance(data, dict):
        raise ConfigError("Config must contain a mapping at the root level")

    try:
        return AoelineConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e
