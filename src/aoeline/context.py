"""Process-wide CLI state shared between the typer callback and commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class _CliState:
    config_path: Path | None = None
    password: str | None = None


_state = _CliState()


def get_config_path() -> Path | None:
    """Config file given with --config, if any."""
    return _state.config_path


def set_config_path(path: Path | None) -> None:
    _state.config_path = path


def get_password() -> str | None:
    """Password given with --password, if any."""
    return _state.password


def set_password(password: str | None) -> None:
    _state.password = password


def reset() -> None:
    """Forget everything set by the CLI callback (used by tests)."""
    _state.config_path = None
    _state.password = None
