"""Timeline loading with config discovery."""

from __future__ import annotations

from pathlib import Path

from . import context
from .config import DEFAULT_CONFIG_NAME, AoelineConfig, load_config
from .parser import TimelineDocument, TimelineParser


def discover_config(
    document_path: Path | str,
    config_path: Path | None = None,
) -> AoelineConfig | None:
    """Find and load the config file, if there is one.

    Search order:
    1. Explicit config_path argument
    2. Global context (set via CLI --config)
    3. Document directory / aoeline_config.yaml
    4. Current directory / aoeline_config.yaml
    """
    if config_path and config_path.exists():
        return load_config(config_path)

    ctx_config = context.get_config_path()
    if ctx_config and ctx_config.exists():
        return load_config(ctx_config)

    dir_config = Path(document_path).parent / DEFAULT_CONFIG_NAME
    if dir_config.exists():
        return load_config(dir_config)

    cwd_config = Path(DEFAULT_CONFIG_NAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return None


def load_timeline(
    path: Path | str,
    config_path: Path | None = None,
    *,
    config: AoelineConfig | None = None,
) -> tuple[TimelineDocument, AoelineConfig]:
    """Load a timeline document and the config that applies to it.

    Returns the parsed document together with the effective config (defaults
    when no config file was found).
    """
    if config is None:
        config = discover_config(path, config_path) or AoelineConfig()

    document = TimelineParser().parse_file(path, config=config)
    return document, config
