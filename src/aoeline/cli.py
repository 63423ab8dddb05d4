"""Command-line interface for Aoeline."""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Annotated

import typer

from . import context
from .auth import Authenticator
from .board import TimelineBoard
from .config import AoelineConfig
from .countdown import Countdown, CountdownScheduler
from .datemath import parse_date
from .exceptions import AoelineError
from .export import write_csv
from .loader import load_timeline
from .logger import setup_logger
from .parser import TimelineDocument
from .render import layout_to_dict, render_text
from .store import write_document

app = typer.Typer(
    name="aoeline",
    help="Deadline timelines with Anywhere-on-Earth countdowns and constrained milestone editing",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to config file (default: aoeline_config.yaml)"),
    ] = None,
    password: Annotated[
        str | None,
        typer.Option("--password", help="Access password for commands that change the timeline"),
    ] = None,
) -> None:
    """Global options for aoeline commands."""
    setup_logger(verbose)
    context.set_config_path(config)
    context.set_password(password)


def _parse_date_option(date_str: str | None, option_name: str) -> date | None:
    """Parse a YYYY-MM-DD CLI option, exiting with an error if malformed."""
    if date_str is None:
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        typer.echo(
            f"Error: Invalid {option_name} '{date_str}'. Use YYYY-MM-DD format.",
            err=True,
        )
        raise typer.Exit(1) from None


def _parse_instant_option(value: str | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    try:
        instant = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        typer.echo(f"Error: Invalid --now '{value}'. Use an ISO 8601 timestamp.", err=True)
        raise typer.Exit(1) from None
    return instant if instant.tzinfo else instant.replace(tzinfo=timezone.utc)


def _advancing_clock(
    start: datetime, monotonic: Callable[[], float] = time.monotonic
) -> Callable[[], datetime]:
    """A clock that reads ``start`` now and then moves forward in whole seconds."""
    origin = monotonic()
    return lambda: start + timedelta(seconds=int(monotonic() - origin))


def _load(file: Path) -> tuple[TimelineDocument, AoelineConfig]:
    try:
        return load_timeline(file)
    except (AoelineError, FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _build_board(
    file: Path,
    today: str | None,
    width: float | None = None,
    viewport: float | None = None,
) -> tuple[TimelineBoard, TimelineDocument]:
    document, config = _load(file)
    board = TimelineBoard(
        document.programs,
        today=_parse_date_option(today, "--today") or document.today,
        config=config,
        container_width=width,
        viewport_width=viewport,
    )
    return board, document


def _require_access(config: AoelineConfig) -> None:
    if not config.auth.enabled:
        return
    if not Authenticator().login(context.get_password()):
        typer.echo("Error: Wrong or missing --password", err=True)
        raise typer.Exit(1)


def _save(board: TimelineBoard, document: TimelineDocument, file: Path, output: Path | None) -> None:
    target = output or file
    write_document(
        target,
        board.programs,
        today=document.today,
        ddl_gap_days=document.ddl_gap_days,
    )
    typer.echo(f"Timeline written to {target}")


@app.command()
def layout(
    file: Annotated[Path, typer.Argument(help="Timeline document (JSON or YAML)")],
    *,
    today: Annotated[
        str | None, typer.Option("--today", help="Left anchor date (YYYY-MM-DD)")
    ] = None,
    width: Annotated[
        float | None, typer.Option("--width", help="Container width in pixels")
    ] = None,
    viewport: Annotated[
        float | None, typer.Option("--viewport", help="Viewport width used to pick offsets")
    ] = None,
    now: Annotated[
        str | None, typer.Option("--now", help="Current instant for countdowns (ISO 8601)")
    ] = None,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format (text or json)")
    ] = "text",
) -> None:
    """Compute positions, stacking levels and countdowns for every program."""
    if output_format not in ("text", "json"):
        typer.echo(f"Error: Invalid format '{output_format}'. Must be 'text' or 'json'.", err=True)
        raise typer.Exit(1)

    board, _ = _build_board(file, today, width, viewport)
    instant = _parse_instant_option(now)
    layouts = board.layouts()

    if output_format == "json":
        data = {
            "today": board.today.isoformat(),
            "programs": [layout_to_dict(item, instant) for item in layouts],
        }
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(render_text(layouts, instant))


@app.command()
def countdown(
    file: Annotated[Path, typer.Argument(help="Timeline document (JSON or YAML)")],
    *,
    now: Annotated[
        str | None, typer.Option("--now", help="Current instant (ISO 8601), default: now")
    ] = None,
    watch: Annotated[
        int, typer.Option("--watch", help="Keep ticking for this many seconds", min=0)
    ] = 0,
) -> None:
    """Show AoE countdowns for every milestone and deadline."""
    document, config = _load(file)
    instant = _parse_instant_option(now)
    scheduler = CountdownScheduler(interval=config.countdown.interval_seconds)
    if now is not None:
        scheduler.clock = _advancing_clock(instant)

    names: dict[str, str] = {}

    def show(key: str, value: Countdown) -> None:
        typer.echo(f"{names[key]:<40} {value.format()}")

    for program in document.programs:
        nodes = list(program.time_points)
        if program.conference is not None:
            nodes.append(program.conference)
        for node in nodes:
            key = f"{program.id}/{node.id}"
            names[key] = f"{program.name} - {node.name}"
            scheduler.mount(key, node.date, show)

    if watch:
        ticks = max(1, int(watch / config.countdown.interval_seconds))
        asyncio.run(scheduler.run(ticks=ticks))


@app.command()
def move(  # noqa: PLR0913 - CLI command needs multiple options
    file: Annotated[Path, typer.Argument(help="Timeline document (JSON or YAML)")],
    program_id: Annotated[str, typer.Argument(help="Program ID")],
    time_point_id: Annotated[str, typer.Argument(help="Time point ID")],
    new_date: Annotated[str, typer.Argument(help="Requested date (YYYY-MM-DD)")],
    *,
    today: Annotated[
        str | None, typer.Option("--today", help="Left anchor date (YYYY-MM-DD)")
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write here instead of FILE")
    ] = None,
) -> None:
    """Enter a date for a time point directly. The date is clamped to stay legal."""
    board, document = _build_board(file, today)
    _require_access(board.config)

    try:
        controller = board.controller(program_id, time_point_id)
    except AoelineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    if controller.begin_edit() is None:
        typer.echo(f"Error: {program_id}/{time_point_id} cannot be edited", err=True)
        raise typer.Exit(1)

    result = controller.submit_direct_date(new_date)
    if result is None:
        typer.echo(f"Error: Invalid date '{new_date}'. Use YYYY-MM-DD format.", err=True)
        raise typer.Exit(1)

    if result != parse_date(new_date):
        typer.echo(f"Clamped to {result.isoformat()}")
    _save(board, document, file, output)


@app.command(context_settings={"ignore_unknown_options": True})
def drag(  # noqa: PLR0913 - CLI command needs multiple options
    file: Annotated[Path, typer.Argument(help="Timeline document (JSON or YAML)")],
    program_id: Annotated[str, typer.Argument(help="Program ID")],
    time_point_id: Annotated[str, typer.Argument(help="Time point ID")],
    dx: Annotated[
        float, typer.Argument(help="Horizontal pointer movement in pixels, negative to go left")
    ],
    *,
    today: Annotated[
        str | None, typer.Option("--today", help="Left anchor date (YYYY-MM-DD)")
    ] = None,
    width: Annotated[
        float | None, typer.Option("--width", help="Container width in pixels")
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write here instead of FILE")
    ] = None,
) -> None:
    """Simulate dragging a time point by DX pixels."""
    board, document = _build_board(file, today, width)
    _require_access(board.config)

    try:
        controller = board.controller(program_id, time_point_id)
    except AoelineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    start = board.layout(program_id).placement(time_point_id)
    assert start is not None
    if not controller.begin_drag(start.position):
        typer.echo(f"Error: {program_id}/{time_point_id} cannot be dragged", err=True)
        raise typer.Exit(1)

    result = controller.update_drag(start.position + dx)
    controller.end_drag()

    typer.echo(f"{program_id}/{time_point_id}: {start.date.isoformat()} -> {result}")
    _save(board, document, file, output)


@app.command()
def export(
    file: Annotated[Path, typer.Argument(help="Timeline document (JSON or YAML)")],
    *,
    output: Annotated[Path, typer.Option("--output", "-o", help="CSV file to write")] = Path(
        "timeline_export.csv"
    ),
) -> None:
    """Export all milestones to a CSV spreadsheet."""
    document, _ = _load(file)
    count = write_csv(output, document.programs)
    typer.echo(f"Exported {count} rows to {output}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
