"""Text and JSON renderings of layout passes, for the CLI."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from .countdown import tick
from .datemath import format_date
from .layout import Placement, ProgramLayout


def _placement_dict(placement: Placement, now: datetime) -> dict[str, Any]:
    countdown = tick(placement.date, now)
    return {
        "id": placement.id,
        "name": placement.name,
        "date": format_date(placement.date),
        "position": round(placement.position, 2),
        "level": placement.level,
        "can_drag": placement.can_drag,
        "countdown": countdown.format(),
    }


def layout_to_dict(layout: ProgramLayout, now: datetime) -> dict[str, Any]:
    """Plain-data view of one layout pass, with countdowns as of ``now``."""
    gap_by_id = {label.after_id: label.days for label in layout.gap_labels}
    points = []
    for placement in layout.placements:
        entry = _placement_dict(placement, now)
        if placement.id in gap_by_id:
            entry["days_since_previous"] = gap_by_id[placement.id]
        points.append(entry)

    return {
        "id": layout.program_id,
        "name": layout.program_name,
        "color": layout.color,
        "today": format_date(layout.window.today),
        "deadline": format_date(layout.window.deadline),
        "pixels_per_day": round(layout.pixels_per_day, 4),
        "today_pos": round(layout.axis.today_pos, 2),
        "deadline_pos": round(layout.axis.deadline_pos, 2),
        "total_width": round(layout.axis.total_width, 2),
        "time_points": points,
        "conference": (
            _placement_dict(layout.deadline_placement, now) if layout.deadline_placement else None
        ),
    }


def render_text(layouts: Sequence[ProgramLayout], now: datetime) -> str:
    """One block per program, one line per node, earliest first."""
    lines: list[str] = []
    for layout in layouts:
        lines.append(
            f"{layout.program_name} (#{layout.color})  "
            f"{format_date(layout.window.today)} .. {format_date(layout.window.deadline)}  "
            f"{layout.axis.total_days} days @ {layout.pixels_per_day:.2f} px/day"
        )
        lines.append(f"  Today       {format_date(layout.window.today)}  @ {layout.axis.today_pos:.1f}px")

        gap_by_id = {label.after_id: label.days for label in layout.gap_labels}
        for placement in layout.placements:
            if placement.id in gap_by_id:
                lines.append(f"      {gap_by_id[placement.id]} days apart")
            lines.append(_placement_line(f"[{placement.level}]", placement, now))

        if layout.deadline_placement is not None:
            lines.append(_placement_line("[D]", layout.deadline_placement, now))
        lines.append("")

    return "\n".join(lines).rstrip("\n")


def _placement_line(tag: str, placement: Placement, now: datetime) -> str:
    return (
        f"  {tag:<4}{format_date(placement.date)}  {placement.name:<20}"
        f"@ {placement.position:.1f}px  {tick(placement.date, now).format()}"
    )
