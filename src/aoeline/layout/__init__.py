"""Layout package - pure geometry for timeline rendering and editing.

- compute_layout: dates -> pixel positions under a per-day scale
- clamp: keep an edited date inside the window and between its neighbors
- assign_levels: vertical stacking so milestone cards do not collide
- layout_program: one full pass for a program row
"""

from .axis import MIN_PIXELS_PER_DAY, AxisLayout, compute_layout
from .constraints import clamp, neighbor_dates
from .core import GapLabel, Placement, ProgramLayout, Segment, layout_program
from .stacking import DEFAULT_CARD_HALF_WIDTH, DEFAULT_MAX_LEVELS, assign_levels, overlaps

__all__ = [
    "DEFAULT_CARD_HALF_WIDTH",
    "DEFAULT_MAX_LEVELS",
    "MIN_PIXELS_PER_DAY",
    "AxisLayout",
    "GapLabel",
    "Placement",
    "ProgramLayout",
    "Segment",
    "assign_levels",
    "clamp",
    "compute_layout",
    "layout_program",
    "neighbor_dates",
    "overlaps",
]
