"""Vertical stacking levels that keep milestone cards from colliding."""

from __future__ import annotations

from collections.abc import Sequence

DEFAULT_MAX_LEVELS = 4
DEFAULT_CARD_HALF_WIDTH = 130.0

Interval = tuple[float, float]


def overlaps(first: Interval, second: Interval) -> bool:
    """Whether two [start, end) intervals overlap. Touching ends do not."""
    return not (first[1] <= second[0] or first[0] >= second[1])


def assign_levels(
    positions: Sequence[float],
    half_width: float = DEFAULT_CARD_HALF_WIDTH,
    max_levels: int = DEFAULT_MAX_LEVELS,
) -> list[int]:
    """Assign each label the first level where it fits, in the given order.

    Greedy first-fit interval coloring with a bounded palette. A label that
    fits nowhere goes on the last level and overlaps there. The result is
    recomputed from scratch each call; it is stable but not guaranteed to use
    the fewest levels.
    """
    if max_levels < 1:
        max_levels = 1

    occupied: list[list[Interval]] = [[] for _ in range(max_levels)]
    levels: list[int] = []

    for position in positions:
        card = (position - half_width, position + half_width)

        chosen = max_levels - 1
        for level, placed in enumerate(occupied):
            if not any(overlaps(card, other) for other in placed):
                chosen = level
                break

        occupied[chosen].append(card)
        levels.append(chosen)

    return levels
