"""Level computation.

Levels are a fixed step function of points: every 500 points is one level,
starting at level 1 with zero points.
"""

from __future__ import annotations

POINTS_PER_LEVEL = 500
LEVEL_BADGE_THRESHOLD = 20


def compute_level(points: int) -> int:
    """Level for a point total: floor(points / 500) + 1."""
    return points // POINTS_PER_LEVEL + 1


def level_details(level: int, points: int) -> dict:
    """Progress towards the next level for display.

    ``level_progress`` is the number of points earned inside the current level,
    ``points_to_next_level`` what is still missing to reach the next one.
    """
    current_level_points = (level - 1) * POINTS_PER_LEVEL
    next_level_points = level * POINTS_PER_LEVEL
    return {
        "level": level,
        "next_level": level + 1,
        "level_progress": points - current_level_points,
        "level_cap": POINTS_PER_LEVEL,
        "points_to_next_level": next_level_points - points,
        "total_points": points,
    }
