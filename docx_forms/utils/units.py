"""Unit conversion helpers for WordprocessingML measurements."""
from __future__ import annotations

HALF_POINTS_PER_POINT = 2
EIGHTHS_PER_POINT = 8
FIFTIETHS_PER_PERCENT = 50


def points_to_half_points(value: float) -> int:
    """Font sizes (``w:sz``) are expressed in half-points."""
    return int(round(value * HALF_POINTS_PER_POINT))


def points_to_eighths(value: float) -> int:
    """Border widths are expressed in eighths of a point."""
    return max(1, int(round(value * EIGHTHS_PER_POINT)))


def percent_to_fiftieths(value: float) -> int:
    """Convert a percentage into the ``pct`` unit (fiftieths of a percent)."""
    return int(round(value * FIFTIETHS_PER_PERCENT))


def percent_of(total: int, value: float) -> int:
    """Return ``value`` percent of ``total`` rounded to a whole unit."""
    return int(round(total * value / 100))
