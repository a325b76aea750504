"""Geometry and colour of the cost bars drawn behind cost cells."""

from __future__ import annotations

_MAX_HUE = 120
_MAX_ALPHA = 120
_SATURATION = 255
_VALUE = 255


def cost_fraction(cost: int, total_cost: int) -> float:
    """Share of ``total_cost`` taken by ``cost``, as a non-negative fraction.

    A zero cost has no bar and yields 0.0.
    """
    if cost == 0:
        return 0.0
    if total_cost == 0:
        raise ValueError("total cost must not be zero for a non-zero cost")
    return abs(cost / total_cost)


def bar_width(width: int, fraction: float) -> int:
    """Width in whole pixels of a bar filling ``fraction`` of ``width``."""
    return int(width * fraction)


def bar_color(fraction: float) -> tuple[int, int, int, int]:
    """HSV colour with alpha, ``(hue, saturation, value, alpha)``, for a bar.

    The hue runs from green at zero to red at the full cost, and the bar
    becomes more opaque as the fraction grows.
    """
    hue = int(_MAX_HUE - fraction * _MAX_HUE)
    alpha = int(-((fraction - 1) * (fraction - 1)) * _MAX_ALPHA + _MAX_ALPHA)
    return hue, _SATURATION, _VALUE, alpha