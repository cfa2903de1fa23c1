# metrycs/core/ratios.py
"""Division and clamping helpers shared by the metrics and reporting features."""

import math
from typing import Union

Number = Union[int, float]


def safe_ratio(numerator: Number, denominator: Number, default: float = 0.0) -> float:
    """Return numerator / denominator, or `default` when the denominator is zero."""
    if not denominator:
        return default
    return numerator / denominator


def clamp(value: Number, lower: Number, upper: Number) -> Number:
    return max(lower, min(upper, value))


def clamp_unit(value: Number) -> float:
    """Clamp a rate into [0, 1]."""
    return float(clamp(value, 0.0, 1.0))


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
