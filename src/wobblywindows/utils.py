from __future__ import annotations

import math


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp an integer into [lower, upper]."""
    return min(max(value, lower), upper)

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves go up (no banker's rounding)."""
    return int(math.floor(value + 0.5))

def ease_out_cubic(progress: float) -> float:
    """Cubic ease-out: f(t) = 1 - (1 - t)^3."""
    return 1.0 - (1.0 - progress) ** 3
