from __future__ import annotations

import math

TWO_PI = 2.0 * math.pi


def wrap_angle(a: float) -> float:
    """Wrap an angle in radians to (-pi, pi]."""
    return math.pi - ((math.pi - a) % TWO_PI)


def clamp_float(x: float, lo: float, hi: float) -> float:
    """Clamp a Python float to [lo, hi]."""
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def bearing(x0: float, y0: float, x1: float, y1: float) -> float:
    """Direction of the vector from (x0, y0) to (x1, y1), atan2 convention."""
    return math.atan2(y1 - y0, x1 - x0)


def smoothstep(t: float) -> float:
    return t * t * (3.0 - 2.0 * t)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t
