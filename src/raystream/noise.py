"""Deterministic 2D value noise.

Integer lattice points get hashed pseudo-random values; a query point is the
smoothstep-weighted bilinear blend of its four enclosing corners. The field
has period 256 on both axes.
"""
from __future__ import annotations

import math

from raystream.math_utils import lerp, smoothstep

MASK64 = (1 << 64) - 1
LATTICE_MASK = 255


def lattice_value(a: int, b: int) -> float:
    """Hash an integer lattice point to a value in [0, 1)."""
    h = (a * 374761393 + b * 668265263) & MASK64
    h = ((h ^ (h >> 13)) * 1274126177) & MASK64
    h ^= h >> 16
    return (h & 0xFFFF) / 65536.0


def noise2d(x: float, y: float) -> float:
    """Smooth value noise in [0, 1) for any real (x, y)."""
    fx = math.floor(x)
    fy = math.floor(y)
    xi = int(fx) & LATTICE_MASK
    yi = int(fy) & LATTICE_MASK
    xn = (xi + 1) & LATTICE_MASK
    yn = (yi + 1) & LATTICE_MASK

    u = smoothstep(x - fx)
    v = smoothstep(y - fy)

    n00 = lattice_value(xi, yi)
    n10 = lattice_value(xn, yi)
    n01 = lattice_value(xi, yn)
    n11 = lattice_value(xn, yn)

    nx0 = lerp(n00, n10, u)
    nx1 = lerp(n01, n11, u)
    return lerp(nx0, nx1, v)
