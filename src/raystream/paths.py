from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from raystream.math_utils import bearing
from raystream.simulation.config import Path, RayPoint


@dataclass(frozen=True, slots=True)
class PathSample:
    """Interpolated position and tangent angle at some arc length."""

    x: float
    y: float
    angle: float

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y


def smooth_path(path: Sequence[RayPoint], window_size: int = 7) -> Path:
    """Moving-average smoothing of a ray path.

    Positions are averaged over a centered window that shrinks at the path
    ends. The direction at ``i`` becomes the bearing from smoothed point
    ``i - 1`` to smoothed point ``i + 1``; the two end points keep their
    original direction. Arc lengths are copied unchanged.

    Paths no longer than the window are returned as they are.
    """
    n = len(path)
    if n <= window_size:
        return tuple(path)

    half = window_size // 2
    xs = [p.x for p in path]
    ys = [p.y for p in path]

    sx: list[float] = []
    sy: list[float] = []
    for i in range(n):
        lo = max(0, i - half)
        hi = min(n - 1, i + half)
        count = hi - lo + 1
        sx.append(sum(xs[lo:hi + 1]) / count)
        sy.append(sum(ys[lo:hi + 1]) / count)

    out: list[RayPoint] = []
    for i, p in enumerate(path):
        if 0 < i < n - 1:
            direction = bearing(sx[i - 1], sy[i - 1], sx[i + 1], sy[i + 1])
        else:
            direction = p.direction
        out.append(RayPoint(x=sx[i], y=sy[i], direction=direction, total_dist=p.total_dist))
    return tuple(out)


def point_along_path(path: Sequence[RayPoint], target_dist: float) -> PathSample | None:
    """Position and tangent at arc length ``target_dist``.

    Returns ``None`` for paths with fewer than two points and for distances
    outside ``[0, final total_dist]``; never extrapolates.
    """
    if len(path) < 2 or target_dist < path[0].total_dist:
        return None

    for a, b in zip(path, path[1:]):
        if b.total_dist >= target_dist:
            seg = b.total_dist - a.total_dist
            t = (target_dist - a.total_dist) / seg if seg > 0.0 else 0.0
            return PathSample(
                x=a.x + (b.x - a.x) * t,
                y=a.y + (b.y - a.y) * t,
                angle=bearing(a.x, a.y, b.x, b.y),
            )
    return None


def path_length(path: Sequence[RayPoint]) -> float:
    return path[-1].total_dist if path else 0.0


def path_to_array(path: Sequence[RayPoint]) -> np.ndarray:
    """(N, 4) array of x, y, direction, total_dist."""
    if not path:
        return np.zeros((0, 4), dtype=np.float64)
    return np.asarray([(p.x, p.y, p.direction, p.total_dist) for p in path], dtype=np.float64)
