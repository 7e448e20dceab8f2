from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

import numpy as np

from raystream.protocols import Drawable2D


@dataclass(frozen=True, slots=True)
class Obstacle(Drawable2D):
    """Static cluster or line of repelling points.

    ``radius`` and ``strength`` override the simulator's trail defaults for
    this obstacle only; ``None`` means "use the trail values".
    """

    points: Any
    radius: float | None = None
    strength: float | None = None

    def __post_init__(self) -> None:
        pts = np.asarray(self.points, dtype=np.float64).reshape(-1, 2)
        object.__setattr__(self, "points", pts)

    def __len__(self) -> int:
        return int(self.points.shape[0])

    def polyline(self) -> Any:
        return self.points

    @classmethod
    def ring(
            cls,
            center: tuple[float, float],
            radius: float,
            count: int,
            **kwargs: Any,
    ) -> Obstacle:
        """Points evenly spaced on a circle around ``center``."""
        theta = np.arange(count, dtype=np.float64) * (2.0 * np.pi / max(count, 1))
        pts = np.stack(
            [center[0] + np.cos(theta) * radius, center[1] + np.sin(theta) * radius],
            axis=-1,
        )
        return cls(points=pts, **kwargs)

    @classmethod
    def line(
            cls,
            start: tuple[float, float],
            end: tuple[float, float],
            spacing: float,
            **kwargs: Any,
    ) -> Obstacle:
        """Points every ``spacing`` units from ``start`` up to and including ``end``."""
        if spacing <= 0.0:
            msg = "Obstacle line spacing must be positive"
            raise ValueError(msg)
        p0 = np.asarray(start, dtype=np.float64)
        p1 = np.asarray(end, dtype=np.float64)
        length = float(np.linalg.norm(p1 - p0))
        n = int(np.floor(length / spacing + 1e-9)) + 1
        t = np.arange(n, dtype=np.float64) * spacing / length if length > 0.0 else np.zeros(1)
        pts = p0[None, :] + t[:, None] * (p1 - p0)[None, :]
        return cls(points=pts, **kwargs)


def as_obstacles(items: Iterable[Any]) -> list[Obstacle]:
    """Accept obstacles or bare point sequences and return obstacles."""
    return [item if isinstance(item, Obstacle) else Obstacle(points=item) for item in items]
