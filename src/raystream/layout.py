"""Perspective style layout: rays derived from a workspace name, and the
anchors where repeated text glyphs go along each smoothed ray.

Glyph measurement and drawing belong to the caller; ``measure`` maps a font
size to the advance width of the text at that size.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

from raystream.math_utils import clamp_float
from raystream.paths import point_along_path, smooth_path
from raystream.seed import derive_seed, seeded_random
from raystream.simulation import RayPoint, RaySimulator, SimulationConfig, SimulationResult

Measure = Callable[[float], float]


@dataclass(frozen=True, slots=True)
class GlyphAnchor:
    x: float
    y: float
    angle: float
    font_size: float
    opacity: float
    depth: float


@dataclass(frozen=True, slots=True)
class PerspectiveLayout:
    """Parameters of one perspective wallpaper.

    Coordinate convention:
    - canvas space, origin at a corner, both axes in pixels
    - the vanishing point sits at the canvas center
    """

    name: str
    width: float
    height: float
    seed: int
    ray_count: int
    base_angle: float

    FIRST_ANCHOR_DIST = 15.0
    ADVANCE_FACTOR = 0.7
    MIN_FONT_SIZE = 6.0

    @classmethod
    def from_name(cls, name: str, width: float, height: float) -> PerspectiveLayout:
        seed = derive_seed(name)
        return cls(
            name=name,
            width=float(width),
            height=float(height),
            seed=seed,
            ray_count=8 + seed % 4,
            base_angle=math.radians(seed % 360),
        )

    @property
    def vanishing_point(self) -> tuple[float, float]:
        return self.width / 2.0, self.height / 2.0

    @property
    def max_depth_dist(self) -> float:
        return math.hypot(self.width, self.height) / 2.0

    def simulate(self, config: SimulationConfig | None = None, smooth: bool = True) -> SimulationResult:
        paths = RaySimulator(config).simulate(
            self.ray_count,
            self.base_angle,
            self.vanishing_point,
            self.width,
            self.height,
            self.seed,
        )
        if smooth:
            return [smooth_path(p) for p in paths]
        return paths

    def pulse_phase(self, ray_index: int) -> float:
        return ray_index * 1.7 + (self.seed % 100) * 0.1 + seeded_random(self.name, ray_index)


def glyph_anchors(
        path: Sequence[RayPoint],
        measure: Measure,
        layout: PerspectiveLayout,
        ray_index: int = 0,
) -> Iterator[GlyphAnchor]:
    """Yield glyph anchors at increasing arc length along a smoothed path."""
    h = layout.height
    phase = layout.pulse_phase(ray_index)
    dist = layout.FIRST_ANCHOR_DIST

    while True:
        sample = point_along_path(path, dist)
        if sample is None:
            return

        depth = clamp_float(dist / layout.max_depth_dist, 0.0, 1.0) if layout.max_depth_dist > 0.0 else 1.0
        base_size = h * 0.008 + depth * h * 0.045
        pulse = math.sin(dist * 0.015 + phase) * 0.4 + 1.0
        font_size = max(layout.MIN_FONT_SIZE, base_size * pulse)

        yield GlyphAnchor(
            x=sample.x,
            y=sample.y,
            angle=sample.angle,
            font_size=font_size,
            opacity=0.03 + depth * 0.10,
            depth=depth,
        )

        advance = measure(font_size) * layout.ADVANCE_FACTOR
        if advance <= 0.0 or dist + advance == dist:
            return
        dist += advance
