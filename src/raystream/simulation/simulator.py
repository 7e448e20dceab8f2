from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import numpy as np

from raystream.geometry import Obstacle, as_obstacles
from raystream.math_utils import TWO_PI, wrap_angle
from raystream.noise import noise2d
from raystream.simulation.config import Path, RayPoint, SimulationConfig, SimulationResult

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _RayState:
    x: float
    y: float
    direction: float
    noise_offset_x: float
    noise_offset_y: float
    total_dist: float = 0.0
    alive: bool = True


class RaySimulator:
    """Mutually repelling rays fanning out from a vanishing point.

    Every step visits the live rays in ascending index order and mutates each
    one in place before moving on, so ray ``i`` sees rays ``j < i`` at their
    new position and rays ``j > i`` at the previous step's. Outputs depend on
    this order.
    """

    ANGLE_EPS: float = 1e-6
    DIST_EPS: float = 1e-9
    MAX_TRAIL_TURN: float = 0.15
    DECAY_RATE: float = 0.005
    TRAIL_CHUNK: int = 512

    def __init__(self, config: SimulationConfig | None = None) -> None:
        self.cfg = config if config is not None else SimulationConfig()

    @staticmethod
    def _noise_offsets(index: int, seed: int) -> tuple[float, float]:
        return index * 17.3 + float(seed % 200), index * 5.1 + float(seed % 300) * 0.7

    def _curvature_nudge(self, ray: _RayState) -> float:
        cfg = self.cfg
        n1 = noise2d(ray.total_dist * 0.001 + ray.noise_offset_x, ray.noise_offset_y)
        n2 = noise2d(ray.total_dist * 0.003 + ray.noise_offset_x + 500.0, ray.noise_offset_y + 500.0)
        return (n1 - 0.5) * cfg.noise_amplitude1 + (n2 - 0.5) * cfg.noise_amplitude2

    def _angular_push(self, i: int, rays: list[_RayState], vp: tuple[float, float]) -> float:
        cfg = self.cfg
        if cfg.angular_repulsion == 0.0:
            return 0.0
        ray = rays[i]
        threshold = cfg.repulsion_threshold
        dist_from_vp = math.hypot(ray.x - vp[0], ray.y - vp[1])
        decay = 1.0 / (1.0 + dist_from_vp * self.DECAY_RATE)

        push = 0.0
        for j, other in enumerate(rays):
            if j == i or not other.alive:
                continue
            diff = wrap_angle(ray.direction - other.direction)
            mag = abs(diff)
            if self.ANGLE_EPS < mag < threshold:
                push += math.copysign(
                    cfg.angular_repulsion * decay * (threshold - mag) / threshold,
                    diff,
                )
        return push

    def _field_vector(
            self,
            x: float,
            y: float,
            px: Any,
            py: Any,
            radius: Any,
            strength: Any,
    ) -> tuple[float, float]:
        """Summed repulsion from sample points, each pushing away from itself."""
        if px.size == 0:
            return 0.0, 0.0
        dx = x - px
        dy = y - py
        dist = np.hypot(dx, dy)
        near = (dist < radius) & (dist > self.DIST_EPS)
        if not bool(np.any(near)):
            return 0.0, 0.0
        dx = dx[near]
        dy = dy[near]
        dist = dist[near]
        r = radius[near] if np.ndim(radius) else radius
        s = strength[near] if np.ndim(strength) else strength
        w = s * (r - dist) / r / dist
        return float(np.sum(dx * w)), float(np.sum(dy * w))

    def _trail_push(
            self,
            i: int,
            ray: _RayState,
            trails: Any,
            lengths: Any,
            obstacle_field: tuple[Any, Any, Any, Any],
    ) -> float:
        cfg = self.cfg
        stride = cfg.trail_sample_stride

        others = np.flatnonzero(np.arange(lengths.shape[0]) != i)
        vx = vy = 0.0
        if others.size:
            longest = int(lengths[others].max())
            samples = trails[others, :longest:stride]  # (R-1, K, 2)
            idx = np.arange(samples.shape[1]) * stride
            valid = idx[None, :] < lengths[others][:, None]
            pts = samples[valid]
            tx, ty = self._field_vector(
                ray.x, ray.y, pts[:, 0], pts[:, 1], cfg.trail_radius, cfg.trail_strength,
            )
            vx += tx
            vy += ty

        ox, oy, orad, ostr = obstacle_field
        fx, fy = self._field_vector(ray.x, ray.y, ox, oy, orad, ostr)
        vx += fx
        vy += fy

        magnitude = math.hypot(vx, vy)
        if magnitude <= 0.0:
            return 0.0
        relative = wrap_angle(math.atan2(vy, vx) - ray.direction)
        return relative * min(magnitude, self.MAX_TRAIL_TURN)

    def _obstacle_field(self, obstacles: Sequence[Obstacle]) -> tuple[Any, Any, Any, Any]:
        cfg = self.cfg
        if not obstacles:
            empty = np.zeros(0, dtype=np.float64)
            return empty, empty, empty, empty
        pts = np.concatenate([o.points for o in obstacles], axis=0)
        radius = np.concatenate([
            np.full(len(o), cfg.trail_radius if o.radius is None else float(o.radius))
            for o in obstacles
        ])
        strength = np.concatenate([
            np.full(len(o), cfg.trail_strength if o.strength is None else float(o.strength))
            for o in obstacles
        ])
        return pts[:, 0], pts[:, 1], radius, strength

    def _grow(self, trails: Any) -> Any:
        """Double the per-ray trail capacity, capped at max_steps + 1."""
        capacity = min(trails.shape[1] * 2, self.cfg.max_steps + 1)
        grown = np.empty((trails.shape[0], capacity, 2), dtype=np.float64)
        grown[:, : trails.shape[1]] = trails
        return grown

    def _outside(self, ray: _RayState, width: float, height: float) -> bool:
        m = self.cfg.margin
        return ray.x < -m or ray.x > width + m or ray.y < -m or ray.y > height + m

    def simulate(
            self,
            ray_count: int,
            base_angle: float,
            vanishing_point: tuple[float, float],
            canvas_width: float,
            canvas_height: float,
            seed: int,
            obstacles: Iterable[Any] = (),
    ) -> SimulationResult:
        """Run the simulation to completion and return one path per ray."""
        if ray_count < 0:
            msg = f"ray_count must be non-negative, got {ray_count}"
            raise ValueError(msg)
        if ray_count == 0:
            return []

        cfg = self.cfg
        vp = (float(vanishing_point[0]), float(vanishing_point[1]))
        width = float(canvas_width)
        height = float(canvas_height)
        obstacle_field = self._obstacle_field(as_obstacles(obstacles))

        rays: list[_RayState] = []
        for i in range(ray_count):
            off_x, off_y = self._noise_offsets(i, seed)
            rays.append(_RayState(
                x=vp[0],
                y=vp[1],
                direction=base_angle + i * (TWO_PI / ray_count),
                noise_offset_x=off_x,
                noise_offset_y=off_y,
            ))

        paths: list[list[RayPoint]] = [
            [RayPoint(x=r.x, y=r.y, direction=r.direction, total_dist=0.0)] for r in rays
        ]
        trails = np.empty((ray_count, min(cfg.max_steps + 1, self.TRAIL_CHUNK), 2), dtype=np.float64)
        trails[:, 0, 0] = vp[0]
        trails[:, 0, 1] = vp[1]
        lengths = np.ones(ray_count, dtype=np.int64)

        steps = 0
        while steps < cfg.max_steps and any(r.alive for r in rays):
            for i, ray in enumerate(rays):
                if not ray.alive:
                    continue

                nudge = self._curvature_nudge(ray)
                push = self._angular_push(i, rays, vp)
                trail_push = self._trail_push(i, ray, trails, lengths, obstacle_field)

                ray.direction += nudge + push + trail_push
                ray.x += math.cos(ray.direction) * cfg.step_size
                ray.y += math.sin(ray.direction) * cfg.step_size
                ray.total_dist += cfg.step_size

                # the point that crosses the boundary is still recorded
                paths[i].append(RayPoint(x=ray.x, y=ray.y, direction=ray.direction, total_dist=ray.total_dist))
                n = lengths[i]
                if n == trails.shape[1]:
                    trails = self._grow(trails)
                trails[i, n, 0] = ray.x
                trails[i, n, 1] = ray.y
                lengths[i] = n + 1

                if self._outside(ray, width, height):
                    ray.alive = False
            steps += 1

        survivors = sum(1 for r in rays if r.alive)
        logger.debug(f"Simulated {ray_count} rays for {steps} steps, {survivors} still alive")
        return [tuple(p) for p in paths]


def simulate_rays(
        ray_count: int,
        base_angle: float,
        vanishing_point: tuple[float, float],
        canvas_width: float,
        canvas_height: float,
        seed: int,
        step_size: float = 3.0,
        max_steps: int = 2000,
        margin: float = 100.0,
        angular_repulsion: float = 0.06,
        repulsion_threshold: float = math.pi / 2.0,
        noise_amplitude1: float = 0.12,
        noise_amplitude2: float = 0.04,
        trail_radius: float = 80.0,
        trail_strength: float = 0.08,
        trail_sample_stride: int = 5,
        obstacles: Iterable[Any] = (),
) -> list[Path]:
    """Functional form of :meth:`RaySimulator.simulate` with inline tunables."""
    config = SimulationConfig(
        step_size=step_size,
        max_steps=max_steps,
        margin=margin,
        angular_repulsion=angular_repulsion,
        repulsion_threshold=repulsion_threshold,
        noise_amplitude1=noise_amplitude1,
        noise_amplitude2=noise_amplitude2,
        trail_radius=trail_radius,
        trail_strength=trail_strength,
        trail_sample_stride=trail_sample_stride,
    )
    return RaySimulator(config).simulate(
        ray_count,
        base_angle,
        vanishing_point,
        canvas_width,
        canvas_height,
        seed,
        obstacles=obstacles,
    )
