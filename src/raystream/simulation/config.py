from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Tuple


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Tunable force parameters of the ray simulation.

    step_size:
        Arc length advanced per step.
    max_steps:
        Hard bound on the number of simulation steps.
    margin:
        A ray dies once it leaves the canvas grown by this amount on every side.
    angular_repulsion:
        Strength of the heading push between live rays.
    repulsion_threshold:
        Heading difference (radians) below which two rays repel.
    noise_amplitude1, noise_amplitude2:
        Amplitudes of the broad and the fine curvature octaves.
    trail_radius, trail_strength:
        Reach and weight of the repulsion from recorded trails (and the
        default for obstacles that do not set their own).
    trail_sample_stride:
        Only every n-th trail point is considered.
    """

    step_size: float = 3.0
    max_steps: int = 2000
    margin: float = 100.0
    angular_repulsion: float = 0.06
    repulsion_threshold: float = math.pi / 2.0
    noise_amplitude1: float = 0.12
    noise_amplitude2: float = 0.04
    trail_radius: float = 80.0
    trail_strength: float = 0.08
    trail_sample_stride: int = 5

    def __post_init__(self) -> None:
        if not self.step_size > 0.0:
            msg = f"step_size must be positive, got {self.step_size}"
            raise ValueError(msg)
        if self.max_steps < 0:
            msg = f"max_steps must be non-negative, got {self.max_steps}"
            raise ValueError(msg)
        if self.trail_sample_stride < 1:
            msg = f"trail_sample_stride must be at least 1, got {self.trail_sample_stride}"
            raise ValueError(msg)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> SimulationConfig:
        """Build a config from a mapping of overrides, rejecting unknown keys."""
        if not isinstance(values, Mapping):
            msg = f"Simulation parameters must be a mapping, got {type(values).__name__}"
            raise ValueError(msg)
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(map(str, set(values) - set(known)))
        if unknown:
            msg = f"Unknown simulation parameters: {', '.join(unknown)}"
            raise ValueError(msg)
        kwargs: dict[str, Any] = {}
        for key, value in values.items():
            try:
                kwargs[key] = int(value) if known[key].type in ("int", int) else float(value)
            except (TypeError, ValueError) as e:
                msg = f"Invalid value for {key}: {value!r}"
                raise ValueError(msg) from e
        return cls(**kwargs)


@dataclass(frozen=True, slots=True)
class RayPoint:
    """One recorded sample of a ray: position, heading and arc length so far."""

    x: float
    y: float
    direction: float
    total_dist: float

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y


Path = Tuple[RayPoint, ...]
SimulationResult = List[Path]
