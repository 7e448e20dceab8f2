"""Playground for ray simulation experiments.

Each scenario sets up a controlled simulation and renders a debug image of
the smoothed paths and obstacles.

Run:
  raystream-playground [scenario] [-o output-dir]
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Sequence

from raystream.geometry import Obstacle
from raystream.layout import PerspectiveLayout
from raystream.paths import smooth_path
from raystream.simulation import RaySimulator, SimulationConfig, SimulationResult
from raystream.utils import load_config, setup_logging

logger = logging.getLogger(__name__)

CANVAS_W = 1920.0
CANVAS_H = 1080.0


@dataclass(frozen=True, slots=True)
class ScenarioRun:
    title: str
    paths: SimulationResult
    vanishing_point: tuple[float, float]
    obstacles: List[Obstacle] = field(default_factory=list)
    width: float = CANVAS_W
    height: float = CANVAS_H


Scenario = Callable[[SimulationConfig, argparse.Namespace], ScenarioRun]


def scenario_point_magnet(config: SimulationConfig, args: argparse.Namespace) -> ScenarioRun:
    """Single ray aimed right, with a dense point cluster in its path."""
    vp = (CANVAS_W * 0.1, CANVAS_H / 2)
    magnet = Obstacle.ring((CANVAS_W * 0.5, CANVAS_H / 2), radius=5.0, count=20)
    paths = RaySimulator(replace(config, angular_repulsion=0.0)).simulate(
        1, 0.0, vp, CANVAS_W, CANVAS_H, 42, obstacles=[magnet],
    )
    return ScenarioRun("Point magnet: single ray deflected by obstacle", paths, vp, [magnet])


def scenario_wall(config: SimulationConfig, args: argparse.Namespace) -> ScenarioRun:
    """Single ray aimed at a vertical line of points."""
    vp = (CANVAS_W * 0.1, CANVAS_H / 2)
    wall_x = CANVAS_W * 0.6
    wall = Obstacle.line((wall_x, CANVAS_H * 0.1), (wall_x, CANVAS_H * 0.9), spacing=3.0)
    paths = RaySimulator(replace(config, angular_repulsion=0.0)).simulate(
        1, 0.0, vp, CANVAS_W, CANVAS_H, 42, obstacles=[wall],
    )
    return ScenarioRun("Wall: single ray meets vertical barrier", paths, vp, [wall])


def scenario_head_on(config: SimulationConfig, args: argparse.Namespace) -> ScenarioRun:
    """Two rays leaving the center in opposite directions."""
    vp = (CANVAS_W / 2, CANVAS_H / 2)
    paths = RaySimulator(config).simulate(2, 0.0, vp, CANVAS_W, CANVAS_H, 42)
    return ScenarioRun("Head-on: two rays in opposite directions", paths, vp)


def scenario_corridor(config: SimulationConfig, args: argparse.Namespace) -> ScenarioRun:
    """Single ray between two horizontal walls."""
    vp = (CANVAS_W * 0.1, CANVAS_H / 2)
    top = Obstacle.line((CANVAS_W * 0.3, CANVAS_H * 0.35), (CANVAS_W * 0.8, CANVAS_H * 0.35), spacing=3.0)
    bottom = Obstacle.line((CANVAS_W * 0.3, CANVAS_H * 0.65), (CANVAS_W * 0.8, CANVAS_H * 0.65), spacing=3.0)
    paths = RaySimulator(replace(config, angular_repulsion=0.0)).simulate(
        1, 0.0, vp, CANVAS_W, CANVAS_H, 42, obstacles=[top, bottom],
    )
    return ScenarioRun("Corridor: ray between two walls", paths, vp, [top, bottom])


def scenario_fan(config: SimulationConfig, args: argparse.Namespace) -> ScenarioRun:
    """Reference fan of ten rays from the center."""
    vp = (CANVAS_W / 2, CANVAS_H / 2)
    paths = RaySimulator(config).simulate(10, 0.3, vp, CANVAS_W, CANVAS_H, 7777)
    return ScenarioRun("Fan: 10 rays from center (reference)", paths, vp)


def scenario_obstacle_field(config: SimulationConfig, args: argparse.Namespace) -> ScenarioRun:
    """Eight rays navigating four small clusters."""
    vp = (CANVAS_W / 2, CANVAS_H / 2)
    centers = [(0.3, 0.3), (0.7, 0.4), (0.4, 0.7), (0.6, 0.6)]
    obstacles = [
        Obstacle.ring((CANVAS_W * cx, CANVAS_H * cy), radius=8.0, count=15) for cx, cy in centers
    ]
    paths = RaySimulator(config).simulate(8, 0.5, vp, CANVAS_W, CANVAS_H, 12345, obstacles=obstacles)
    return ScenarioRun("Obstacle field: rays navigating clusters", paths, vp, obstacles)


def scenario_name(config: SimulationConfig, args: argparse.Namespace) -> ScenarioRun:
    """Perspective layout of a workspace name."""
    layout = PerspectiveLayout.from_name(args.name, args.width, args.height)
    paths = layout.simulate(config, smooth=False)
    return ScenarioRun(
        f"Name: {args.name!r} ({layout.ray_count} rays)",
        paths,
        layout.vanishing_point,
        width=layout.width,
        height=layout.height,
    )


SCENARIOS: Dict[str, Scenario] = {
    "point-magnet": scenario_point_magnet,
    "wall": scenario_wall,
    "head-on": scenario_head_on,
    "corridor": scenario_corridor,
    "fan": scenario_fan,
    "obstacle-field": scenario_obstacle_field,
    "name": scenario_name,
}


def render_scenario(run: ScenarioRun, output_path: str) -> None:
    from raystream.viz.plot2d import PathPlotter

    plotter = PathPlotter(run.width, run.height, title=run.title)
    for obstacle in run.obstacles:
        plotter.draw_obstacle(obstacle)
    plotter.draw_paths([smooth_path(p) for p in run.paths])
    plotter.draw_vanishing_point(*run.vanishing_point)
    plotter.save(output_path)
    logger.info(f"  {run.title} -> {output_path}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="raystream-playground",
        description="Render debug images of ray simulation scenarios",
    )
    ap.add_argument("scenario", nargs="?", default="all", help="Scenario name or 'all' (default)")
    ap.add_argument("-o", "--output-dir", default="/tmp/playground", help="Directory for PNG output")
    ap.add_argument("--name", default="workspace", help="Workspace name for the 'name' scenario")
    ap.add_argument("--width", type=float, default=CANVAS_W)
    ap.add_argument("--height", type=float, default=CANVAS_H)
    ap.add_argument("--config", default=None, help="JSON file with 'simulation' and 'logging' sections")
    ap.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    ap.add_argument("--list", action="store_true", help="List scenarios and exit")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list:
        for key, fn in SCENARIOS.items():
            print(f"  {key:<16}{(fn.__doc__ or '').strip()}")
        return 0

    try:
        file_config = load_config(args.config) if args.config else {}
        sim_config = SimulationConfig.from_mapping(file_config.get("simulation", {}))
        setup_logging(file_config, level=args.log_level)
    except (OSError, ValueError) as e:
        print(f"Could not load config: {e}", file=sys.stderr)
        return 2

    if args.scenario == "all":
        selected = [key for key in SCENARIOS if key != "name"]
    elif args.scenario in SCENARIOS:
        selected = [args.scenario]
    else:
        print(f"Unknown scenario: {args.scenario}", file=sys.stderr)
        print(f"Available: {', '.join(SCENARIOS)}", file=sys.stderr)
        return 1

    os.makedirs(args.output_dir, exist_ok=True)
    logger.info(f"Playground -> {args.output_dir}/")
    for key in selected:
        run = SCENARIOS[key](sim_config, args)
        render_scenario(run, os.path.join(args.output_dir, f"{key}.png"))
    logger.info("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
