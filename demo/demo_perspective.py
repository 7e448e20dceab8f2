from __future__ import annotations

from raystream.layout import PerspectiveLayout, glyph_anchors
from raystream.simulation import SimulationConfig
from raystream.viz.plot2d import PathPlotter

# ============================================================
# TOP-LEVEL PARAMETERS (extract everything tweakable here)
# ============================================================

# Workspace
NAME = "Research"

# Canvas
WIDTH = 1920
HEIGHT = 1080

# Simulation tunables
STEP_SIZE = 3.0
MAX_STEPS = 2000
ANGULAR_REPULSION = 0.06
TRAIL_RADIUS = 80.0
TRAIL_STRENGTH = 0.08

# Rough advance width of the name per font-size unit
CHAR_ADVANCE = 0.62

# Output
OUTPUT_PATH = "/tmp/demo_perspective.png"


def main() -> None:
    layout = PerspectiveLayout.from_name(NAME, WIDTH, HEIGHT)
    config = SimulationConfig(
        step_size=STEP_SIZE,
        max_steps=MAX_STEPS,
        angular_repulsion=ANGULAR_REPULSION,
        trail_radius=TRAIL_RADIUS,
        trail_strength=TRAIL_STRENGTH,
    )
    paths = layout.simulate(config)

    def measure(font_size: float) -> float:
        return len(NAME) * font_size * CHAR_ADVANCE

    plotter = PathPlotter(WIDTH, HEIGHT, title=f"{NAME}: {layout.ray_count} rays")
    plotter.draw_paths(paths)
    plotter.draw_vanishing_point(*layout.vanishing_point)

    for idx, path in enumerate(paths):
        anchors = list(glyph_anchors(path, measure, layout, ray_index=idx))
        if anchors:
            plotter.ax.scatter(
                [a.x for a in anchors],
                [a.y for a in anchors],
                s=[a.font_size for a in anchors],
                color="white",
                alpha=0.5,
                zorder=6,
            )

    plotter.save(OUTPUT_PATH)
    print(f"Saved {OUTPUT_PATH}")


if __name__ == "__main__":
    main()
