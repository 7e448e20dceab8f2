from __future__ import annotations

import os
from typing import TYPE_CHECKING, Sequence

import matplotlib as mpl

# Set backend before importing pyplot; rendering is file based, so Agg
# unless the environment asks for something else.
mpl.use(os.environ.get("RAYSTREAM_MPL_BACKEND", "").strip() or "Agg", force=True)

import matplotlib.pyplot as plt  # noqa: E402

from raystream.paths import path_to_array  # noqa: E402

if TYPE_CHECKING:
    from raystream.protocols import Drawable2D
    from raystream.simulation import RayPoint

RAY_COLORS: list[tuple[float, float, float]] = [
    (1.0, 0.4, 0.4),  # red
    (0.4, 1.0, 0.4),  # green
    (0.4, 0.4, 1.0),  # blue
    (1.0, 1.0, 0.4),  # yellow
    (1.0, 0.4, 1.0),  # magenta
    (0.4, 1.0, 1.0),  # cyan
    (1.0, 0.7, 0.3),  # orange
    (0.7, 0.3, 1.0),  # purple
    (0.3, 1.0, 0.7),  # mint
    (1.0, 0.5, 0.7),  # pink
    (0.6, 0.8, 0.3),  # lime
]

BACKGROUND = (0.08, 0.08, 0.1)


class PathPlotter:
    """Matplotlib debug view of ray paths on a canvas.

    Canvas coordinates have y growing downward, so the y axis is inverted.
    """

    DOT_EVERY: int = 50

    def __init__(self, width: float, height: float, title: str = "", dpi: int = 100) -> None:
        fig, ax = plt.subplots(figsize=(width / dpi, height / dpi), dpi=dpi)
        self.fig = fig
        self.ax = ax
        self.width = width
        self.height = height
        fig.patch.set_facecolor(BACKGROUND)
        ax.set_facecolor(BACKGROUND)
        ax.set_aspect("equal", "box")
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_axis_off()
        if title:
            ax.set_title(title, color=(1.0, 1.0, 1.0, 0.4), fontsize=10, loc="left")

    def draw_obstacle(self, drawable: Drawable2D) -> None:
        pts = drawable.polyline()
        if len(pts) == 0:
            return
        self.ax.scatter(pts[:, 0], pts[:, 1], s=16, color=(1.0, 0.3, 0.2), alpha=0.6, zorder=2)

    def draw_path(self, path: Sequence[RayPoint], ray_index: int) -> None:
        if len(path) < 2:
            return
        color = RAY_COLORS[ray_index % len(RAY_COLORS)]
        arr = path_to_array(path)
        self.ax.plot(arr[:, 0], arr[:, 1], color=color, alpha=0.8, linewidth=2.0, zorder=3)

        dots = arr[:: self.DOT_EVERY]
        self.ax.scatter(dots[:, 0], dots[:, 1], s=12, color=color, zorder=4)

    def draw_paths(self, paths: Sequence[Sequence[RayPoint]]) -> None:
        for idx, path in enumerate(paths):
            self.draw_path(path, idx)

    def draw_vanishing_point(self, x: float, y: float) -> None:
        self.ax.scatter([x], [y], s=60, color=(1.0, 1.0, 1.0), alpha=0.8, zorder=5)

    def save(self, path: str) -> None:
        """Write the figure as PNG and release it."""
        self.fig.savefig(path, facecolor=self.fig.get_facecolor())
        plt.close(self.fig)
