from __future__ import annotations

from typing import Any, Protocol


class Drawable2D(Protocol):
    """2D debug drawable contract."""

    def polyline(self) -> Any:
        """Return a (N,2) array of points suitable for plotting."""
        ...
