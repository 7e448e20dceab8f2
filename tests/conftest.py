import math

import pytest

from raystream.simulation import RayPoint

WIDTH = 3840.0
HEIGHT = 2160.0


@pytest.fixture
def canvas():
    return WIDTH, HEIGHT, (WIDTH / 2, HEIGHT / 2)


@pytest.fixture
def straight_path():
    """Ray along +x from the origin, one point every 3 units."""
    return tuple(
        RayPoint(x=3.0 * k, y=0.0, direction=0.0, total_dist=3.0 * k) for k in range(40)
    )


def bearing_from(point, vp):
    return math.atan2(point.y - vp[1], point.x - vp[0])
