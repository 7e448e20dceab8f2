import math

import numpy as np
import pytest

from raystream.geometry import Obstacle, as_obstacles


def test_ring_points_on_circle():
    ring = Obstacle.ring((10.0, 20.0), radius=5.0, count=40)
    assert len(ring) == 40
    d = np.hypot(ring.points[:, 0] - 10.0, ring.points[:, 1] - 20.0)
    assert np.allclose(d, 5.0)


def test_line_includes_end_point():
    wall = Obstacle.line((0.0, 0.0), (0.0, 9.0), spacing=3.0)
    assert len(wall) == 4
    assert wall.points[-1].tolist() == [0.0, 9.0]


def test_line_rejects_non_positive_spacing():
    with pytest.raises(ValueError):
        Obstacle.line((0.0, 0.0), (1.0, 0.0), spacing=0.0)


def test_points_normalised_to_array():
    ob = Obstacle(points=[(1, 2), (3, 4)], radius=10.0)
    assert ob.points.shape == (2, 2)
    assert ob.points.dtype == np.float64
    assert ob.radius == 10.0
    assert ob.strength is None


def test_polyline_is_points():
    ob = Obstacle.ring((0.0, 0.0), radius=1.0, count=3)
    assert ob.polyline() is ob.points
    assert ob.points[0].tolist() == pytest.approx([1.0, 0.0])
    assert math.isclose(ob.points[1][0], math.cos(2 * math.pi / 3))


def test_as_obstacles_wraps_point_lists():
    existing = Obstacle(points=[(0.0, 0.0)])
    out = as_obstacles([existing, [(1.0, 1.0), (2.0, 2.0)]])
    assert out[0] is existing
    assert isinstance(out[1], Obstacle)
    assert len(out[1]) == 2
