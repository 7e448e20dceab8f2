import math

import pytest

from raystream.math_utils import bearing, clamp_float, lerp, smoothstep, wrap_angle


@pytest.mark.parametrize("angle, expected", [
    (0.0, 0.0),
    (math.pi, math.pi),
    (-math.pi, math.pi),
    (3 * math.pi / 2, -math.pi / 2),
    (-3 * math.pi / 2, math.pi / 2),
    (5 * math.pi, math.pi),
    (0.5 + 4 * math.pi, 0.5),
])
def test_wrap_angle(angle, expected):
    assert wrap_angle(angle) == pytest.approx(expected)


def test_wrap_angle_range():
    for k in range(-50, 50):
        w = wrap_angle(k * 0.7)
        assert -math.pi < w <= math.pi


def test_clamp_float():
    assert clamp_float(-1.0, 0.0, 1.0) == 0.0
    assert clamp_float(2.0, 0.0, 1.0) == 1.0
    assert clamp_float(0.25, 0.0, 1.0) == 0.25


def test_bearing():
    assert bearing(0.0, 0.0, 1.0, 0.0) == 0.0
    assert bearing(1.0, 1.0, 1.0, 3.0) == pytest.approx(math.pi / 2)


def test_smoothstep_and_lerp():
    assert smoothstep(0.0) == 0.0
    assert smoothstep(1.0) == 1.0
    assert smoothstep(0.5) == 0.5
    assert lerp(2.0, 4.0, 0.25) == 2.5
