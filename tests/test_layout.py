import math

import pytest

from raystream.layout import GlyphAnchor, PerspectiveLayout, glyph_anchors
from raystream.seed import seeded_random
from raystream.simulation import RayPoint, SimulationConfig


def test_from_name_derives_parameters():
    layout = PerspectiveLayout.from_name("abc", 1920, 1080)
    assert layout.seed == 96354
    assert layout.ray_count == 8 + 96354 % 4
    assert layout.base_angle == pytest.approx(math.radians(234))
    assert layout.vanishing_point == (960.0, 540.0)


def test_empty_name():
    layout = PerspectiveLayout.from_name("", 100, 100)
    assert layout.seed == 0
    assert layout.ray_count == 8
    assert layout.base_angle == 0.0


def test_ray_count_range():
    for name in ("Mail", "Code", "Music", "Design", "Research", "Notes"):
        layout = PerspectiveLayout.from_name(name, 1920, 1080)
        assert 8 <= layout.ray_count <= 11


def test_simulate_returns_one_path_per_ray():
    layout = PerspectiveLayout.from_name("Code", 400, 300)
    paths = layout.simulate(SimulationConfig(max_steps=60))
    assert len(paths) == layout.ray_count
    for path in paths:
        assert path[0].total_dist == 0.0


def test_anchor_spacing_follows_measure(straight_path):
    layout = PerspectiveLayout.from_name("Mail", 1920, 1080)
    anchors = list(glyph_anchors(straight_path, lambda size: 10.0, layout))
    assert anchors
    assert all(isinstance(a, GlyphAnchor) for a in anchors)
    assert anchors[0].x == pytest.approx(15.0)
    xs = [a.x for a in anchors]
    for a, b in zip(xs, xs[1:]):
        assert b - a == pytest.approx(7.0)
    assert xs[-1] <= straight_path[-1].x


def test_anchor_visual_parameters(straight_path):
    layout = PerspectiveLayout.from_name("Mail", 1920, 1080)
    for a in glyph_anchors(straight_path, lambda size: size * 2.0, layout, ray_index=3):
        assert a.font_size >= 6.0
        assert 0.03 <= a.opacity <= 0.13
        assert 0.0 <= a.depth <= 1.0
        assert a.angle == pytest.approx(0.0)


def test_depth_grows_along_path(straight_path):
    layout = PerspectiveLayout.from_name("Mail", 200, 100)
    anchors = list(glyph_anchors(straight_path, lambda size: 5.0, layout))
    depths = [a.depth for a in anchors]
    assert depths == sorted(depths)
    assert depths[-1] == 1.0


def test_non_positive_advance_stops(straight_path):
    layout = PerspectiveLayout.from_name("Mail", 1920, 1080)
    anchors = list(glyph_anchors(straight_path, lambda size: 0.0, layout))
    assert len(anchors) == 1


def test_path_too_short_for_first_anchor():
    layout = PerspectiveLayout.from_name("Mail", 1920, 1080)
    assert list(glyph_anchors((), lambda size: 10.0, layout)) == []


def test_vanishing_advance_stops():
    layout = PerspectiveLayout.from_name("Mail", 1920, 1080)
    path = tuple(
        RayPoint(x=float(k), y=0.0, direction=0.0, total_dist=float(k)) for k in range(200)
    )
    anchors = list(glyph_anchors(path, lambda size: 1e-300, layout))
    assert len(anchors) == 1


def test_pulse_phase_adds_per_ray_jitter():
    layout = PerspectiveLayout.from_name("Mail", 1920, 1080)
    base = 3 * 1.7 + (layout.seed % 100) * 0.1
    assert layout.pulse_phase(3) == pytest.approx(base + seeded_random("Mail", 3))
    assert 0.0 <= layout.pulse_phase(3) - base < 1.0
