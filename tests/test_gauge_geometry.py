import pytest

from cockpit_dash.utils.gauge_geometry import (
    GaugeSpec,
    Point,
    current_angle,
    describe_arc,
    generate_ticks,
    polar_to_cartesian,
    render,
)

CENTER = (100.0, 100.0)


@pytest.mark.parametrize(
    "angle, expected",
    [(0, (100, 50)), (90, (150, 100)), (180, (100, 150)), (-90, (50, 100)), (270, (50, 100))],
)
def test_polar_angle_is_clockwise_from_twelve(angle, expected):
    p = polar_to_cartesian(CENTER, 50, angle)
    assert p.x == pytest.approx(expected[0], abs=1e-9)
    assert p.y == pytest.approx(expected[1], abs=1e-9)


@pytest.mark.parametrize(
    "start, end, large",
    [(0, 90, 0), (0, 180, 0), (0, 180.5, 1), (-225, 45, 1), (210, 330, 0), (45, -225, 1), (90, 0, 0)],
)
def test_large_arc_flag(start, end, large):
    assert describe_arc(CENTER, 50, start, end).large_arc == large


def test_describe_arc_runs_back_to_front():
    arc = describe_arc(CENTER, 50, 0, 90)
    assert arc.start == pytest.approx(Point(150, 100))
    assert arc.end == pytest.approx(Point(100, 50))
    assert arc.sweep == 0
    assert arc.to_svg() == "M 150 100 A 50 50 0 0 0 100 50"


def test_reversed_span_draws_on_gauge_circle():
    arc = describe_arc(CENTER, 50, 90, 0)
    assert arc.sweep == 1
    assert arc.to_svg() == "M 100 50 A 50 50 0 0 1 150 100"


def test_mirrored_reversed_span_sweeps_back():
    arc = describe_arc(CENTER, 50, 90, 0, mirrored=True)
    assert arc.sweep == 0
    assert arc.to_svg() == "M 100 50 A 50 50 0 0 0 50 100"


def test_mirrored_arc_reflects_points_and_sweep():
    plain = describe_arc(CENTER, 50, -225, 45)
    mirrored = describe_arc(CENTER, 50, -225, 45, mirrored=True)
    assert mirrored.start.x == pytest.approx(200 - plain.start.x)
    assert mirrored.start.y == pytest.approx(plain.start.y)
    assert mirrored.end.x == pytest.approx(200 - plain.end.x)
    assert mirrored.large_arc == plain.large_arc
    assert mirrored.sweep == 1


@pytest.mark.parametrize("mirrored, start_x", [(False, 150), (True, 50)])
def test_painter_path_follows_arc(mirrored, start_x):
    arc = describe_arc(CENTER, 50, 0, 90, mirrored=mirrored)
    path = arc.to_painter_path()
    assert not path.isEmpty()
    start = path.pointAtPercent(0)
    assert start.x() == pytest.approx(start_x, abs=1e-2)
    assert start.y() == pytest.approx(100, abs=1e-2)
    end = path.currentPosition()
    assert end.x() == pytest.approx(100, abs=1e-2)
    assert end.y() == pytest.approx(50, abs=1e-2)


def test_current_angle_maps_linearly():
    assert current_angle(0, 240, -135, 135) == -135
    assert current_angle(120, 240, -135, 135) == pytest.approx(0)
    assert current_angle(240, 240, -135, 135) == 135


def test_current_angle_clamps_value():
    assert current_angle(-50, 240, -135, 135) == -135
    assert current_angle(1000, 240, -135, 135) == 135


def test_current_angle_zero_max_returns_start():
    assert current_angle(10, 0, 210, 330) == 210
    assert current_angle(0, 0, -225, 45) == -225


def test_current_angle_stays_within_span():
    for start, end in [(-225, 45), (210, 330), (45, -225)]:
        lo, hi = min(start, end), max(start, end)
        for value in range(-20, 300, 7):
            assert lo <= current_angle(value, 240, start, end) <= hi


def test_ticks_span_whole_arc():
    ticks = generate_ticks(GaugeSpec(value=120, max_value=240, start_angle=-135, end_angle=135, tick_count=13))
    assert len(ticks) == 13
    assert ticks[0].angle == -135
    assert ticks[-1].angle == pytest.approx(135)
    assert [t.value for t in ticks] == pytest.approx([20.0 * i for i in range(13)])


def test_ticks_active_and_major():
    ticks = generate_ticks(GaugeSpec(value=120, max_value=240, tick_count=13))
    assert [t.active for t in ticks] == [True] * 7 + [False] * 6
    assert [t.index for t in ticks if t.major] == [0, 3, 6, 9, 12]
    assert ticks[3].stroke_width == 2
    assert ticks[4].stroke_width == 1


def test_tick_lines_sit_inside_arc():
    spec = GaugeSpec(value=0, max_value=100, start_angle=0, end_angle=90, tick_count=2, size=200, stroke_width=10)
    first = generate_ticks(spec)[0]
    # radius 90, ticks from 78 to 86 straight up
    assert first.inner == pytest.approx(Point(100, 22))
    assert first.outer == pytest.approx(Point(100, 14))
    assert first.to_svg() == "M 100 22 L 100 14"


def test_tick_count_edge_cases():
    assert generate_ticks(GaugeSpec(value=5, max_value=10, tick_count=0)) == []
    single = generate_ticks(GaugeSpec(value=5, max_value=10, start_angle=30, tick_count=1))
    assert len(single) == 1
    assert single[0].angle == 30
    assert single[0].active


def test_render_zero_value_has_no_active_arc():
    result = render(GaugeSpec(value=0, max_value=240))
    assert result.active_arc_path is None
    assert result.background_arc_path.startswith("M ")
    assert result.angle == -225
    assert result.fraction == 0


def test_render_degenerate_max():
    result = render(GaugeSpec(value=50, max_value=0))
    assert result.angle == -225
    assert result.active_arc_path is None
    assert result.fraction == 0


def test_render_active_arc_ends_at_reading():
    spec = GaugeSpec(value=4000, max_value=8000, start_angle=210, end_angle=330, tick_count=5, mirrored=True)
    result = render(spec)
    assert result.angle == pytest.approx(270)
    assert result.fraction == pytest.approx(0.5)
    active = result.active_arc_path.split()
    background = result.background_arc_path.split()
    # both arcs are drawn back to the start angle
    assert active[-2:] == background[-2:]
    # 60 degree span, mirrored winding
    assert active[7:9] == ["0", "1"]
    assert background[7:9] == ["0", "1"]
    assert [t.active for t in result.ticks] == [True, True, True, False, False]


def test_render_is_pure():
    spec = GaugeSpec(value=77, max_value=240)
    assert render(spec) == render(spec)
