from __future__ import annotations

import pytest

from spendsight.analytics.windowing import (
    ChartWindow,
    WindowState,
    visible_bounds,
    visible_slice,
    window_positions,
)
from spendsight.config import MAX_ZOOM


SERIES = list(range(41))


@pytest.mark.parametrize("center", [0.0, 0.3, 0.5, 1.0, -2.0, 7.0])
def test_zoomed_out_returns_everything(center):
    assert visible_slice(SERIES, 1, center) == SERIES
    assert visible_slice(SERIES, 0.5, center) == SERIES


def test_empty_series():
    assert visible_slice([], 3, 0.5) == []
    assert visible_bounds(0, 3, 0.5) == (0, -1)


def test_centered_window():
    assert visible_bounds(41, 4, 0.5) == (15, 25)
    assert visible_slice(SERIES, 4, 0.5) == list(range(15, 26))


# With 41 points the window edges land on whole indices at every center
# below, so item counts match exactly.
@pytest.mark.parametrize("center", [0.0, 1.0, 0.0625, 0.9375])
def test_edge_window_keeps_its_width(center):
    middle = visible_slice(SERIES, 4, 0.5)
    edge = visible_slice(SERIES, 4, center)
    assert len(edge) == len(middle)


@pytest.mark.parametrize("center", [0.0, 0.3, 0.5, 1.0])
def test_window_width_is_fixed_item_count_varies_by_one(center):
    start, end = window_positions(4, center)
    assert end - start == pytest.approx(0.25)
    # floor/ceil rounding: a centered window straddles more grid points
    assert len(visible_slice(list(range(5)), 4, center)) in (2, 3)


def test_small_series_edge_window_can_be_one_item_narrower():
    assert visible_slice(list(range(5)), 4, 0.0) == [0, 1]
    assert visible_slice(list(range(5)), 4, 0.5) == [1, 2, 3]


def test_left_edge_shifts_right():
    assert window_positions(4, 0.0) == (0.0, 0.25)
    assert visible_slice(SERIES, 4, 0.0) == list(range(0, 11))


def test_right_edge_shifts_left():
    assert window_positions(4, 1.0) == (0.75, 1.0)
    assert visible_slice(SERIES, 4, 1.0) == list(range(30, 41))


def test_slice_is_contiguous_and_inclusive():
    start, end = visible_bounds(101, 2.5, 0.37)
    assert visible_slice(list(range(101)), 2.5, 0.37) == list(range(start, end + 1))


def test_state_defaults_and_clamping():
    s = WindowState()
    assert (s.zoom_level, s.zoom_center) == (1.0, 0.5)
    s = WindowState(zoom_level=12, zoom_center=-1)
    assert (s.zoom_level, s.zoom_center) == (MAX_ZOOM, 0.0)


def test_wheel_up_zooms_in_toward_cursor():
    s = WindowState()
    assert s.wheel(delta_y=-500, relative_x=1.0)
    assert s.zoom_level == pytest.approx(1.5)
    assert s.zoom_center == pytest.approx(0.6)


def test_wheel_down_zooms_out_without_moving_center():
    s = WindowState(zoom_level=4, zoom_center=0.3)
    assert s.wheel(delta_y=500, relative_x=0.9)
    assert s.zoom_level == pytest.approx(2.0)
    assert s.zoom_center == 0.3


def test_wheel_is_clamped_and_noop_at_limits():
    s = WindowState()
    assert not s.wheel(delta_y=100, relative_x=0.2)
    for _ in range(50):
        s.wheel(delta_y=-300, relative_x=0.5)
    assert s.zoom_level == MAX_ZOOM
    center = s.zoom_center
    assert not s.wheel(delta_y=-300, relative_x=0.0)
    assert s.zoom_center == center


def test_drag_requires_zoom():
    s = WindowState()
    assert not s.begin_drag()
    assert not s.drag(0.2)
    assert s.zoom_center == 0.5


def test_drag_moves_against_pointer_scaled_by_window():
    s = WindowState(zoom_level=4, zoom_center=0.5)
    assert s.begin_drag()
    assert s.drag(0.2)
    assert s.zoom_center == pytest.approx(0.45)
    s.end_drag()
    assert not s.drag(0.2)


@pytest.mark.parametrize("dx", [0.1, -0.1])
def test_repeated_drags_are_monotonic_and_bounded(dx):
    s = WindowState(zoom_level=2, zoom_center=0.5)
    s.begin_drag()
    centers = [s.zoom_center]
    for _ in range(40):
        s.drag(dx)
        centers.append(s.zoom_center)
    assert all(0.0 <= c <= 1.0 for c in centers)
    if dx > 0:
        assert centers == sorted(centers, reverse=True)
        assert centers[-1] == 0.0
    else:
        assert centers == sorted(centers)
        assert centers[-1] == 1.0


def test_reset():
    s = WindowState(zoom_level=3, zoom_center=0.9)
    s.begin_drag()
    s.reset()
    assert (s.zoom_level, s.zoom_center, s.dragging) == (1.0, 0.5, False)
    assert s.zoom_percent == 100


def test_chart_window_recomputes_only_on_new_inputs():
    chart = ChartWindow(SERIES)
    assert chart.visible() == SERIES
    chart.visible()
    assert chart.recomputations == 1

    chart.state.wheel(-1000, 0.5)
    assert len(chart.visible()) < len(SERIES)
    chart.visible()
    assert chart.recomputations == 2

    chart.invalidate()
    chart.visible()
    assert chart.recomputations == 3


def test_chart_window_picks_up_new_data():
    chart = ChartWindow(SERIES)
    chart.visible()
    chart.set_series(list(SERIES))
    chart.visible()
    assert chart.recomputations == 1

    replaced = [x * 10 for x in SERIES]
    chart.set_series(replaced)
    assert chart.visible() == replaced
    assert chart.recomputations == 2

    chart.set_series(SERIES[:20])
    assert chart.visible() == SERIES[:20]
    assert chart.recomputations == 3
