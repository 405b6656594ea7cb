"""
Windowing — which contiguous slice of an ordered series is visible at a
given zoom level and center, and how wheel/drag/reset gestures move them.

Positions are normalized to [0, 1] across the whole series. The window keeps
its width near the edges: it is shifted back inside rather than cut short.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Optional, Sequence, TypeVar

from spendsight.analytics.change import CalcInputs, RecomputeGate, changed
from spendsight.analytics.common import clamp
from spendsight.config import (
    DEFAULT_ZOOM_CENTER,
    MAX_ZOOM,
    MIN_ZOOM,
    WHEEL_SENSITIVITY,
    ZOOM_ANCHOR_DAMPING,
)
from spendsight.logging_setup import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Slice computation
# ---------------------------------------------------------------------------

def window_positions(zoom_level: float, zoom_center: float) -> tuple[float, float]:
    """Normalized (start, end) of the visible window, shifted to stay in [0, 1]."""
    if zoom_level <= MIN_ZOOM:
        return 0.0, 1.0

    center = clamp(zoom_center, 0.0, 1.0)
    half = (1 / zoom_level) / 2
    start = center - half
    end = center + half

    if start < 0:
        end = min(1.0, end - start)
        start = 0.0
    if end > 1:
        start = max(0.0, start - (end - 1))
        end = 1.0
    return start, end


def visible_bounds(n: int, zoom_level: float, zoom_center: float) -> tuple[int, int]:
    """Inclusive (start_index, end_index) for a series of length n.

    Returns (0, -1) for an empty series.
    """
    if n <= 0:
        return 0, -1
    if zoom_level <= MIN_ZOOM:
        return 0, n - 1

    start_pos, end_pos = window_positions(zoom_level, zoom_center)
    start = math.floor(start_pos * (n - 1))
    end = math.ceil(end_pos * (n - 1))
    return start, end


def visible_slice(series: Sequence[T], zoom_level: float, zoom_center: float) -> list[T]:
    """The contiguous part of ``series`` shown at this zoom/center."""
    if len(series) == 0:
        return []
    if zoom_level <= MIN_ZOOM:
        return list(series)
    start, end = visible_bounds(len(series), zoom_level, zoom_center)
    return list(series[start:end + 1])


# ---------------------------------------------------------------------------
# Gesture state
# ---------------------------------------------------------------------------

@dataclass
class WindowState:
    """Zoom/pan state of one chart. Never persisted."""
    zoom_level: float = MIN_ZOOM
    zoom_center: float = DEFAULT_ZOOM_CENTER
    dragging: bool = False
    max_zoom: float = MAX_ZOOM

    def __post_init__(self) -> None:
        self.zoom_level = clamp(self.zoom_level, MIN_ZOOM, self.max_zoom)
        self.zoom_center = clamp(self.zoom_center, 0.0, 1.0)

    @property
    def window_size(self) -> float:
        return 1 / self.zoom_level

    @property
    def zoomed(self) -> bool:
        return self.zoom_level > MIN_ZOOM

    @property
    def zoom_percent(self) -> int:
        return round(self.zoom_level * 100)

    def inputs(self, series_length: int) -> CalcInputs:
        return CalcInputs(series_length, self.zoom_level, self.zoom_center)

    def wheel(self, delta_y: float, relative_x: float, sensitivity: float = WHEEL_SENSITIVITY) -> bool:
        """Zoom by a wheel tick at cursor position ``relative_x`` (0-1 across the chart).

        Negative ``delta_y`` (scrolling up) zooms in. When zooming in, the
        center moves part of the way toward the cursor so the point under it
        stays roughly fixed. Returns True if the state changed.
        """
        zoom_delta = -delta_y * sensitivity
        new_level = clamp(self.zoom_level + zoom_delta * self.zoom_level, MIN_ZOOM, self.max_zoom)
        if new_level == self.zoom_level:
            return False

        if new_level > self.zoom_level:
            target = clamp(relative_x, 0.0, 1.0)
            self.zoom_center = clamp(
                self.zoom_center + (target - self.zoom_center) * ZOOM_ANCHOR_DAMPING, 0.0, 1.0
            )
        self.zoom_level = new_level
        return True

    def begin_drag(self) -> bool:
        """Start a pan; only possible while zoomed in."""
        self.dragging = self.zoomed
        return self.dragging

    def drag(self, dx: float) -> bool:
        """Pan by ``dx`` (fraction of chart width) while a drag is active."""
        if not self.dragging or not self.zoomed:
            return False
        new_center = clamp(self.zoom_center - dx * self.window_size, 0.0, 1.0)
        if new_center == self.zoom_center:
            return False
        self.zoom_center = new_center
        return True

    def end_drag(self) -> None:
        self.dragging = False

    def reset(self) -> None:
        """Zoom fully out and recenter."""
        self.zoom_level = MIN_ZOOM
        self.zoom_center = DEFAULT_ZOOM_CENTER
        self.dragging = False


# ---------------------------------------------------------------------------
# Chart binding
# ---------------------------------------------------------------------------

class ChartWindow(Generic[T]):
    """One chart's series, window state, and last computed slice.

    ``visible()`` only recomputes when the series length, zoom level or
    zoom center differ from the previous computation.
    """

    def __init__(self, series: Sequence[T] = (), state: Optional[WindowState] = None) -> None:
        self.series: Sequence[T] = series
        self.state = state or WindowState()
        self._gate = RecomputeGate()
        self._visible: list[T] = []
        self.recomputations = 0

    def set_series(self, series: Sequence[T]) -> None:
        """Swap in new data; same-length data that differs at a sampled point also recomputes."""
        if changed(self.series, series):
            self._gate.invalidate()
        self.series = series

    def invalidate(self) -> None:
        self._gate.invalidate()

    def visible(self) -> list[T]:
        if self._gate.should_recompute(self.state.inputs(len(self.series))):
            self._visible = visible_slice(self.series, self.state.zoom_level, self.state.zoom_center)
            self.recomputations += 1
            logger.debug(
                "window recomputed: %d of %d points at %.2fx, center %.3f",
                len(self._visible), len(self.series), self.state.zoom_level, self.state.zoom_center,
            )
        return self._visible
