from __future__ import annotations

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from config import starfield as config
from core.frame_loop import FrameLoop
from starfield.canvas import Canvas


class RecordingCanvas(Canvas):
    """Canvas that records every draw call instead of rasterizing."""

    def __init__(self, width: int = 800, height: int = 600) -> None:
        self._width = width
        self._height = height
        self.calls: list[tuple] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        self.calls.append(("clear",))

    def fill_circle(self, x, y, radius, color, alpha) -> None:
        self.calls.append(("fill_circle", x, y, radius, color, alpha))

    def radial_glow(self, x, y, radius, color, alpha) -> None:
        self.calls.append(("radial_glow", x, y, radius, color, alpha))

    def line(self, x1, y1, x2, y2, color, alpha, width=1.0) -> None:
        self.calls.append(("line", x1, y1, x2, y2, color, alpha, width))

    def fill_polygon(self, points, color, alpha) -> None:
        self.calls.append(("fill_polygon", list(points), color, alpha))

    def fill_rect(self, x, y, w, h, color, alpha) -> None:
        self.calls.append(("fill_rect", x, y, w, h, color, alpha))

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]


class ManualClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas(800, 600)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def frame_loop() -> FrameLoop:
    return FrameLoop()


@pytest.fixture
def hero() -> dict:
    return config.PRESETS["hero"]
