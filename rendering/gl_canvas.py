"""OpenGL-backed Canvas using a top-left-origin orthographic projection."""

import math
import pygame
from OpenGL.GL import *
from OpenGL.error import Error as GLLibraryError
from typing import Optional, Sequence, Tuple

from config import starfield as config
from starfield.canvas import Canvas, Color


class GLCanvas(Canvas):
    """Draws starfield primitives with immediate-mode OpenGL."""

    def __init__(self, width: int, height: int, segments: int = config.RENDER["circle_segments"]):
        self._width = width
        self._height = height
        self.segments = segments
        self._unit_circle = [
            (math.cos(2 * math.pi * k / segments), math.sin(2 * math.pi * k / segments))
            for k in range(segments + 1)
        ]
        self._setup_gl()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _setup_gl(self):
        """Initialize OpenGL settings."""
        glClearColor(*config.COLORS["background"])
        glDisable(GL_DEPTH_TEST)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glEnable(GL_LINE_SMOOTH)
        glShadeModel(GL_SMOOTH)
        self._apply_projection()

    def _apply_projection(self):
        glViewport(0, 0, max(self._width, 1), max(self._height, 1))
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(0, max(self._width, 1), max(self._height, 1), 0, -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def resize(self, width: int, height: int):
        self._width = width
        self._height = height
        self._apply_projection()

    def clear(self):
        glClear(GL_COLOR_BUFFER_BIT)

    @staticmethod
    def _color(color: Color, alpha: float):
        glColor4f(color[0] / 255.0, color[1] / 255.0, color[2] / 255.0, alpha)

    def fill_circle(self, x, y, radius, color, alpha):
        glBegin(GL_TRIANGLE_FAN)
        self._color(color, alpha)
        glVertex2f(x, y)
        for cx, cy in self._unit_circle:
            glVertex2f(x + cx * radius, y + cy * radius)
        glEnd()

    def radial_glow(self, x, y, radius, color, alpha):
        # Per-vertex alpha fades the fan from center to rim
        glBegin(GL_TRIANGLE_FAN)
        self._color(color, alpha)
        glVertex2f(x, y)
        self._color(color, 0.0)
        for cx, cy in self._unit_circle:
            glVertex2f(x + cx * radius, y + cy * radius)
        glEnd()

    def line(self, x1, y1, x2, y2, color, alpha, width=1.0):
        glLineWidth(width)
        glBegin(GL_LINES)
        self._color(color, alpha)
        glVertex2f(x1, y1)
        glVertex2f(x2, y2)
        glEnd()

    def fill_polygon(self, points: Sequence[Tuple[float, float]], color, alpha):
        glBegin(GL_POLYGON)
        self._color(color, alpha)
        for px, py in points:
            glVertex2f(px, py)
        glEnd()

    def fill_rect(self, x, y, w, h, color, alpha):
        glBegin(GL_QUADS)
        self._color(color, alpha)
        glVertex2f(x, y)
        glVertex2f(x + w, y)
        glVertex2f(x + w, y + h)
        glVertex2f(x, y + h)
        glEnd()


def acquire_canvas(width: int, height: int) -> Optional[GLCanvas]:
    """Create a GLCanvas for the current context, or None if there is no usable GL."""
    try:
        return GLCanvas(width, height)
    except (GLLibraryError, pygame.error) as e:
        print(f"[GL] Canvas unavailable: {e}")
        return None
