"""Drawing surface the starfield renders onto."""

from abc import ABC, abstractmethod
from typing import Sequence, Tuple

Color = Tuple[int, int, int]


class Canvas(ABC):
    """
    Minimal 2D raster surface.

    Coordinates are pixels with the origin at the top-left corner.
    Colors are RGB triples in 0-255, alpha is a separate float in [0, 1].
    """

    @property
    @abstractmethod
    def width(self) -> int:
        ...

    @property
    @abstractmethod
    def height(self) -> int:
        ...

    @abstractmethod
    def clear(self):
        """Erase the whole frame."""

    @abstractmethod
    def fill_circle(self, x: float, y: float, radius: float, color: Color, alpha: float):
        ...

    @abstractmethod
    def radial_glow(self, x: float, y: float, radius: float, color: Color, alpha: float):
        """Radial gradient from `alpha` at the center to transparent at `radius`."""

    @abstractmethod
    def line(self, x1: float, y1: float, x2: float, y2: float,
             color: Color, alpha: float, width: float = 1.0):
        ...

    @abstractmethod
    def fill_polygon(self, points: Sequence[Tuple[float, float]], color: Color, alpha: float):
        ...

    @abstractmethod
    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color, alpha: float):
        ...
