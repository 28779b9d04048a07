"""Text rendering for the HUD overlay."""

import pygame
from OpenGL.GL import *
from typing import Dict, List, Tuple

from config import starfield as config


class TextRenderer:
    """Renders HUD lines using pygame fonts blitted through OpenGL."""

    def __init__(self, font_name: str = config.HUD["font_name"], font_size: int = config.HUD["font_size"]):
        pygame.font.init()
        self.font = pygame.font.SysFont(font_name, font_size)
        self.line_height = self.font.get_linesize() + 4
        self.cache_size = config.HUD["cache_size"]
        self._cache: Dict[str, Tuple[bytes, int, int]] = {}

    def _rasterize(self, text: str) -> Tuple[bytes, int, int]:
        cached = self._cache.get(text)
        if cached is None:
            surface = self.font.render(text, True, config.COLORS["text"])
            w, h = surface.get_size()
            cached = (pygame.image.tostring(surface, "RGBA", True), w, h)
            # HUD strings change with FPS, keep the cache small
            if len(self._cache) >= self.cache_size:
                self._cache.clear()
            self._cache[text] = cached
        return cached

    def draw_lines(self, lines: List[str], x: int, y: int):
        """
        Draw lines top to bottom starting at (x, y).

        Assumes the canvas projection is top-left origin, so rows are
        positioned at their bottom edge for glDrawPixels.
        """
        for row, text in enumerate(lines):
            data, w, h = self._rasterize(text)
            glRasterPos2f(x, y + row * self.line_height + h)
            glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, data)
