"""OpenGL rendering for the starfield host."""

from .gl_canvas import GLCanvas, acquire_canvas
from .text import TextRenderer

__all__ = ["GLCanvas", "TextRenderer", "acquire_canvas"]
