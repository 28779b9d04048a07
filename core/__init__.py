"""Core host components.

Application is imported from core.application directly so that the frame
loop and input handling can be used without an OpenGL context.
"""

from .frame_loop import FrameLoop
from .input_handler import InputHandler, Subscription

__all__ = ["FrameLoop", "InputHandler", "Subscription"]
