"""Animation-frame scheduler, the host side of request/cancel frame."""

from typing import Callable, Dict

FrameCallback = Callable[[float], None]


class FrameLoop:
    """
    Cooperative per-frame callback queue.

    Callbacks requested during a frame run on the next one; a cancelled
    callback never runs, even when it was cancelled mid-frame.
    """

    def __init__(self):
        self._callbacks: Dict[int, FrameCallback] = {}
        self._next_handle = 1
        self.frame_count = 0

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int):
        self._callbacks.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def run_frame(self, timestamp: float):
        """Run every callback that was pending when the frame began."""
        self.frame_count += 1
        for handle in list(self._callbacks):
            callback = self._callbacks.pop(handle, None)
            if callback is not None:
                callback(timestamp)
