"""Input handling: turns pygame events into pointer, resize and key streams."""

import pygame
from pygame.locals import *
from typing import Callable, Dict, List

STREAMS = ("pointer_move", "pointer_leave", "resize", "key")


class Subscription:
    """Handle returned by InputHandler.subscribe. Cancelling twice is harmless."""

    def __init__(self, handler: "InputHandler", stream: str, callback: Callable):
        self._handler = handler
        self.stream = stream
        self.callback = callback
        self.active = True

    def cancel(self):
        if not self.active:
            return
        self.active = False
        self._handler._remove(self)


class InputHandler:
    """Handles mouse, touch, window and keyboard events."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._listeners: Dict[str, List[Subscription]] = {name: [] for name in STREAMS}

    def subscribe(self, stream: str, callback: Callable) -> Subscription:
        if stream not in self._listeners:
            raise ValueError(f"Unknown input stream: {stream}")
        subscription = Subscription(self, stream, callback)
        self._listeners[stream].append(subscription)
        return subscription

    def _remove(self, subscription: Subscription):
        listeners = self._listeners[subscription.stream]
        if subscription in listeners:
            listeners.remove(subscription)

    def listener_count(self, stream: str) -> int:
        return len(self._listeners[stream])

    def _emit(self, stream: str, *args):
        # Copy so listeners may unsubscribe while being notified
        for subscription in list(self._listeners[stream]):
            if subscription.active:
                subscription.callback(*args)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            self._emit("key", event.key)
        elif event.type == MOUSEMOTION:
            self._emit("pointer_move", float(event.pos[0]), float(event.pos[1]))
        elif event.type in (FINGERMOTION, FINGERDOWN):
            # Touch coordinates arrive normalized to 0-1
            self._emit("pointer_move", event.x * self.width, event.y * self.height)
        elif event.type == WINDOWLEAVE:
            self._emit("pointer_leave")
        elif event.type == VIDEORESIZE:
            self.width, self.height = event.w, event.h
            self._emit("resize", event.w, event.h)

        return True
