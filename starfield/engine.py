"""Starfield engine - owns the field, the constellations and the rocket for one canvas."""

import time
import numpy as np
from typing import Callable, List, Optional

from config import starfield as config
from config.starfield import TAU
from .canvas import Canvas
from .generation import build_connections, generate_field, is_valid_viewport
from .objects import CelestialField, Connections, PointerState, pointer_distances
from .render import draw_connections, draw_dust, draw_rocket, draw_stars
from .rocket import Rocket


class StarfieldEngine:
    """
    One animated starfield bound to one canvas.

    The engine is driven by a frame loop (`request_frame` / `cancel_frame`)
    and fed by an input handler's `pointer_move`, `pointer_leave` and
    `resize` streams. Everything it draws goes through the Canvas.
    """

    def __init__(self, preset: Optional[dict] = None,
                 clock: Callable[[], float] = time.monotonic,
                 seed: Optional[int] = None):
        self.preset = preset if preset is not None else config.PRESETS[config.DEFAULT_PRESET]
        self.clock = clock
        self.rng = np.random.default_rng(seed)

        self.connection_radius = config.INTERACTION["connection_radius"]
        self.star_radius = config.INTERACTION["star_radius"]

        self.canvas: Optional[Canvas] = None
        self.frame_loop = None
        self.width = 0
        self.height = 0

        self.field = CelestialField.empty()
        self.connections = Connections.empty()
        self.rocket: Optional[Rocket] = None
        self.pointer: Optional[PointerState] = None

        self._running = False
        self._frame_handle = None
        self._subscriptions: List = []

    @property
    def is_running(self) -> bool:
        return self._running

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, canvas: Optional[Canvas], frame_loop, input_handler=None) -> bool:
        """
        Bind to a canvas and start animating.

        Without a canvas the engine stays idle: nothing is drawn and no
        listeners are attached. Returns whether the engine is running.
        """
        if self._running:
            return True
        if canvas is None:
            print("[Starfield] No drawing surface available, animation disabled")
            return False

        self.canvas = canvas
        self.frame_loop = frame_loop
        self.pointer = None
        self.resize(canvas.width, canvas.height)

        if self.preset["rocket"]:
            self.rocket = Rocket(config.ROCKET, self.clock, self.rng)

        if input_handler is not None:
            self._subscriptions = [
                input_handler.subscribe("pointer_move", self.on_pointer_move),
                input_handler.subscribe("pointer_leave", self.on_pointer_leave),
                input_handler.subscribe("resize", self.resize),
            ]

        self._running = True
        self._frame_handle = self.frame_loop.request_frame(self._on_frame)
        return True

    def resize(self, width: float, height: float):
        """Throw away every object and reseed for the new viewport."""
        self.width = width
        self.height = height

        if not is_valid_viewport(width, height):
            self.field = CelestialField.empty()
            self.connections = Connections.empty()
            return

        field = generate_field(width, height, self.preset, self.rng)
        connections = build_connections(field, width, self.preset)
        self.field = field
        self.connections = connections
        print(
            f"[Starfield] {field.star_count} stars, {field.dust_count} dust, "
            f"{len(connections)} connections ({int(width)}x{int(height)})"
        )

    def on_pointer_move(self, x: float, y: float):
        self.pointer = PointerState(x, y)

    def on_pointer_leave(self):
        self.pointer = None

    def shutdown(self):
        """Stop the frame loop and detach every listener. Safe to repeat."""
        was_running = self._running
        self._running = False

        if self._frame_handle is not None:
            self.frame_loop.cancel_frame(self._frame_handle)
            self._frame_handle = None

        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions = []

        if was_running:
            print("[Starfield] Stopped")

    # ------------------------------------------------------------------
    # Per-frame update
    # ------------------------------------------------------------------

    def _on_frame(self, timestamp: float):
        self._frame_handle = None
        if not self._running:
            return

        self.tick()

        if self._running:
            self._frame_handle = self.frame_loop.request_frame(self._on_frame)

    def tick(self):
        """Advance the simulation one step and draw the frame."""
        canvas = self.canvas
        if canvas is None:
            return

        field = self.field
        connections = self.connections

        canvas.clear()
        self._advance_pulses(field)
        self._update_highlights(field, connections)

        draw_dust(canvas, field)
        draw_connections(canvas, field, connections, config.RENDER)
        draw_stars(
            canvas, field, self.pointer,
            self.preset["pulse_amplitude"], self.star_radius, config.RENDER
        )

        if self.rocket is not None and is_valid_viewport(self.width, self.height):
            self.rocket.update(self.width, self.height)
            draw_rocket(canvas, self.rocket)

    @staticmethod
    def _advance_pulses(field: CelestialField):
        phases = field.pulse_phases
        phases += field.pulse_speeds
        np.mod(phases, TAU, out=phases)
        # fmod rounding can land exactly on TAU
        phases[phases >= TAU] = 0.0

    def _update_highlights(self, field: CelestialField, connections: Connections):
        if len(connections) == 0:
            return
        positions = field.positions
        midpoints = (positions[connections.pairs[:, 0]] + positions[connections.pairs[:, 1]]) / 2.0
        distances = pointer_distances(midpoints, self.pointer)
        connections.highlighted[:] = distances < self.connection_radius
