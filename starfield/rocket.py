"""Rocket sprite that crosses the sky every so often, trailing exhaust."""

import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List


class RocketState(Enum):
    """Lifecycle of the rocket."""
    DORMANT = "dormant"
    FLYING = "flying"


@dataclass
class ExhaustParticle:
    x: float
    y: float
    size: float
    opacity: float
    speed: float


class Rocket:
    """
    Two-state sprite: Dormant until `next_launch_time`, then Flying left to
    right at constant speed until it clears the right edge by `margin`.
    """

    def __init__(self, settings: dict, clock: Callable[[], float], rng: np.random.Generator):
        self.settings = settings
        self.clock = clock
        self.rng = rng

        self.x = -settings["margin"]
        self.y = 0.0
        self.size = settings["size"][0]
        self.speed = settings["speed"][0]
        self.visible = False
        self.exhaust: List[ExhaustParticle] = []
        self.next_launch_time = clock() + rng.uniform(*settings["first_launch_delay"])

    @property
    def state(self) -> RocketState:
        return RocketState.FLYING if self.visible else RocketState.DORMANT

    def update(self, width: float, height: float):
        """Advance one tick."""
        now = self.clock()

        if not self.visible:
            if now >= self.next_launch_time:
                self._launch(height)
            return

        self.x += self.speed

        if self.rng.random() < self.settings["exhaust_probability"]:
            self._emit_exhaust()
        self._update_exhaust()

        if self.x > width + self.settings["margin"]:
            self._land(now)

    def _launch(self, height: float):
        s = self.settings
        band_top, band_bottom = s["band"]
        self.x = -s["margin"]
        self.y = self.rng.uniform(band_top * height, band_bottom * height)
        self.speed = self.rng.uniform(*s["speed"])
        self.size = self.rng.uniform(*s["size"])
        self.exhaust = []
        self.visible = True

    def _land(self, now: float):
        self.visible = False
        self.exhaust = []
        self.next_launch_time = now + self.rng.uniform(*self.settings["cooldown"])

    @property
    def tail(self) -> tuple:
        """Nozzle exit point, where exhaust is born."""
        return self.x - self.size * 1.1, self.y

    def _emit_exhaust(self):
        s = self.settings
        low, high = s["exhaust_batch"]
        tail_x, tail_y = self.tail
        spread = self.size * 0.15

        for _ in range(int(self.rng.integers(low, high + 1))):
            self.exhaust.append(ExhaustParticle(
                x=tail_x,
                y=tail_y + self.rng.uniform(-spread, spread),
                size=self.rng.uniform(*s["exhaust_size"]),
                opacity=self.rng.uniform(*s["exhaust_opacity"]),
                speed=self.rng.uniform(*s["exhaust_speed"]),
            ))

    def _update_exhaust(self):
        jitter = self.settings["exhaust_jitter"]
        decay = self.settings["exhaust_decay"]

        for p in self.exhaust:
            p.x -= p.speed
            p.y += self.rng.uniform(-jitter, jitter)
            p.opacity -= decay

        self.exhaust = [p for p in self.exhaust if p.opacity > 0]
