"""Starfield simulation: stars, dust, constellations and a passing rocket."""

from .canvas import Canvas
from .objects import CelestialField, CelestialObject, Connections, Kind, PointerState
from .rocket import ExhaustParticle, Rocket, RocketState
from .engine import StarfieldEngine

__all__ = [
    "Canvas",
    "CelestialField",
    "CelestialObject",
    "Connections",
    "ExhaustParticle",
    "Kind",
    "PointerState",
    "Rocket",
    "RocketState",
    "StarfieldEngine",
]
