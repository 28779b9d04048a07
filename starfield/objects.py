"""Celestial objects, constellation connections and pointer state."""

import numpy as np
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple


class Kind(IntEnum):
    """Visual weight class of a background object."""
    STAR = 0
    DUST = 1


@dataclass(frozen=True)
class CelestialObject:
    """
    Read-only view of one row of a CelestialField.

    Attributes:
        position: (x, y) in canvas pixels
        size: Base radius
        opacity: Base alpha in [0, 1]
        pulse_phase: Current phase in [0, 2*pi)
        pulse_speed: Phase increment per tick
        color: RGB triple (0-255)
        kind: STAR or DUST
    """
    position: Tuple[float, float]
    size: float
    opacity: float
    pulse_phase: float
    pulse_speed: float
    color: Tuple[int, int, int]
    kind: Kind


class CelestialField:
    """
    Column-wise storage for every star and dust speck on the canvas.

    Stars occupy rows [0, star_count) and dust follows, so a star index is
    also a row index.
    """

    def __init__(self, positions: np.ndarray, sizes: np.ndarray, opacities: np.ndarray,
                 pulse_phases: np.ndarray, pulse_speeds: np.ndarray, colors: np.ndarray,
                 star_count: int):
        self.positions = positions
        self.sizes = sizes
        self.opacities = opacities
        self.pulse_phases = pulse_phases
        self.pulse_speeds = pulse_speeds
        self.colors = colors
        self.star_count = star_count

        self.kinds = np.full(len(sizes), Kind.DUST, dtype=np.int8)
        self.kinds[:star_count] = Kind.STAR

    @classmethod
    def empty(cls) -> "CelestialField":
        return cls(
            positions=np.zeros((0, 2), dtype=np.float64),
            sizes=np.zeros(0, dtype=np.float64),
            opacities=np.zeros(0, dtype=np.float64),
            pulse_phases=np.zeros(0, dtype=np.float64),
            pulse_speeds=np.zeros(0, dtype=np.float64),
            colors=np.zeros((0, 3), dtype=np.int32),
            star_count=0,
        )

    def __len__(self) -> int:
        return len(self.sizes)

    @property
    def dust_count(self) -> int:
        return len(self) - self.star_count

    @property
    def star_positions(self) -> np.ndarray:
        return self.positions[:self.star_count]

    def object(self, index: int) -> CelestialObject:
        """Snapshot a single row."""
        return CelestialObject(
            position=(float(self.positions[index, 0]), float(self.positions[index, 1])),
            size=float(self.sizes[index]),
            opacity=float(self.opacities[index]),
            pulse_phase=float(self.pulse_phases[index]),
            pulse_speed=float(self.pulse_speeds[index]),
            color=tuple(int(c) for c in self.colors[index]),
            kind=Kind(int(self.kinds[index])),
        )


class Connections:
    """Constellation lines between pairs of stars (i < j)."""

    def __init__(self, pairs: np.ndarray, base_opacity: np.ndarray):
        self.pairs = pairs
        self.base_opacity = base_opacity
        self.highlighted = np.zeros(len(pairs), dtype=np.bool_)

    @classmethod
    def empty(cls) -> "Connections":
        return cls(np.zeros((0, 2), dtype=np.int32), np.zeros(0, dtype=np.float64))

    def __len__(self) -> int:
        return len(self.pairs)

    def degrees(self, star_count: int) -> np.ndarray:
        """Number of connections touching each star."""
        return np.bincount(self.pairs.ravel(), minlength=star_count)


@dataclass
class PointerState:
    """Last known pointer position in canvas space."""
    x: float
    y: float


def pointer_distances(points: np.ndarray, pointer: Optional[PointerState]) -> np.ndarray:
    """Distance from each point to the pointer, +inf everywhere without a pointer."""
    if pointer is None or len(points) == 0:
        return np.full(len(points), np.inf)
    return np.hypot(points[:, 0] - pointer.x, points[:, 1] - pointer.y)
