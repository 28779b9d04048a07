"""Object and constellation generation - numpy seeding with a Numba pair scan."""

import math
import numpy as np
from numba import njit
from typing import Tuple

from config.starfield import TAU
from .objects import CelestialField, Connections

# Upper bound on grid cells per axis; cells grow past the threshold beyond it
MAX_GRID_DIM = 1024


# ============================================================================
# NUMBA JIT-COMPILED SPATIAL GRID FUNCTIONS
# ============================================================================

@njit(cache=True)
def assign_cells(
    positions: np.ndarray,
    cell_keys: np.ndarray,
    cell_size: float,
    min_x: float,
    min_y: float,
    grid_h: int
):
    """Assign each star to a cell key (column-major)."""
    for i in range(positions.shape[0]):
        cx = int((positions[i, 0] - min_x) / cell_size)
        cy = int((positions[i, 1] - min_y) / cell_size)
        cell_keys[i] = cx * grid_h + cy


@njit(cache=True)
def build_connections_numba(
    positions: np.ndarray,
    threshold: float,
    per_star_cap: int,
    max_total: int,
    pairs: np.ndarray,
    opacities: np.ndarray
) -> int:
    """
    Greedy constellation scan over a uniform grid.

    Cells are at least `threshold` wide, so every partner of star i lies in
    the 3x3 block around its cell and only those stars are visited. Stars are
    taken in index order; within a cell, partners come in index order too.
    A pair (i, j) with i < j is linked when it is closer than `threshold` and
    neither end has reached `per_star_cap`. Returns the number of pairs
    written into `pairs` / `opacities`.
    """
    n = positions.shape[0]
    if n < 2:
        return 0

    min_x = positions[:, 0].min()
    min_y = positions[:, 1].min()
    extent = max(positions[:, 0].max() - min_x, positions[:, 1].max() - min_y)
    cell_size = max(threshold, extent / MAX_GRID_DIM)
    grid_w = int((positions[:, 0].max() - min_x) / cell_size) + 1
    grid_h = int((positions[:, 1].max() - min_y) / cell_size) + 1

    cell_keys = np.empty(n, dtype=np.int64)
    assign_cells(positions, cell_keys, cell_size, min_x, min_y, grid_h)
    sorted_indices = np.argsort(cell_keys, kind="mergesort")
    sorted_keys = cell_keys[sorted_indices]

    degree = np.zeros(n, dtype=np.int32)
    threshold_sq = threshold * threshold
    count = 0

    for i in range(n):
        if count >= max_total:
            break
        if degree[i] >= per_star_cap:
            continue

        xi = positions[i, 0]
        yi = positions[i, 1]
        cx = int((xi - min_x) / cell_size)
        cy = int((yi - min_y) / cell_size)
        done = False

        for dcx in range(-1, 2):
            ncx = cx + dcx
            if ncx < 0 or ncx >= grid_w:
                continue

            for dcy in range(-1, 2):
                ncy = cy + dcy
                if ncy < 0 or ncy >= grid_h:
                    continue

                key = ncx * grid_h + ncy
                k = np.searchsorted(sorted_keys, key)

                while k < n and sorted_keys[k] == key:
                    j = sorted_indices[k]
                    k += 1
                    if j <= i or degree[j] >= per_star_cap:
                        continue

                    dx = xi - positions[j, 0]
                    dy = yi - positions[j, 1]
                    dist_sq = dx * dx + dy * dy

                    if dist_sq < threshold_sq:
                        pairs[count, 0] = i
                        pairs[count, 1] = j
                        opacities[count] = 1.0 - math.sqrt(dist_sq) / threshold
                        degree[i] += 1
                        degree[j] += 1
                        count += 1

                        if degree[i] >= per_star_cap or count >= max_total:
                            done = True
                            break

                if done:
                    break
            if done:
                break

    return count


def warmup():
    """Pre-compile the Numba kernel so the first resize does not stall."""
    pos = np.random.rand(16, 2).astype(np.float64) * 100.0
    pairs = np.zeros((8, 2), dtype=np.int32)
    opacities = np.zeros(8, dtype=np.float64)
    build_connections_numba(pos, 30.0, 2, 8, pairs, opacities)


# ============================================================================
# FIELD GENERATION
# ============================================================================

def is_valid_viewport(width: float, height: float) -> bool:
    """True when the viewport can hold objects (finite and positive)."""
    return (
        math.isfinite(width) and math.isfinite(height)
        and width > 0 and height > 0
    )


def object_counts(width: float, height: float, preset: dict) -> Tuple[int, int]:
    """
    Star and dust counts for a viewport.

    Each kind gets floor(area / density), clamped to its maximum. A density
    of 0 disables the kind.
    """
    if not is_valid_viewport(width, height):
        return 0, 0

    area = width * height

    def count_for(density: float, maximum: int) -> int:
        if density <= 0 or maximum <= 0:
            return 0
        return min(int(area // density), maximum)

    stars = count_for(preset["star_density"], preset["max_stars"])
    dust = count_for(preset["dust_density"], preset["max_dust"])
    return stars, dust


def _pick_colors(rng: np.random.Generator, palette: list, count: int) -> np.ndarray:
    if count == 0:
        return np.zeros((0, 3), dtype=np.int32)
    choices = np.asarray(palette, dtype=np.int32)
    return choices[rng.integers(0, len(choices), size=count)]


def generate_field(width: float, height: float, preset: dict,
                   rng: np.random.Generator) -> CelestialField:
    """Seed a fresh field of stars followed by dust inside the viewport."""
    stars, dust = object_counts(width, height, preset)
    total = stars + dust
    if total == 0:
        return CelestialField.empty()

    positions = np.empty((total, 2), dtype=np.float64)
    positions[:, 0] = rng.uniform(0.0, width, total)
    positions[:, 1] = rng.uniform(0.0, height, total)

    sizes = np.concatenate([
        rng.uniform(*preset["star_size"], stars),
        rng.uniform(*preset["dust_size"], dust),
    ])
    opacities = np.concatenate([
        rng.uniform(*preset["star_opacity"], stars),
        rng.uniform(*preset["dust_opacity"], dust),
    ])
    colors = np.concatenate([
        _pick_colors(rng, preset["star_palette"], stars),
        _pick_colors(rng, preset["dust_palette"], dust),
    ])

    return CelestialField(
        positions=positions,
        sizes=sizes,
        opacities=np.clip(opacities, 0.0, 1.0),
        pulse_phases=rng.uniform(0.0, TAU, total),
        pulse_speeds=rng.uniform(*preset["pulse_speed"], total),
        colors=colors,
        star_count=stars,
    )


def connection_threshold(width: float, preset: dict) -> float:
    return width * preset["connection_threshold_ratio"]


def build_connections(field: CelestialField, width: float, preset: dict) -> Connections:
    """Link nearby stars into constellations."""
    threshold = connection_threshold(width, preset)
    per_star_cap = int(preset["max_connections_per_star"])
    max_total = int(preset["max_connections"])

    if field.star_count < 2 or threshold <= 0 or per_star_cap <= 0 or max_total <= 0:
        return Connections.empty()

    pairs = np.zeros((max_total, 2), dtype=np.int32)
    opacities = np.zeros(max_total, dtype=np.float64)
    count = build_connections_numba(
        np.ascontiguousarray(field.star_positions),
        float(threshold),
        per_star_cap,
        max_total,
        pairs,
        opacities
    )
    return Connections(pairs[:count].copy(), opacities[:count].copy())
