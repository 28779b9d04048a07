"""Rasterizes the starfield onto a Canvas, back to front."""

import numpy as np
from typing import Optional

from .canvas import Canvas
from .objects import CelestialField, Connections, PointerState, pointer_distances
from .rocket import Rocket

ROCKET_HULL = (220, 225, 235)
ROCKET_TRIM = (205, 60, 60)
ROCKET_WINDOW = (120, 190, 255)
ROCKET_NOZZLE = (110, 110, 125)


def _rgb(color) -> tuple:
    return int(color[0]), int(color[1]), int(color[2])


def draw_dust(canvas: Canvas, field: CelestialField):
    """Dust is flat: fixed size and opacity, no pulse, no pointer reaction."""
    for i in range(field.star_count, len(field)):
        canvas.fill_circle(
            field.positions[i, 0], field.positions[i, 1],
            field.sizes[i], _rgb(field.colors[i]), field.opacities[i]
        )


def draw_connections(canvas: Canvas, field: CelestialField, connections: Connections, render: dict):
    for k in range(len(connections)):
        i, j = connections.pairs[k]
        x1, y1 = field.positions[i]
        x2, y2 = field.positions[j]
        color = _rgb(field.colors[i])

        if connections.highlighted[k]:
            alpha = render["highlight_opacity"]
            canvas.radial_glow(
                (x1 + x2) / 2, (y1 + y2) / 2,
                render["highlight_glow_radius"], color, alpha * 0.5
            )
            canvas.line(x1, y1, x2, y2, color, alpha * 0.25, render["highlight_width"] * 3)
            canvas.line(x1, y1, x2, y2, color, alpha, render["highlight_width"])
        else:
            alpha = connections.base_opacity[k] * render["connection_dampening"]
            canvas.line(x1, y1, x2, y2, color, alpha, render["connection_width"])


def displayed_star_sizes(field: CelestialField, pulse_amplitude: float) -> np.ndarray:
    n = field.star_count
    return field.sizes[:n] * (1.0 + pulse_amplitude * np.sin(field.pulse_phases[:n]))


def draw_stars(canvas: Canvas, field: CelestialField, pointer: Optional[PointerState],
               pulse_amplitude: float, star_radius: float, render: dict):
    """
    Draw pulsing stars.

    Stars within `star_radius` of the pointer get a glow and a size/opacity
    boost, both scaled by 1 - distance / star_radius.
    """
    n = field.star_count
    if n == 0:
        return

    sizes = displayed_star_sizes(field, pulse_amplitude)
    distances = pointer_distances(field.star_positions, pointer)
    strength = np.clip(1.0 - distances / star_radius, 0.0, 1.0)

    for i in range(n):
        x, y = field.positions[i]
        color = _rgb(field.colors[i])
        opacity = field.opacities[i]

        if distances[i] < star_radius:
            s = strength[i]
            canvas.radial_glow(x, y, sizes[i] * render["star_glow_scale"] * (1.0 + s), color, s * opacity)
            canvas.fill_circle(
                x, y,
                sizes[i] * (1.0 + render["hover_size_boost"] * s),
                color,
                min(1.0, opacity + render["hover_opacity_boost"] * s)
            )
        else:
            canvas.fill_circle(x, y, sizes[i], color, opacity)


def draw_rocket(canvas: Canvas, rocket: Rocket):
    """Exhaust first, then fins, nozzles, hull, nose cone and windows."""
    if not rocket.visible:
        return

    flame = rocket.settings["exhaust_color"]
    for p in rocket.exhaust:
        canvas.radial_glow(p.x, p.y, p.size * 2.5, flame, p.opacity * 0.4)
        canvas.fill_circle(p.x, p.y, p.size, flame, p.opacity)

    x, y, s = rocket.x, rocket.y, rocket.size
    half = s * 0.25

    # Fins
    canvas.fill_polygon([(x - s, y - half), (x - s * 0.55, y - half), (x - s, y - s * 0.6)], ROCKET_TRIM, 1.0)
    canvas.fill_polygon([(x - s, y + half), (x - s * 0.55, y + half), (x - s, y + s * 0.6)], ROCKET_TRIM, 1.0)

    # Engine nozzles
    tail_x, tail_y = rocket.tail
    canvas.radial_glow(tail_x, tail_y, s * 0.5, flame, 0.6)
    canvas.fill_rect(tail_x, y - half * 0.8, s * 0.1, half * 0.6, ROCKET_NOZZLE, 1.0)
    canvas.fill_rect(tail_x, y + half * 0.2, s * 0.1, half * 0.6, ROCKET_NOZZLE, 1.0)

    # Hull and nose cone
    canvas.fill_rect(x - s, y - half, s * 1.6, half * 2, ROCKET_HULL, 1.0)
    canvas.fill_polygon([(x + s * 0.6, y - half), (x + s * 1.2, y), (x + s * 0.6, y + half)], ROCKET_TRIM, 1.0)

    # Windows
    for wx in (x + s * 0.15, x - s * 0.3):
        canvas.fill_circle(wx, y, s * 0.1, ROCKET_WINDOW, 1.0)
