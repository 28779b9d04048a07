"""Configuration for the starfield hero background."""

import math

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "Starfield",
    "target_fps": 60,  # 0 = uncapped
}

COLORS = {
    "background": (0.02, 0.02, 0.06, 1.0),
    "text": (230, 230, 230),
}

HUD = {
    "font_name": "monospace",
    "font_size": 16,
    "visible": True,
    "cache_size": 64,  # rasterized HUD strings kept between frames
}

# Pointer interaction radii in pixels
INTERACTION = {
    "connection_radius": 150.0,  # R1, measured to a connection's midpoint
    "star_radius": 100.0,        # R2, measured to a star's center
}

RENDER = {
    "connection_width": 0.6,
    "connection_dampening": 0.35,
    "highlight_width": 1.6,
    "highlight_opacity": 0.8,
    "highlight_glow_radius": 6.0,
    "star_glow_scale": 4.0,      # glow radius as a multiple of displayed size
    "hover_size_boost": 0.6,
    "hover_opacity_boost": 0.4,
    "circle_segments": 16,
}

ROCKET = {
    "first_launch_delay": (10.0, 25.0),  # seconds after initialize
    "cooldown": (20.0, 50.0),            # seconds between appearances
    "band": (0.15, 0.6),                 # vertical band as fractions of height
    "speed": (1.5, 3.0),                 # px per tick
    "size": (16.0, 26.0),                # body length scale in px
    "margin": 120.0,                     # off-screen distance on both sides
    "exhaust_probability": 0.7,          # per tick
    "exhaust_batch": (1, 3),             # particles per emission, inclusive
    "exhaust_size": (1.0, 3.0),
    "exhaust_opacity": (0.5, 0.9),
    "exhaust_speed": (0.4, 1.4),
    "exhaust_jitter": 0.4,
    "exhaust_decay": 0.02,
    "exhaust_color": (255, 170, 80),
}

TAU = 2.0 * math.pi

# =============================================================================
# PRESETS - one engine, three looks
# =============================================================================

PRESETS = {
    # Stars, dust, constellations and the occasional rocket
    "hero": {
        "star_density": 9600.0,   # px^2 per star (800x600 -> 50 stars)
        "max_stars": 150,
        "dust_density": 3200.0,
        "max_dust": 220,
        "star_palette": [
            (255, 255, 255),
            (200, 220, 255),
            (255, 240, 200),
            (180, 200, 255),
            (255, 210, 170),
        ],
        "dust_palette": [
            (150, 160, 200),
            (120, 130, 170),
            (170, 150, 200),
        ],
        "star_size": (0.6, 2.0),
        "star_opacity": (0.5, 1.0),
        "dust_size": (0.3, 1.0),
        "dust_opacity": (0.08, 0.3),
        "pulse_speed": (0.01, 0.03),
        "pulse_amplitude": 0.3,
        "connection_threshold_ratio": 0.12,
        "max_connections_per_star": 3,
        "max_connections": 80,
        "rocket": True,
    },
    # White specks linked when close, nothing else
    "classic": {
        "star_density": 8000.0,
        "max_stars": 100,
        "dust_density": 0.0,      # 0 disables dust
        "max_dust": 0,
        "star_palette": [(255, 255, 255)],
        "dust_palette": [],
        "star_size": (1.0, 3.0),
        "star_opacity": (0.2, 0.5),
        "dust_size": (0.0, 0.0),
        "dust_opacity": (0.0, 0.0),
        "pulse_speed": (0.005, 0.015),
        "pulse_amplitude": 0.15,
        "connection_threshold_ratio": 0.08,
        "max_connections_per_star": 4,
        "max_connections": 120,
        "rocket": False,
    },
    # Violet haze with heavy dust
    "nebula": {
        "star_density": 12000.0,
        "max_stars": 90,
        "dust_density": 1500.0,
        "max_dust": 400,
        "star_palette": [
            (230, 200, 255),
            (255, 180, 230),
            (190, 170, 255),
        ],
        "dust_palette": [
            (120, 80, 160),
            (90, 70, 150),
            (150, 90, 170),
            (80, 100, 170),
        ],
        "star_size": (0.8, 2.2),
        "star_opacity": (0.6, 1.0),
        "dust_size": (0.4, 1.4),
        "dust_opacity": (0.05, 0.25),
        "pulse_speed": (0.008, 0.025),
        "pulse_amplitude": 0.4,
        "connection_threshold_ratio": 0.1,
        "max_connections_per_star": 2,
        "max_connections": 50,
        "rocket": False,
    },
}

DEFAULT_PRESET = "hero"
