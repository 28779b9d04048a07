from __future__ import annotations

import numpy as np
import pytest
import pygame

from config import starfield as config
from core.frame_loop import FrameLoop
from core.input_handler import InputHandler
from starfield.engine import StarfieldEngine
from starfield.generation import connection_threshold
from starfield.rocket import RocketState

from conftest import ManualClock, RecordingCanvas


def _started(canvas, frame_loop, clock, preset=None, seed=11, input_handler=None) -> StarfieldEngine:
    engine = StarfieldEngine(preset, clock=clock, seed=seed)
    assert engine.initialize(canvas, frame_loop, input_handler)
    return engine


def test_initialize_generates_field_and_schedules_first_frame(canvas, frame_loop, clock) -> None:
    handler = InputHandler(800, 600)
    engine = _started(canvas, frame_loop, clock, input_handler=handler)

    assert engine.is_running
    assert engine.field.star_count == 50
    assert engine.field.dust_count == 150
    assert frame_loop.pending == 1
    for stream in ("pointer_move", "pointer_leave", "resize"):
        assert handler.listener_count(stream) == 1

    threshold = connection_threshold(800, engine.preset)
    for i, j in engine.connections.pairs:
        assert np.hypot(*(engine.field.positions[i] - engine.field.positions[j])) < threshold
    assert not engine.connections.highlighted.any()

    assert engine.rocket is not None
    assert engine.rocket.state is RocketState.DORMANT
    assert clock.now + 10.0 <= engine.rocket.next_launch_time <= clock.now + 25.0


def test_missing_canvas_leaves_engine_idle(frame_loop, clock) -> None:
    handler = InputHandler(800, 600)
    engine = StarfieldEngine(clock=clock)

    assert engine.initialize(None, frame_loop, handler) is False
    assert not engine.is_running
    assert frame_loop.pending == 0
    assert handler.listener_count("pointer_move") == 0
    assert handler.listener_count("resize") == 0

    engine.shutdown()


def test_no_highlight_before_pointer_moves(canvas, frame_loop, clock) -> None:
    engine = _started(canvas, frame_loop, clock)
    for _ in range(5):
        engine.tick()
    assert not engine.connections.highlighted.any()
    assert "radial_glow" not in canvas.names()


def test_pulse_phase_advances_and_wraps(canvas, frame_loop, clock) -> None:
    engine = _started(canvas, frame_loop, clock)
    initial = engine.field.pulse_phases.copy()
    speeds = engine.field.pulse_speeds.copy()

    ticks = 400
    for _ in range(ticks):
        engine.tick()

    phases = engine.field.pulse_phases
    assert np.all(phases >= 0) and np.all(phases < config.TAU)
    expected = np.mod(initial + ticks * speeds, config.TAU)
    # compare on the circle so values either side of 0 / 2*pi match
    diff = np.mod(phases - expected + np.pi, config.TAU) - np.pi
    assert np.allclose(diff, 0.0, atol=1e-9)


def test_pointer_near_midpoint_highlights_on_next_tick(canvas, frame_loop, clock) -> None:
    engine = _started(canvas, frame_loop, clock, seed=5)
    assert len(engine.connections) > 0

    i, j = engine.connections.pairs[0]
    mid = (engine.field.positions[i] + engine.field.positions[j]) / 2
    engine.on_pointer_move(float(mid[0]), float(mid[1]))
    assert not engine.connections.highlighted.any()

    engine.tick()
    assert engine.connections.highlighted[0]

    engine.on_pointer_leave()
    engine.tick()
    assert not engine.connections.highlighted.any()


def test_pointer_on_star_draws_glow(canvas, frame_loop, clock) -> None:
    engine = _started(canvas, frame_loop, clock)
    x, y = engine.field.object(0).position

    engine.on_pointer_move(x, y)
    canvas.calls.clear()
    engine.tick()

    glows = [c for c in canvas.calls if c[0] == "radial_glow" and (c[1], c[2]) == (x, y)]
    assert len(glows) == 1
    assert glows[0][5] > 0


def test_frame_layers_dust_then_connections_then_stars(canvas, frame_loop, clock) -> None:
    engine = _started(canvas, frame_loop, clock, seed=5)
    canvas.calls.clear()
    engine.tick()

    names = canvas.names()
    dust = engine.field.dust_count
    stars = engine.field.star_count
    links = len(engine.connections)

    assert names[0] == "clear"
    assert names[1:1 + dust] == ["fill_circle"] * dust
    assert names[1 + dust:1 + dust + links] == ["line"] * links
    assert names[1 + dust + links:] == ["fill_circle"] * stars


def test_frame_loop_drives_ticks(canvas, frame_loop, clock) -> None:
    _started(canvas, frame_loop, clock)

    frame_loop.run_frame(0.0)
    frame_loop.run_frame(0.016)

    assert canvas.names().count("clear") == 2
    assert frame_loop.pending == 1


def test_shutdown_is_idempotent(canvas, frame_loop, clock) -> None:
    handler = InputHandler(800, 600)
    engine = _started(canvas, frame_loop, clock, input_handler=handler)

    engine.shutdown()
    engine.shutdown()

    assert not engine.is_running
    assert frame_loop.pending == 0
    for stream in ("pointer_move", "pointer_leave", "resize"):
        assert handler.listener_count(stream) == 0

    frame_loop.run_frame(1.0)
    assert canvas.calls == []


def test_shutdown_from_earlier_callback_in_same_frame(canvas, clock) -> None:
    frame_loop = FrameLoop()
    engine = StarfieldEngine(clock=clock, seed=1)
    frame_loop.request_frame(lambda ts: engine.shutdown())
    engine.initialize(canvas, frame_loop)

    frame_loop.run_frame(0.0)

    assert canvas.calls == []
    assert frame_loop.pending == 0


def test_resize_stream_reseeds_field(canvas, frame_loop, clock) -> None:
    handler = InputHandler(800, 600)
    engine = _started(canvas, frame_loop, clock, input_handler=handler)
    old_positions = engine.field.positions

    handler.handle_event(pygame.event.Event(pygame.VIDEORESIZE, w=400, h=300, size=(400, 300)))

    assert engine.field.positions is not old_positions
    assert engine.field.star_count == 12
    assert np.all(engine.field.positions[:, 0] <= 400)
    assert np.all(engine.field.positions[:, 1] <= 300)


def test_zero_size_skips_generation_until_next_resize(canvas, frame_loop, clock) -> None:
    engine = _started(canvas, frame_loop, clock)

    engine.resize(0, 600)
    assert len(engine.field) == 0
    assert len(engine.connections) == 0

    clock.advance(60.0)
    engine.tick()
    assert engine.rocket.state is RocketState.DORMANT
    assert canvas.names()[-1] == "clear"

    engine.resize(800, 600)
    assert engine.field.star_count == 50


def test_rocket_launches_through_engine_tick(canvas, frame_loop, clock) -> None:
    engine = _started(canvas, frame_loop, clock)
    clock.advance(30.0)

    engine.tick()
    assert engine.rocket.state is RocketState.FLYING

    canvas.calls.clear()
    engine.tick()
    assert "fill_polygon" in canvas.names()
    assert "fill_rect" in canvas.names()


def test_classic_preset_has_no_rocket(canvas, frame_loop, clock) -> None:
    engine = _started(canvas, frame_loop, clock, preset=config.PRESETS["classic"])
    assert engine.rocket is None
    assert engine.field.dust_count == 0


def test_engines_are_independent(frame_loop, clock) -> None:
    first_canvas, second_canvas = RecordingCanvas(800, 600), RecordingCanvas(400, 300)
    first = _started(first_canvas, frame_loop, clock, seed=1)
    second = _started(second_canvas, frame_loop, ManualClock(), seed=2)

    first.shutdown()
    frame_loop.run_frame(0.0)

    assert first_canvas.calls == []
    assert second_canvas.names().count("clear") == 1
    assert second.is_running


def test_star_radius_follows_pulse(canvas, frame_loop, clock) -> None:
    from starfield.render import displayed_star_sizes

    engine = _started(canvas, frame_loop, clock)
    canvas.calls.clear()
    engine.tick()

    field = engine.field
    star_calls = [c for c in canvas.calls if c[0] == "fill_circle"][-field.star_count:]
    amplitude = engine.preset["pulse_amplitude"]
    expected = field.sizes[:field.star_count] * (1 + amplitude * np.sin(field.pulse_phases[:field.star_count]))

    assert np.allclose([c[3] for c in star_calls], expected)
    assert np.allclose(displayed_star_sizes(field, amplitude), expected)
    assert np.allclose([c[5] for c in star_calls], field.opacities[:field.star_count])


def test_idle_connections_use_dampened_base_opacity(canvas, frame_loop, clock) -> None:
    engine = _started(canvas, frame_loop, clock, seed=5)
    canvas.calls.clear()
    engine.tick()

    lines = [c for c in canvas.calls if c[0] == "line"]
    assert len(lines) == len(engine.connections) > 0
    for k, call in enumerate(lines):
        assert call[6] == pytest.approx(engine.connections.base_opacity[k] * config.RENDER["connection_dampening"])
        assert call[7] == config.RENDER["connection_width"]


def test_highlighted_connection_is_wider_brighter_and_glows(canvas, frame_loop, clock) -> None:
    engine = _started(canvas, frame_loop, clock, seed=5)
    i, j = engine.connections.pairs[0]
    (x1, y1), (x2, y2) = engine.field.positions[i], engine.field.positions[j]
    mid_x, mid_y = (x1 + x2) / 2, (y1 + y2) / 2

    engine.on_pointer_move(float(mid_x), float(mid_y))
    canvas.calls.clear()
    engine.tick()

    lines = [c for c in canvas.calls if c[0] == "line" and c[1:5] == (x1, y1, x2, y2)]
    render = config.RENDER
    assert [(c[6], c[7]) for c in lines] == [
        (pytest.approx(render["highlight_opacity"] * 0.25), render["highlight_width"] * 3),
        (render["highlight_opacity"], render["highlight_width"]),
    ]
    glows = [c for c in canvas.calls if c[0] == "radial_glow" and c[1:3] == (mid_x, mid_y)]
    assert len(glows) == 1
    assert glows[0][3] == render["highlight_glow_radius"]


def test_dust_ignores_the_pointer(canvas, frame_loop, clock) -> None:
    engine = _started(canvas, frame_loop, clock)
    d = engine.field.star_count
    speck = engine.field.object(d)
    x, y = speck.position

    engine.on_pointer_move(x, y)
    canvas.calls.clear()
    engine.tick()

    dust_call = canvas.calls[1]
    assert dust_call[0] == "fill_circle"
    assert (dust_call[1], dust_call[2]) == (x, y)
    assert dust_call[3] == speck.size
    assert dust_call[5] == speck.opacity
    assert not [c for c in canvas.calls if c[0] == "radial_glow" and (c[1], c[2]) == (x, y)]
