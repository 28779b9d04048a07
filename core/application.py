"""Main application class that ties everything together."""

import time
import pygame
from pygame.locals import *

from config import starfield as config
from .frame_loop import FrameLoop
from .input_handler import InputHandler
from rendering import TextRenderer, acquire_canvas
from starfield import StarfieldEngine
from starfield.generation import warmup

PRESET_KEYS = {
    K_1: "hero",
    K_2: "classic",
    K_3: "nebula",
}


class Application:
    """Hosts one starfield engine in a resizable OpenGL window."""

    def __init__(self, preset_name: str = config.DEFAULT_PRESET):
        pygame.init()
        width, height = config.WINDOW["width"], config.WINDOW["height"]
        try:
            pygame.display.set_mode((width, height), DOUBLEBUF | OPENGL | RESIZABLE)
            self.display_ready = True
        except pygame.error as e:
            print(f"[App] OpenGL window unavailable: {e}")
            self.display_ready = False
        pygame.display.set_caption(config.WINDOW["title"])

        # Host components
        self.frame_loop = FrameLoop()
        self.input_handler = InputHandler(width, height)
        self.canvas = acquire_canvas(width, height) if self.display_ready else None
        self.text_renderer = TextRenderer() if self.canvas is not None else None

        # Canvas must follow the window before the engine reseeds
        if self.canvas is not None:
            self.input_handler.subscribe("resize", self.canvas.resize)
        self.input_handler.subscribe("key", self._on_key)

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0
        self.show_hud = config.HUD["visible"]

        print("[App] Compiling kernels...")
        warmup()
        self.preset_name = preset_name
        self.engine = self._start_engine(preset_name)
        print("[App] Ready!")

    def _start_engine(self, preset_name: str) -> StarfieldEngine:
        engine = StarfieldEngine(config.PRESETS[preset_name])
        engine.initialize(self.canvas, self.frame_loop, self.input_handler)
        return engine

    def _on_key(self, key: int):
        if key == K_h:
            self.show_hud = not self.show_hud
        elif key in PRESET_KEYS and PRESET_KEYS[key] != self.preset_name:
            self.preset_name = PRESET_KEYS[key]
            print(f"[App] Switching to preset '{self.preset_name}'")
            self.engine.shutdown()
            self.engine = self._start_engine(self.preset_name)

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

    def _render_hud(self):
        if self.canvas is None or not self.show_hud:
            return

        engine = self.engine
        lines = [
            f"Preset: {self.preset_name}  |  FPS: {self.fps:.0f}",
            f"Stars: {engine.field.star_count}  Dust: {engine.field.dust_count}  "
            f"Links: {len(engine.connections)} ({int(engine.connections.highlighted.sum())} lit)",
        ]
        if engine.rocket is not None:
            lines.append(f"Rocket: {engine.rocket.state.value}")
        lines.append("1/2/3: preset  H: hud  ESC: quit")
        self.text_renderer.draw_lines(lines, 10, 10)

    def run(self):
        """Main application loop. Returns immediately without a window."""
        if not self.display_ready:
            self.running = False

        while self.running:
            self.clock.tick(config.WINDOW["target_fps"])
            self.fps = self.clock.get_fps()

            self._handle_events()
            self.frame_loop.run_frame(time.monotonic())
            self._render_hud()

            pygame.display.flip()

        self.engine.shutdown()
        pygame.quit()
