"""
Main game orchestration class.

This module wires a renderer to the simulation: it owns the event bus, the
match and the managers, and runs the fixed-rate loop of
input → tick → events → render.
"""

import time
from typing import Optional, TypeVar

from ..core.data import StageConfig
from ..core.events import EventManager, LogMessage
from ..core.input_system import KeyConfigLoader
from ..core.renderer import Renderer
from .input_handler import InputHandler
from .managers.log_manager import LogManager
from .match import Match
from .render_builder import RenderBuilder


TManager = TypeVar("TManager")

# Ticks a press stays held on renderers that never report key releases
DEFAULT_PRESS_HOLD_TICKS = 6


class Game:
    """Main game orchestrator that coordinates the match and its collaborators."""

    def __init__(
        self,
        renderer: Renderer,
        stage: Optional[StageConfig] = None,
        key_config: Optional[KeyConfigLoader] = None,
        fps: Optional[int] = None,
    ):
        self.renderer = renderer
        self.stage = stage or StageConfig()
        self.key_config = key_config

        self.running = False
        self.fps = fps or renderer.config.target_fps
        self.frame_time = 1.0 / self.fps
        self.frames = 0

        self.event_manager = EventManager(enable_debug_logging=False)

        # Managers - will be initialized in initialize()
        self._log_manager: Optional[LogManager] = None
        self._match: Optional[Match] = None
        self._input_handler: Optional[InputHandler] = None
        self._render_builder: Optional[RenderBuilder] = None

    def _require_manager(self, manager: Optional[TManager], name: str) -> TManager:
        """Return the manager if initialized, otherwise raise a helpful error."""
        if manager is None:
            raise RuntimeError(f"{name} not initialized. Call initialize() first.")
        return manager

    @property
    def log_manager(self) -> LogManager:
        return self._require_manager(self._log_manager, "LogManager")

    @property
    def match(self) -> Match:
        return self._require_manager(self._match, "Match")

    @property
    def input_handler(self) -> InputHandler:
        return self._require_manager(self._input_handler, "InputHandler")

    @property
    def render_builder(self) -> RenderBuilder:
        return self._require_manager(self._render_builder, "RenderBuilder")

    def initialize(self) -> None:
        """Start the renderer and build the match and managers."""
        self.renderer.start()

        # Log manager first so it sees the match start messages
        self._log_manager = LogManager(event_manager=self.event_manager)
        self.event_manager.set_debug_callback(self.log_manager.debug)

        self._match = Match(stage=self.stage, event_manager=self.event_manager)

        hold_ticks = None if self.renderer.reports_key_release else DEFAULT_PRESS_HOLD_TICKS
        self._input_handler = InputHandler(
            match=self.match,
            event_manager=self.event_manager,
            key_config=self.key_config,
            log_manager=self.log_manager,
            hold_ticks=hold_ticks,
        )
        self.input_handler.on_quit = self._handle_quit

        self._render_builder = RenderBuilder(match=self.match, log_manager=self.log_manager)

        self._emit_log(f"Stage {self.stage.width:g}x{self.stage.height:g}, floor at y={self.stage.floor_y:g}")
        self.event_manager.process_events()

        self.running = True

    def run(self, max_frames: Optional[int] = None) -> None:
        """Main game loop.

        Args:
            max_frames: Stop after this many frames (None runs until quit)
        """
        self.initialize()

        last_frame = time.time()

        try:
            while self.running:
                current_time = time.time()
                if current_time - last_frame >= self.frame_time:
                    self.update()
                    self.render()
                    last_frame = current_time
                    if max_frames is not None and self.frames >= max_frames:
                        self.running = False
                else:
                    time.sleep(0.001)
        finally:
            self.cleanup()

    def update(self) -> None:
        """Process input and advance the simulation one tick."""
        events = self.renderer.get_input_events()
        self.input_handler.handle_input_events(events)

        if self.running:
            p1_intent, p2_intent = self.input_handler.current_intents()
            self.match.tick(p1_intent, p2_intent)
            self.input_handler.end_tick()

        self.event_manager.process_events()
        self.frames += 1

    def render(self) -> None:
        """Render the current frame."""
        self.renderer.draw(self.render_builder.build_render_context())

    def _handle_quit(self) -> None:
        self.running = False

    def _emit_log(self, message: str, category: str = "SYSTEM") -> None:
        tick = self._match.tick_count if self._match is not None else 0
        self.event_manager.publish(
            LogMessage(tick=tick, message=message, category=category, source="Game"),
            source="Game",
        )

    def cleanup(self) -> None:
        """Clean up resources."""
        self.event_manager.process_events()
        self.event_manager.shutdown()
        self.renderer.stop()
