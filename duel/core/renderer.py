"""Renderer interface.

A renderer turns a RenderContext into output and the device's keyboard into
InputEvents. It never reads the match directly.
"""

from abc import ABC, abstractmethod
from typing import Optional
from dataclasses import dataclass

from .entities.renderable import RenderContext
from .input import InputEvent


@dataclass
class RendererConfig:
    width: int = 80
    height: int = 24
    title: str = "Duel"
    target_fps: int = 60

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Renderer size must be positive, got {self.width}x{self.height}")
        if self.target_fps <= 0:
            raise ValueError(f"target_fps must be positive, got {self.target_fps}")


class Renderer(ABC):

    def __init__(self, config: Optional[RendererConfig] = None):
        self.config = config or RendererConfig()
        self._running = False

    @abstractmethod
    def initialize(self) -> None:
        """Acquire the output device."""

    @abstractmethod
    def cleanup(self) -> None:
        """Release the output device."""

    @abstractmethod
    def render_frame(self, context: RenderContext) -> None:
        """Compose one frame into the renderer's back buffer."""

    @abstractmethod
    def get_input_events(self) -> list[InputEvent]:
        """Keyboard input received since the previous call."""

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def present(self) -> None:
        pass

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def reports_key_release(self) -> bool:
        """Whether get_input_events() emits KEY_RELEASE events.

        Terminals only see key presses; the input layer then holds each press
        for a fixed number of ticks instead of waiting for a release.
        """
        return False

    def draw(self, context: RenderContext) -> None:
        """Clear, compose and present one frame."""
        self.clear()
        self.render_frame(context)
        self.present()

    def start(self) -> None:
        self._running = True
        self.initialize()

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self.cleanup()
