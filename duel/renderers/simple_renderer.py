from typing import Optional

from ..core.renderer import Renderer, RendererConfig
from ..core.entities.renderable import RenderContext
from ..core.input import InputEvent, Key
from .stage_grid import StageGrid, health_bar


HUD_ROWS = 4


def default_demo_script() -> dict[int, list[InputEvent]]:
    """Scripted input: close the gap, trade blows, jump, then restart."""
    return {
        0: [InputEvent.key_press(Key.RIGHT), InputEvent.key_press(Key.A)],
        30: [InputEvent.key_release(Key.RIGHT), InputEvent.key_release(Key.A)],
        31: [InputEvent.key_press(Key.ENTER), InputEvent.key_press(Key.SPACE)],
        32: [InputEvent.key_release(Key.ENTER), InputEvent.key_release(Key.SPACE)],
        40: [InputEvent.key_press(Key.UP)],
        41: [InputEvent.key_release(Key.UP)],
        70: [InputEvent.key_press(Key.R)],
    }


class SimpleRenderer(Renderer):
    """Headless ASCII renderer with scripted demo input."""

    def __init__(
        self,
        config: Optional[RendererConfig] = None,
        demo_mode: bool = True,
        script: Optional[dict[int, list[InputEvent]]] = None,
        auto_quit_at: Optional[int] = 90,
        echo: bool = True,
    ):
        super().__init__(config)
        self._frame_count = 0
        self._auto_quit_at = auto_quit_at
        self._demo_mode = demo_mode  # Enable/disable scripted input
        self._script = script if script is not None else default_demo_script()
        self._echo = echo
        self.last_frame: list[str] = []

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def reports_key_release(self) -> bool:
        # Scripted input sends explicit releases
        return True

    def initialize(self) -> None:
        if self._echo:
            print(f"Initializing SimpleRenderer ({self.config.width}x{self.config.height})")
            print("=" * self.config.width)

    def cleanup(self) -> None:
        if self._echo:
            print("\nSimpleRenderer cleanup complete")

    def clear(self) -> None:
        pass

    def present(self) -> None:
        if self._echo:
            print(f"\n--- Frame {self._frame_count} ---")
            for line in self.last_frame:
                print(line)

    def render_frame(self, context: RenderContext) -> None:
        self._frame_count += 1

        rows = max(1, self.config.height - HUD_ROWS)
        grid = StageGrid(self.config.width, rows).draw(context)

        lines = []
        bars = "  ".join(
            f"{bar.label} {health_bar(bar.fraction, 10)}" for bar in context.health_bars
        )
        lines.append(bars[:self.config.width])
        lines.extend(grid.lines())

        if context.banner:
            lines.append(context.banner.title[:self.config.width])
            if context.banner.subtitle:
                lines.append(context.banner.subtitle[:self.config.width])

        for text in context.texts:
            lines.append(text.text[:self.config.width])

        self.last_frame = lines

    def get_input_events(self) -> list[InputEvent]:
        # Only generate scripted input in demo mode
        if not self._demo_mode:
            return []

        if self._auto_quit_at is not None and self._frame_count >= self._auto_quit_at:
            return [InputEvent.quit_event()]

        return list(self._script.get(self._frame_count, []))
