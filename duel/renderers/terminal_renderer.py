import sys
import termios
import tty
import select
from typing import Optional

from ..core.renderer import Renderer, RendererConfig
from ..core.entities.renderable import RenderContext
from ..core.input import InputEvent, Key
from .stage_grid import FLOOR_SYMBOL, StageGrid, health_bar


class TerminalRenderer(Renderer):
    """ANSI terminal renderer reading raw key presses from stdin.

    Terminals report presses and auto-repeat but never releases, so the game
    treats each press as held for a few ticks.
    """

    def __init__(self, config: Optional[RendererConfig] = None):
        super().__init__(config)
        self._old_settings = None
        self._buffer: list[str] = []

        # Per-slot colours (ANSI codes)
        self.slot_colors = {
            0: "\033[94m",    # Player 1 - Blue
            1: "\033[91m",    # Player 2 - Red
        }

        self.terminal_codes = {
            "reset": "\033[0m",
            "clear_screen": "\033[2J",
            "cursor_home": "\033[H",
            "hide_cursor": "\033[?25l",
            "show_cursor": "\033[?25h",
            "floor": "\033[32m",            # Green
            "text_dim": "\033[37m",
            "text_bright": "\033[1;97m",
            "text_warning": "\033[93m",
        }

        self.hud_rows = 2
        self.footer_rows = 4

    def initialize(self) -> None:
        self._old_settings = termios.tcgetattr(sys.stdin)
        tty.setraw(sys.stdin.fileno())
        print(self.terminal_codes["hide_cursor"], end='', flush=True)
        self.clear()

    def cleanup(self) -> None:
        if self._old_settings:
            termios.tcsetattr(sys.stdin, termios.TCSADRAIN, self._old_settings)
        print(self.terminal_codes["show_cursor"], end='', flush=True)
        print(self.terminal_codes["reset"], end='', flush=True)

    def clear(self) -> None:
        print(self.terminal_codes["cursor_home"], end='', flush=True)

    def present(self) -> None:
        print(self.terminal_codes["cursor_home"], end='')
        # Raw mode needs explicit carriage returns
        for line in self._buffer:
            print(line + "\033[K\r\n", end='')
        sys.stdout.flush()
        self._buffer.clear()

    def render_frame(self, context: RenderContext) -> None:
        self._buffer.clear()
        codes = self.terminal_codes

        bar_parts = []
        for bar in context.health_bars:
            color = self.slot_colors.get(bar.slot_index, "")
            bar_parts.append(f"{color}{bar.label} {health_bar(bar.fraction, 20)}{codes['reset']}")
        self._buffer.append("   ".join(bar_parts))
        self._buffer.append(f"{codes['text_dim']}tick {context.tick}{codes['reset']}")

        rows = max(1, self.config.height - self.hud_rows - self.footer_rows)
        grid = StageGrid(self.config.width, rows).draw(context)

        for row_cells, row_owners in zip(grid.cells, grid.owners):
            line = []
            for symbol, owner in zip(row_cells, row_owners):
                if owner is not None:
                    line.append(self.slot_colors.get(owner, "") + symbol + codes["reset"])
                elif symbol == FLOOR_SYMBOL:
                    line.append(codes["floor"] + symbol + codes["reset"])
                else:
                    line.append(symbol)
            self._buffer.append("".join(line))

        if context.banner:
            title = context.banner.title.center(self.config.width)
            self._buffer.append(f"{codes['text_bright']}{title}{codes['reset']}")
            if context.banner.subtitle:
                self._buffer.append(context.banner.subtitle.center(self.config.width))
        for text in context.texts[-(self.footer_rows - 2):]:
            self._buffer.append(f"{codes['text_dim']}{text.text[:self.config.width]}{codes['reset']}")

    def get_input_events(self) -> list[InputEvent]:
        events = []

        # Drain everything typed since the last frame
        while sys.stdin in select.select([sys.stdin], [], [], 0)[0]:
            key = sys.stdin.read(1)

            if key == '\x1b':
                if sys.stdin in select.select([sys.stdin], [], [], 0)[0]:
                    next_chars = sys.stdin.read(2)
                else:
                    next_chars = ''

                arrows = {'[A': Key.UP, '[B': Key.DOWN, '[C': Key.RIGHT, '[D': Key.LEFT}
                events.append(InputEvent.key_press(arrows.get(next_chars, Key.ESCAPE)))
            elif key == '\x03':
                events.append(InputEvent.quit_event())  # Ctrl+C in raw mode
            elif key in ('\r', '\n'):
                events.append(InputEvent.key_press(Key.ENTER))
            elif key == ' ':
                events.append(InputEvent.key_press(Key.SPACE))
            elif key == '\t':
                events.append(InputEvent.key_press(Key.TAB))
            elif key.isascii() and key.isalnum():
                events.append(InputEvent.key_press(Key.parse(key) or Key.UNKNOWN, shift=key.isupper()))

        return events
