"""Text renderers.

TerminalRenderer is imported from its module directly since it needs a real
POSIX terminal (termios).
"""

from .simple_renderer import SimpleRenderer
from .stage_grid import StageGrid

__all__ = ["SimpleRenderer", "StageGrid"]
