"""Character-grid projection of the stage shared by the text renderers."""

import math
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from ..core.data import Facing, Vector2
from ..core.entities.renderable import RenderContext, WeaponRenderData


COMBATANT_SYMBOLS = ("1", "2")
FLOOR_SYMBOL = "="
EMPTY = " "


class StageGrid:
    """Maps stage coordinates onto a ``columns`` x ``rows`` character grid."""

    def __init__(self, columns: int, rows: int):
        if columns < 1 or rows < 1:
            raise ValueError(f"Grid must be at least 1x1, got {columns}x{rows}")
        self.columns = columns
        self.rows = rows
        self.cells: list[list[str]] = [[EMPTY] * columns for _ in range(rows)]
        self.owners: list[list[Optional[int]]] = [[None] * columns for _ in range(rows)]

    def _scale(self, context: RenderContext) -> NDArray[np.float64]:
        return np.array([self.columns / context.stage_width, self.rows / context.stage_height])

    def project(self, point: Vector2, context: RenderContext) -> tuple[int, int]:
        """Stage point to (column, row), clamped onto the grid."""
        cell = np.floor(point.to_numpy() * self._scale(context))
        cell = np.clip(cell, [0, 0], [self.columns - 1, self.rows - 1])
        return int(cell[0]), int(cell[1])

    def project_size(self, width: float, height: float, context: RenderContext) -> tuple[int, int]:
        """Stage extent to a cell count, never smaller than one cell."""
        cells = np.maximum(np.round(np.array([width, height]) * self._scale(context)), 1)
        return int(cells[0]), int(cells[1])

    def put(self, column: int, row: int, symbol: str, owner: Optional[int] = None) -> None:
        if 0 <= column < self.columns and 0 <= row < self.rows:
            self.cells[row][column] = symbol
            self.owners[row][column] = owner

    def draw(self, context: RenderContext) -> "StageGrid":
        """Rasterise floor, combatants and weapons from a render context."""
        if not context.has_stage():
            return self

        _, floor_row = self.project(Vector2(0, context.floor_y), context)
        for column in range(self.columns):
            for row in range(floor_row, self.rows):
                self.put(column, row, FLOOR_SYMBOL)

        for combatant in context.combatants:
            cols, rows = self.project_size(combatant.width, combatant.height, context)
            top_left = Vector2(combatant.position.x - combatant.width / 2,
                               combatant.position.y - combatant.height / 2)
            start_col, start_row = self.project(top_left, context)
            symbol = COMBATANT_SYMBOLS[combatant.slot_index % len(COMBATANT_SYMBOLS)]
            for dy in range(rows):
                for dx in range(cols):
                    self.put(start_col + dx, start_row + dy, symbol, combatant.slot_index)

        for weapon in context.weapons:
            column, row = self.project(weapon.anchor, context)
            self.put(column, row, weapon_symbol(weapon), weapon.slot_index)

        return self

    def lines(self) -> list[str]:
        return ["".join(row) for row in self.cells]


def weapon_symbol(weapon: WeaponRenderData) -> str:
    """Pick a blade glyph for the swing angle, mirrored when facing left."""
    if weapon.angle < -math.pi / 8:
        symbol = "/"
    elif weapon.angle < math.pi / 4:
        symbol = "-"
    else:
        symbol = "\\"
    if weapon.facing is Facing.LEFT and symbol != "-":
        symbol = "\\" if symbol == "/" else "/"
    return symbol


def health_bar(fraction: float, width: int = 20) -> str:
    filled = int(round(max(0.0, min(1.0, fraction)) * width))
    return "[" + "#" * filled + "." * (width - filled) + "]"
