from dataclasses import dataclass, field
from typing import Optional

from ..data import Facing, Vector2


@dataclass
class CombatantRenderData:
    """Combatant data for rendering and display.

    This is the OUTPUT data structure used by renderers to draw a fighter.
    It holds only visual information in stage coordinates.
    """
    position: Vector2           # Centre point on the stage
    name: str
    slot_index: int             # 0 or 1, for colour/symbol selection
    facing: Facing
    width: float
    height: float
    is_attacking: bool = False


@dataclass
class WeaponRenderData:
    anchor: Vector2             # Front edge of the wielder at centre height
    angle: float                # Radians, mirrored by the renderer when facing left
    facing: Facing
    slot_index: int


@dataclass
class HealthBarRenderData:
    label: str
    health: int
    max_health: int
    slot_index: int

    @property
    def fraction(self) -> float:
        if self.max_health <= 0:
            return 0.0
        return max(0.0, min(1.0, self.health / self.max_health))


@dataclass
class TextRenderData:
    text: str
    style: str = "normal"


@dataclass
class BannerRenderData:
    """Centred overlay message, e.g. the winner announcement."""
    title: str
    subtitle: Optional[str] = None


@dataclass
class RenderContext:
    """Everything a renderer needs for one frame."""
    stage_width: float = 0.0
    stage_height: float = 0.0
    floor_y: float = 0.0
    tick: int = 0

    combatants: list[CombatantRenderData] = field(default_factory=list)
    weapons: list[WeaponRenderData] = field(default_factory=list)
    health_bars: list[HealthBarRenderData] = field(default_factory=list)
    texts: list[TextRenderData] = field(default_factory=list)
    banner: Optional[BannerRenderData] = None

    def has_stage(self) -> bool:
        return self.stage_width > 0 and self.stage_height > 0
