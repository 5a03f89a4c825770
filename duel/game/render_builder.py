"""
Render context construction.

RenderBuilder is the one-way bridge from simulation to presentation: it reads
a MatchSnapshot and produces plain render data. It never holds a reference to
a live combatant.
"""

from typing import Optional, TYPE_CHECKING

from ..core.data import AttackState
from ..core.engine import MatchSnapshot
from ..core.entities.renderable import (
    BannerRenderData,
    CombatantRenderData,
    HealthBarRenderData,
    RenderContext,
    TextRenderData,
    WeaponRenderData,
)

if TYPE_CHECKING:
    from .managers.log_manager import LogManager
    from .match import Match


RESTART_HINT = "Press R to Restart"


class RenderBuilder:
    """Builds a RenderContext for the current tick."""

    def __init__(self, match: "Match", log_manager: Optional["LogManager"] = None, log_lines: int = 3):
        self.match = match
        self.log_manager = log_manager
        self.log_lines = log_lines

    def build_render_context(self) -> RenderContext:
        return self.build_from_snapshot(self.match.snapshot())

    def build_from_snapshot(self, snapshot: MatchSnapshot) -> RenderContext:
        context = RenderContext(
            stage_width=snapshot.stage_width,
            stage_height=snapshot.stage_height,
            floor_y=snapshot.floor_y,
            tick=snapshot.tick,
        )

        for index, combatant in enumerate(snapshot.combatants):
            swinging = combatant.attack_state is AttackState.SWINGING
            context.combatants.append(
                CombatantRenderData(
                    position=combatant.position,
                    name=combatant.name,
                    slot_index=index,
                    facing=combatant.facing,
                    width=combatant.width,
                    height=combatant.height,
                    is_attacking=swinging,
                )
            )
            context.weapons.append(
                WeaponRenderData(
                    anchor=combatant.weapon_anchor,
                    angle=combatant.swing_angle,
                    facing=combatant.facing,
                    slot_index=index,
                )
            )
            context.health_bars.append(
                HealthBarRenderData(
                    label=f"{combatant.name}: {combatant.health} HP",
                    health=combatant.health,
                    max_health=combatant.max_health,
                    slot_index=index,
                )
            )

        if snapshot.outcome.winner is not None:
            winner = snapshot.combatant(snapshot.outcome.winner)
            context.banner = BannerRenderData(title=f"{winner.name} Wins!", subtitle=RESTART_HINT)

        if self.log_manager is not None and self.log_lines > 0:
            for line in self.log_manager.get_formatted_messages(self.log_lines):
                context.texts.append(TextRenderData(text=line, style="log"))

        return context
