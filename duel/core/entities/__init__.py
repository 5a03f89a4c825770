"""Render data structures passed from the game to renderers."""

from .renderable import (
    CombatantRenderData,
    WeaponRenderData,
    HealthBarRenderData,
    TextRenderData,
    BannerRenderData,
    RenderContext,
)

__all__ = [
    "CombatantRenderData",
    "WeaponRenderData",
    "HealthBarRenderData",
    "TextRenderData",
    "BannerRenderData",
    "RenderContext",
]
