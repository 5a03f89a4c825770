"""Stage geometry and physics constants.

The simulation never reads module-level globals for its tuning values; a
single :class:`StageConfig` is handed to the match at construction and every
combatant created by that match shares it.
"""

import numbers
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml


@dataclass(frozen=True)
class StageConfig:
    """Immutable physics and stage settings for a match."""
    width: float = 1024.0
    height: float = 576.0
    floor_offset: float = 50.0          # Floor line distance from the bottom edge

    gravity: float = 0.5                # Added to velocity.y every tick
    move_speed: float = 5.0
    jump_speed: float = 12.0
    fast_fall_acceleration: float = 1.0  # Stacks with gravity while held
    max_fall_speed: Optional[float] = None  # Terminal velocity; None disables the cap

    combatant_width: float = 64.0
    combatant_height: float = 64.0
    max_health: int = 100
    attack_damage: int = 10

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Stage size must be positive, got {self.width}x{self.height}")
        if not 0 <= self.floor_offset < self.height:
            raise ValueError(f"Floor offset {self.floor_offset} must lie inside stage height {self.height}")
        if self.combatant_width <= 0 or self.combatant_height <= 0:
            raise ValueError("Combatant dimensions must be positive")
        if self.combatant_width > self.width:
            raise ValueError("Combatant is wider than the stage")
        for name in ("max_health", "attack_damage"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.max_health <= 0:
            raise ValueError(f"max_health must be positive, got {self.max_health}")
        if self.attack_damage < 0:
            raise ValueError(f"attack_damage cannot be negative, got {self.attack_damage}")
        if self.max_fall_speed is not None and self.max_fall_speed <= 0:
            raise ValueError(f"max_fall_speed must be positive when set, got {self.max_fall_speed}")

    @property
    def floor_y(self) -> float:
        """Y coordinate of the floor line."""
        return self.height - self.floor_offset

    @property
    def stage_width(self) -> float:
        return self.width

    def start_position(self, slot_index: int) -> tuple[float, float]:
        """Canonical spawn point for slot 0 or 1: thirds of the width, mid height."""
        if slot_index not in (0, 1):
            raise ValueError(f"Slot index must be 0 or 1, got {slot_index}")
        return ((slot_index + 1) * self.width / 3, self.height / 2)

    def with_overrides(self, **overrides: Any) -> "StageConfig":
        """Return a copy with some fields replaced."""
        return replace(self, **overrides)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StageConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown stage config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_stage_config(config_path: Optional[str] = None) -> StageConfig:
    """Load a StageConfig from a YAML file.

    The file holds a top-level ``stage`` mapping; any field that is omitted
    keeps its default. Without a path the bundled
    ``assets/config/stage.yaml`` is used, and defaults are returned if that
    file is absent.

    Raises:
        FileNotFoundError: An explicit path does not exist.
        ValueError: The YAML cannot be parsed or holds invalid values.
    """
    if config_path is None:
        project_root = Path(__file__).parent.parent.parent.parent
        default_file = project_root / "assets" / "config" / "stage.yaml"
        if not default_file.exists():
            return StageConfig()
        config_file = default_file
    elif os.path.isabs(config_path):
        config_file = Path(config_path)
    else:
        config_file = Path(config_path).resolve()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise FileNotFoundError(f"Stage config file not found: {config_file}")
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML stage config: {e}")

    if not isinstance(data, dict):
        raise ValueError("Stage config must be a mapping")

    stage_data = data.get("stage", {}) or {}
    if not isinstance(stage_data, dict):
        raise ValueError("'stage' section must be a mapping")

    try:
        return StageConfig.from_dict(stage_data)
    except TypeError as e:
        raise ValueError(f"Invalid stage config: {e}") from e
