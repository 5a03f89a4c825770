"""
Configuration loader for key mappings.

This module handles loading and parsing of YAML configuration files for the
per-player key bindings and the global session commands.
"""
import os
import yaml
from typing import Any, Callable, Optional, TypeVar
from pathlib import Path

from ..data import CombatantSlot
from ..input import Key
from .actions import GlobalAction, PlayerAction, parse_global_action, parse_player_action


TAction = TypeVar("TAction", PlayerAction, GlobalAction)


# YAML section names for each slot
PLAYER_SECTIONS = {
    CombatantSlot.PLAYER_ONE: "player_one",
    CombatantSlot.PLAYER_TWO: "player_two",
}


class KeyConfigLoader:
    """Loads and manages key mapping configurations from YAML files."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or "assets/config/key_mappings.yaml"
        self._config: dict[str, Any] = {}
        self._player_mappings: dict[CombatantSlot, dict[Key, PlayerAction]] = {}
        self._global_mappings: dict[Key, GlobalAction] = {}
        self._active_scheme: str = "default"
        self.warnings: list[str] = []

    def load_config(self) -> bool:
        """
        Load configuration from the YAML file.

        Returns:
            bool: True if config was loaded successfully; on failure the
            built-in fallback bindings are active
        """
        self.warnings.clear()
        try:
            if not os.path.isabs(self.config_path):
                # Relative to project root
                project_root = Path(__file__).parent.parent.parent.parent
                config_file = project_root / self.config_path
            else:
                config_file = Path(self.config_path)

            if not config_file.exists():
                self._warn(f"Key config file not found: {config_file}")
                self._load_fallback_config()
                return False

            with open(config_file, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            config_section = self._config.get('config', {}) or {}
            self._active_scheme = config_section.get('active_scheme', 'default')

            self._parse_key_mappings()

            return True

        except (OSError, yaml.YAMLError, AttributeError) as e:
            self._warn(f"Error loading key config: {e}")
            self._load_fallback_config()
            return False

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        print(f"Warning: {message}")

    def _section_mappings(self, section_config: Any, overrides: dict, section: str) -> dict:
        """Base mappings of a section with the active scheme's overrides applied."""
        merged = dict(((section_config or {}).get('mappings', {}) or {}))
        merged.update(overrides.get(section, {}) or {})
        return merged

    def _bind(self, mappings: dict, parse_action: Callable[[str], TAction], section: str) -> dict[Key, TAction]:
        bound: dict[Key, TAction] = {}
        for key_str, action_name in mappings.items():
            if action_name is None:
                continue  # unbound by a scheme override
            key = self._parse_key_string(str(key_str))
            if key is None:
                continue
            try:
                bound[key] = parse_action(str(action_name))
            except ValueError:
                self._warn(f"Unknown action '{action_name}' for {section}")
        return bound

    def _parse_key_mappings(self) -> None:
        """Rebuild the bindings from the loaded config and active scheme."""
        players_config = self._config.get('players', {}) or {}
        schemes_config = self._config.get('schemes', {}) or {}
        overrides = {}
        if self._active_scheme != 'default' and self._active_scheme in schemes_config:
            overrides = schemes_config[self._active_scheme].get('overrides', {}) or {}

        self._player_mappings = {
            slot: self._bind(
                self._section_mappings(players_config.get(section), overrides, section),
                parse_player_action,
                section,
            )
            for slot, section in PLAYER_SECTIONS.items()
        }
        self._global_mappings = self._bind(
            self._section_mappings(self._config.get('global'), overrides, 'global'),
            parse_global_action,
            'global',
        )

    def _parse_key_string(self, key_str: str) -> Optional[Key]:
        """
        Parse a key string into a Key enum.

        Args:
            key_str: String representation of the key

        Returns:
            Key: The corresponding Key enum, or None if invalid
        """
        key = Key.parse(key_str)
        if key is None:
            self._warn(f"Unknown key '{key_str.strip()}' in config")
        return key

    def get_player_mappings(self, slot: CombatantSlot) -> dict[Key, PlayerAction]:
        """Key to action mapping for one combatant."""
        return dict(self._player_mappings.get(slot, {}))

    def get_global_mappings(self) -> dict[Key, GlobalAction]:
        return dict(self._global_mappings)

    def get_all_player_mappings(self) -> dict[CombatantSlot, dict[Key, PlayerAction]]:
        return {slot: dict(mapping) for slot, mapping in self._player_mappings.items()}

    def get_available_schemes(self) -> list[str]:
        schemes = self._config.get('schemes', {}) or {}
        return ['default'] + [name for name in schemes.keys() if name != 'default']

    def get_active_scheme(self) -> str:
        return self._active_scheme

    def set_active_scheme(self, scheme_name: str) -> bool:
        """
        Set the active key scheme.

        Returns:
            bool: True if scheme was set successfully
        """
        if scheme_name not in self.get_available_schemes():
            return False

        self._active_scheme = scheme_name
        self._parse_key_mappings()
        return True

    def _load_fallback_config(self) -> None:
        """Load hardcoded fallback configuration if file loading fails."""
        self._active_scheme = "default"
        self._player_mappings = {
            CombatantSlot.PLAYER_ONE: {
                Key.LEFT: PlayerAction.MOVE_LEFT,
                Key.RIGHT: PlayerAction.MOVE_RIGHT,
                Key.UP: PlayerAction.JUMP,
                Key.DOWN: PlayerAction.FAST_FALL,
                Key.ENTER: PlayerAction.ATTACK,
            },
            CombatantSlot.PLAYER_TWO: {
                Key.A: PlayerAction.MOVE_LEFT,
                Key.D: PlayerAction.MOVE_RIGHT,
                Key.W: PlayerAction.JUMP,
                Key.S: PlayerAction.FAST_FALL,
                Key.SPACE: PlayerAction.ATTACK,
            },
        }
        self._global_mappings = {
            Key.R: GlobalAction.RESTART,
            Key.Q: GlobalAction.QUIT,
            Key.ESCAPE: GlobalAction.QUIT,
            Key.L: GlobalAction.SAVE_LOG,
            Key.G: GlobalAction.TOGGLE_DEBUG,
        }
        print("Loaded fallback key configuration")

    def validate_config(self) -> dict[str, Any]:
        """
        Validate the loaded configuration.

        Returns:
            Dict: Validation results including errors and warnings
        """
        errors = []
        warnings = list(self.warnings)

        for slot, section in PLAYER_SECTIONS.items():
            mapping = self._player_mappings.get(slot, {})
            if not mapping:
                errors.append(f"No key mappings for {section}")
                continue
            missing = set(PlayerAction) - set(mapping.values())
            for action in sorted(missing, key=lambda a: a.value):
                warnings.append(f"{section} has no key for {action.value}")

        # A key cannot drive both players or a player and a global command
        seen: dict[Key, str] = {}
        for slot, section in PLAYER_SECTIONS.items():
            for key in self._player_mappings.get(slot, {}):
                if key in seen:
                    errors.append(f"Key {key.name} bound for both {seen[key]} and {section}")
                seen[key] = section
        for key in self._global_mappings:
            if key in seen:
                errors.append(f"Key {key.name} bound for both {seen[key]} and global")

        total_mappings = sum(len(m) for m in self._player_mappings.values()) + len(self._global_mappings)

        return {
            'valid': len(errors) == 0,
            'errors': errors,
            'warnings': warnings,
            'total_mappings': total_mappings,
            'active_scheme': self._active_scheme
        }
