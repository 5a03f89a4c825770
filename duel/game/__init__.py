"""Game layer: combatants, match orchestration, managers and the main loop."""
