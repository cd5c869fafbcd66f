"""
Gamification core for vibe-task

This package implements the incentive engine that turns task completions
into progression:
- XP and leveling system
- Timed combo chains
- Momentum history
- Achievement unlocks
- Deterministic simulation bench (virtual time)
"""

from src.gamification.incentive_engine import create_initial_state, process_task_completion
from src.gamification.xp_system import apply_xp, calculate_momentum, get_next_level_threshold
from src.gamification.combo_system import resolve_combo
from src.gamification.achievement_system import check_achievements, get_achievement_progress

__all__ = [
    "create_initial_state",
    "process_task_completion",
    "apply_xp",
    "calculate_momentum",
    "get_next_level_threshold",
    "resolve_combo",
    "check_achievements",
    "get_achievement_progress",
]
