"""
XP and Leveling System

Manages level progression and the momentum trend history.

Leveling Curve:
- Level 1 needs 1000 XP
- Each level-up multiplies the previous threshold by 1.5 (floored):
  1000 -> 1500 -> 2250 -> 3375 -> ...

Overflow XP carries into the next level, so current_xp always stays below
the active threshold.
"""

from dataclasses import dataclass
from typing import Sequence
import math
import logging

from src.models.progression import MOMENTUM_HISTORY_LIMIT

logger = logging.getLogger(__name__)

XP_MULTIPLIER = 1.5
INITIAL_XP_NEEDED = 1000
MOMENTUM_FACTOR = 0.5


@dataclass(frozen=True)
class LevelProgress:
    """Level state after applying an XP award"""
    level: int
    current_xp: int
    xp_needed_for_next_level: int
    levels_gained: int = 0

    @property
    def leveled_up(self) -> bool:
        return self.levels_gained > 0


def get_next_level_threshold(current_threshold: int) -> int:
    """Calculate the XP needed for the level after the one at current_threshold"""
    return math.floor(current_threshold * XP_MULTIPLIER)


def apply_xp(level: int, current_xp: int, threshold: int, amount: int) -> LevelProgress:
    """
    Add XP and fold any overflow into level-ups

    Thresholds grow from the previous threshold, not from the level number,
    so a large award crossing several levels yields the same result as
    several smaller ones.

    Args:
        level: Level before the award
        current_xp: XP inside the current level
        threshold: XP needed for the next level
        amount: XP to add (already multiplied)

    Returns:
        LevelProgress with the resulting level, XP and threshold
    """
    new_xp = current_xp + amount
    levels_gained = 0

    while new_xp >= threshold:
        new_xp -= threshold
        threshold = get_next_level_threshold(threshold)
        levels_gained += 1

    if levels_gained:
        logger.info(f"Leveled up from {level} to {level + levels_gained} (next threshold {threshold} XP)")

    return LevelProgress(
        level=level + levels_gained,
        current_xp=new_xp,
        xp_needed_for_next_level=threshold,
        levels_gained=levels_gained,
    )


def calculate_momentum(history: Sequence[float], xp_gain: int) -> tuple[float, ...]:
    """
    Append a momentum sample for an XP gain

    The new sample is the previous sample plus half the gain. Oldest samples
    drop once the history exceeds MOMENTUM_HISTORY_LIMIT.
    """
    last_value = history[-1] if history else 0
    new_momentum = (*history, last_value + xp_gain * MOMENTUM_FACTOR)

    return tuple(new_momentum[-MOMENTUM_HISTORY_LIMIT:])
