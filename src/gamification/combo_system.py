"""
Combo Chain System

Completions landing within COMBO_WINDOW_MS of the previous one extend the
chain and raise the XP multiplier by COMBO_STEP per link:

- 1st completion (or after a break): count 1, multiplier 1.0
- 2nd chained completion: count 2, multiplier 1.2
- 3rd chained completion: count 3, multiplier 1.3

A last_completion_timestamp of 0 (or below) means no prior completion, so
the chain always starts fresh regardless of the time delta.
"""

import logging

from src.models.progression import ComboState

logger = logging.getLogger(__name__)

COMBO_WINDOW_MS = 30000  # 30 seconds to chain combo
COMBO_STEP = 0.1


def is_chained(combo: ComboState, timestamp: int) -> bool:
    """Check whether a completion at timestamp continues the chain"""
    if combo.last_completion_timestamp <= 0:
        return False

    return timestamp - combo.last_completion_timestamp < COMBO_WINDOW_MS


def resolve_combo(combo: ComboState, timestamp: int) -> ComboState:
    """
    Compute the combo state after a completion at timestamp

    Out-of-order timestamps are accepted: a negative delta is inside the
    window and chains.
    """
    if is_chained(combo, timestamp):
        count = combo.count + 1
        multiplier = 1.0 + count * COMBO_STEP
        logger.debug(f"Combo chained: {count}x (multiplier {multiplier:.1f})")
    else:
        count = 1
        multiplier = 1.0

    return ComboState(
        count=count,
        multiplier=multiplier,
        last_completion_timestamp=timestamp,
    )
