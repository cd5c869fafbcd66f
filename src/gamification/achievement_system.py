"""
Achievement System

Achievements are declared as data and evaluated once per task completion:
- FIRST_BLOOD: the very first completed task
- COMBO_MASTER: a combo chain of 3 or more
- LEGENDARY: completing an S-rank task
- VETERAN: reaching level 3

Rules are independent and not mutually exclusive. They are evaluated in
declaration order so simultaneous unlocks are always reported (and stored)
in the same order.
"""

from typing import Any, Dict, List, Optional
import logging

from pydantic import BaseModel, ConfigDict

from src.models.progression import (
    DifficultyRank,
    ProgressionSnapshot,
    Task,
    UnlockedAchievement,
)

logger = logging.getLogger(__name__)


class AchievementDefinition(BaseModel):
    """Achievement definition"""
    model_config = ConfigDict(frozen=True)

    id: str
    icon: str
    name: str
    description: str
    criteria: Dict[str, Any]


ACHIEVEMENT_DEFINITIONS: tuple[AchievementDefinition, ...] = (
    AchievementDefinition(
        id="FIRST_BLOOD",
        icon="⚔️",
        name="First Blood",
        description="Complete your first mission",
        criteria={"type": "first_task"},
    ),
    AchievementDefinition(
        id="COMBO_MASTER",
        icon="🔥",
        name="Combo Master",
        description="Chain 3 missions inside the combo window",
        criteria={"type": "combo_count", "value": 3},
    ),
    AchievementDefinition(
        id="LEGENDARY",
        icon="👑",
        name="Legendary",
        description="Complete an S-rank mission",
        criteria={"type": "difficulty", "rank": DifficultyRank.S},
    ),
    AchievementDefinition(
        id="VETERAN",
        icon="🎖️",
        name="Veteran",
        description="Reach level 3",
        criteria={"type": "level", "value": 3},
    ),
)

_DEFINITIONS_BY_ID = {definition.id: definition for definition in ACHIEVEMENT_DEFINITIONS}


def check_achievements(
    state: ProgressionSnapshot,
    task: Task,
    is_first_task: bool,
    timestamp: int
) -> List[UnlockedAchievement]:
    """
    Check which achievements unlock for this completion

    Args:
        state: Post-combo, post-leveling snapshot (before achievements are merged)
        task: The task that was just completed
        is_first_task: True iff no task had been completed before this event
        timestamp: Event timestamp in epoch ms, stamped on every unlock

    Returns:
        Newly unlocked achievements, in declaration order
    """
    newly_unlocked = []
    unlocked_ids = state.achievement_ids

    for definition in ACHIEVEMENT_DEFINITIONS:
        if definition.id in unlocked_ids:
            continue

        if _criteria_met(definition.criteria, state, task, is_first_task):
            newly_unlocked.append(
                UnlockedAchievement(id=definition.id, icon=definition.icon, unlocked_at=timestamp)
            )
            logger.info(f"Achievement unlocked: {definition.id} ({definition.name})")

    return newly_unlocked


def get_achievement_definition(achievement_id: str) -> Optional[AchievementDefinition]:
    """Look up a definition by id"""
    return _DEFINITIONS_BY_ID.get(achievement_id)


def get_achievement_progress(state: ProgressionSnapshot) -> List[Dict[str, Any]]:
    """
    Report every achievement with its unlock status

    Returns:
        [
            {
                'id': str,
                'icon': str,
                'name': str,
                'description': str,
                'unlocked': bool,
                'unlocked_at': int | None
            }
        ]
    """
    unlocked_at = {achievement.id: achievement.unlocked_at for achievement in state.achievements}

    return [
        {
            "id": definition.id,
            "icon": definition.icon,
            "name": definition.name,
            "description": definition.description,
            "unlocked": definition.id in unlocked_at,
            "unlocked_at": unlocked_at.get(definition.id),
        }
        for definition in ACHIEVEMENT_DEFINITIONS
    ]


# ============================================
# Helper Functions for Achievement Criteria
# ============================================

def _criteria_met(
    criteria: Dict[str, Any],
    state: ProgressionSnapshot,
    task: Task,
    is_first_task: bool
) -> bool:
    criteria_type = criteria["type"]

    if criteria_type == "first_task":
        return is_first_task

    elif criteria_type == "combo_count":
        return state.combo.count >= criteria["value"]

    elif criteria_type == "difficulty":
        return task.difficulty_rank == criteria["rank"]

    elif criteria_type == "level":
        return state.level >= criteria["value"]

    logger.warning(f"Unknown achievement criteria type: {criteria_type}")
    return False
