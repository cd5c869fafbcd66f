"""
Incentive Engine

Deterministic state transitions for task completion. Given a completion
event and the current progression snapshot it derives:
- combo status (time-windowed multiplier)
- XP award and level-ups
- momentum history
- achievement unlocks

Every call is a pure transform of its arguments. Inputs are never mutated;
a brand-new snapshot and task tuple are returned. Supply `timestamp` for
reproducible results; it only falls back to the wall clock when omitted.
"""

from typing import Optional, Sequence
import math
import time
import logging

from src.exceptions import InvalidSnapshotError, InvalidTaskError
from src.gamification.achievement_system import check_achievements
from src.gamification.combo_system import resolve_combo
from src.gamification.xp_system import (
    INITIAL_XP_NEEDED,
    apply_xp,
    calculate_momentum,
)
from src.models.progression import (
    MOMENTUM_HISTORY_LIMIT,
    ComboState,
    CompletionResult,
    ProgressionSnapshot,
    Task,
)

logger = logging.getLogger(__name__)

INITIAL_MOMENTUM = (0, 100, 150, 120, 200)


def current_timestamp_ms() -> int:
    """Wall-clock time in epoch milliseconds"""
    return int(time.time() * 1000)


def create_initial_state() -> ProgressionSnapshot:
    """Create the starting snapshot for a fresh play session"""
    return ProgressionSnapshot(
        level=1,
        current_xp=0,
        xp_needed_for_next_level=INITIAL_XP_NEEDED,
        completed_task_count=0,
        momentum_history=INITIAL_MOMENTUM,
        combo=ComboState(count=0, multiplier=1.0, last_completion_timestamp=0),
        achievements=(),
    )


def process_task_completion(
    task_id: str,
    tasks: Sequence[Task],
    state: ProgressionSnapshot,
    timestamp: Optional[int] = None
) -> Optional[CompletionResult]:
    """
    Process a task completion event

    Args:
        task_id: Id of the task being completed
        tasks: Current task list (ids unique)
        state: Current progression snapshot
        timestamp: Event time in epoch ms (defaults to wall clock)

    Returns:
        CompletionResult, or None when the task is unknown or already
        completed (nothing to do)

    Raises:
        InvalidSnapshotError: state breaks a progression invariant
        InvalidTaskError: the matched task has a non-positive base_xp
    """
    task = next((t for t in tasks if t.id == task_id), None)
    if task is None or task.completed:
        logger.debug(f"Ignoring completion for task {task_id}: not found or already completed")
        return None

    _check_snapshot(state)
    if task.base_xp <= 0:
        raise InvalidTaskError(
            f"Task {task_id} has non-positive base_xp {task.base_xp}",
            task_id=task_id,
            value=task.base_xp,
            operation="process_task_completion",
        )

    if timestamp is None:
        timestamp = current_timestamp_ms()

    # 1. Update task list
    new_tasks = tuple(
        t.model_copy(update={"completed": True}) if t.id == task_id else t
        for t in tasks
    )
    is_first_task = state.completed_task_count == 0

    # 2. Combo
    combo = resolve_combo(state.combo, timestamp)

    # 3. XP
    xp_gained = math.floor(task.base_xp * combo.multiplier)

    # 4. Level
    progress = apply_xp(
        state.level,
        state.current_xp,
        state.xp_needed_for_next_level,
        xp_gained,
    )

    # 5. Momentum
    momentum = calculate_momentum(state.momentum_history, xp_gained)

    # 6. Intermediate state for achievement check
    intermediate_state = state.model_copy(update={
        "level": progress.level,
        "current_xp": progress.current_xp,
        "xp_needed_for_next_level": progress.xp_needed_for_next_level,
        "completed_task_count": state.completed_task_count + 1,
        "momentum_history": momentum,
        "combo": combo,
    })

    # 7. Achievements
    unlocked = tuple(check_achievements(intermediate_state, task, is_first_task, timestamp))

    new_state = ProgressionSnapshot.model_validate(
        {
            **intermediate_state.model_dump(),
            "achievements": (*state.achievements, *unlocked),
        }
    )

    logger.info(
        f"Completed task {task_id}: +{xp_gained} XP "
        f"(combo {combo.count}x), level {new_state.level}, "
        f"{new_state.current_xp}/{new_state.xp_needed_for_next_level} XP"
    )

    return CompletionResult(
        new_tasks=new_tasks,
        new_state=new_state,
        leveled_up=progress.leveled_up,
        xp_gained=xp_gained,
        achievements_unlocked=unlocked,
        combo_triggered=combo.count > 1,
    )


def _check_snapshot(state: ProgressionSnapshot) -> None:
    """Re-check invariants for snapshots built without validation"""
    if state.xp_needed_for_next_level <= 0:
        raise InvalidSnapshotError(
            "xp_needed_for_next_level must be positive",
            field="xp_needed_for_next_level",
            value=state.xp_needed_for_next_level,
            operation="process_task_completion",
        )
    if state.level < 1:
        raise InvalidSnapshotError(
            "level must be at least 1",
            field="level",
            value=state.level,
            operation="process_task_completion",
        )
    if not 0 <= state.current_xp < state.xp_needed_for_next_level:
        raise InvalidSnapshotError(
            "current_xp must be within [0, xp_needed_for_next_level)",
            field="current_xp",
            value=state.current_xp,
            operation="process_task_completion",
        )
    if state.completed_task_count < 0:
        raise InvalidSnapshotError(
            "completed_task_count must not be negative",
            field="completed_task_count",
            value=state.completed_task_count,
            operation="process_task_completion",
        )
    if len(state.momentum_history) > MOMENTUM_HISTORY_LIMIT:
        raise InvalidSnapshotError(
            f"momentum_history must hold at most {MOMENTUM_HISTORY_LIMIT} samples",
            field="momentum_history",
            value=len(state.momentum_history),
            operation="process_task_completion",
        )
    if state.combo.count < 0 or state.combo.multiplier < 1.0:
        raise InvalidSnapshotError(
            "combo count must not be negative and multiplier must be at least 1.0",
            field="combo",
            value={"count": state.combo.count, "multiplier": state.combo.multiplier},
            operation="process_task_completion",
        )

    ids = [achievement.id for achievement in state.achievements]
    if len(ids) != len(set(ids)):
        raise InvalidSnapshotError(
            "achievements must not contain duplicate ids",
            field="achievements",
            value=ids,
            operation="process_task_completion",
        )
