"""Progression models for the incentive engine"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

MOMENTUM_HISTORY_LIMIT = 20


class DifficultyRank(str, Enum):
    """Task difficulty ranks, S is hardest"""
    S = "S"
    A = "A"
    B = "B"
    C = "C"


class Task(BaseModel):
    """A classified unit of work (narrative text lives elsewhere)"""
    model_config = ConfigDict(frozen=True)

    id: str
    difficulty_rank: DifficultyRank
    base_xp: int = Field(..., gt=0)
    completed: bool = False
    title: Optional[str] = None  # quest title, only used for history log messages


class ComboState(BaseModel):
    """Timed combo chain"""
    model_config = ConfigDict(frozen=True)

    count: int = Field(0, ge=0)
    multiplier: float = Field(1.0, ge=1.0)
    last_completion_timestamp: int = 0  # epoch ms, 0 = never


class UnlockedAchievement(BaseModel):
    """An achievement the player has unlocked"""
    model_config = ConfigDict(frozen=True)

    id: str
    icon: str
    unlocked_at: int  # epoch ms


class ProgressionSnapshot(BaseModel):
    """
    The player's entire incentive state at one instant.

    Snapshots are immutable and replaced wholesale on every completion.
    """
    model_config = ConfigDict(frozen=True)

    level: int = Field(1, ge=1)
    current_xp: int = Field(0, ge=0)
    xp_needed_for_next_level: int = Field(1000, gt=0)
    completed_task_count: int = Field(0, ge=0)
    momentum_history: tuple[float, ...] = Field((), max_length=MOMENTUM_HISTORY_LIMIT)
    combo: ComboState = Field(default_factory=ComboState)
    achievements: tuple[UnlockedAchievement, ...] = ()

    @model_validator(mode="after")
    def check_progression_invariants(self) -> "ProgressionSnapshot":
        """Reject snapshots with dangling overflow or duplicate achievements"""
        if self.current_xp >= self.xp_needed_for_next_level:
            raise ValueError(
                f"current_xp ({self.current_xp}) must be below "
                f"xp_needed_for_next_level ({self.xp_needed_for_next_level})"
            )

        ids = [achievement.id for achievement in self.achievements]
        if len(ids) != len(set(ids)):
            raise ValueError("achievements must not contain duplicate ids")

        return self

    @property
    def achievement_ids(self) -> set[str]:
        return {achievement.id for achievement in self.achievements}


class CompletionResult(BaseModel):
    """Outcome of a single task completion"""
    model_config = ConfigDict(frozen=True)

    new_tasks: tuple[Task, ...]
    new_state: ProgressionSnapshot
    leveled_up: bool
    xp_gained: int
    achievements_unlocked: tuple[UnlockedAchievement, ...] = ()
    combo_triggered: bool
