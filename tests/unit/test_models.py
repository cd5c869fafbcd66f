"""Unit tests for Pydantic models"""
import pytest
from pydantic import ValidationError

from src.gamification.incentive_engine import process_task_completion
from src.models.progression import (
    ComboState,
    DifficultyRank,
    ProgressionSnapshot,
    Task,
    UnlockedAchievement,
)
from src.models.session import HistoryLogEntry, HistoryLogType


def test_task_defaults():
    """Test Task defaults to not completed"""
    task = Task(id="t1", difficulty_rank="A", base_xp=300)

    assert task.completed is False
    assert task.difficulty_rank == DifficultyRank.A
    assert task.title is None


@pytest.mark.parametrize("base_xp", [0, -10])
def test_task_rejects_non_positive_xp(base_xp):
    """Test base_xp must be positive"""
    with pytest.raises(ValidationError):
        Task(id="t1", difficulty_rank="B", base_xp=base_xp)


def test_task_rejects_unknown_rank():
    """Test ranks are limited to S, A, B, C"""
    with pytest.raises(ValidationError):
        Task(id="t1", difficulty_rank="D", base_xp=100)


def test_task_is_frozen():
    """Test tasks cannot be mutated in place"""
    task = Task(id="t1", difficulty_rank="B", base_xp=100)

    with pytest.raises(ValidationError):
        task.completed = True


def test_snapshot_rejects_dangling_overflow():
    """Test current_xp must stay below the threshold"""
    with pytest.raises(ValidationError):
        ProgressionSnapshot(current_xp=1000, xp_needed_for_next_level=1000)


def test_snapshot_rejects_non_positive_threshold():
    """Test threshold must be positive"""
    with pytest.raises(ValidationError):
        ProgressionSnapshot(xp_needed_for_next_level=0)


def test_snapshot_rejects_duplicate_achievements():
    """Test achievement ids are unique"""
    achievement = UnlockedAchievement(id="LEGENDARY", icon="👑", unlocked_at=1)

    with pytest.raises(ValidationError):
        ProgressionSnapshot(achievements=(achievement, achievement))


def test_combo_rejects_multiplier_below_one():
    """Test the multiplier is at least 1.0"""
    with pytest.raises(ValidationError):
        ComboState(count=1, multiplier=0.9)


def test_snapshot_round_trips_through_json(initial_state, sample_tasks):
    """Test a played snapshot survives serialization losslessly"""
    result = process_task_completion("t4", sample_tasks, initial_state, timestamp=1234)

    restored = ProgressionSnapshot.model_validate_json(result.new_state.model_dump_json())

    assert restored == result.new_state
    assert restored.achievements[0].unlocked_at == 1234
    assert restored.momentum_history == result.new_state.momentum_history


def test_history_log_entry_generates_id():
    """Test log entries get unique ids"""
    first = HistoryLogEntry(timestamp=1, type=HistoryLogType.LEVEL_UP, message="Promoted to Level 2")
    second = HistoryLogEntry(timestamp=1, type=HistoryLogType.LEVEL_UP, message="Promoted to Level 2")

    assert first.id != second.id


def test_snapshot_rejects_oversized_momentum():
    """Test momentum history is capped at 20 samples"""
    ProgressionSnapshot(momentum_history=tuple(range(20)))

    with pytest.raises(ValidationError):
        ProgressionSnapshot(momentum_history=tuple(range(25)))
