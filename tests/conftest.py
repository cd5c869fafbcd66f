"""Global test fixtures and utilities for vibe-task tests"""
import pytest

from src.gamification.incentive_engine import create_initial_state
from src.models.progression import ComboState, DifficultyRank, ProgressionSnapshot, Task


# ============================================================================
# Task Fixtures
# ============================================================================

@pytest.fixture
def make_task():
    """Factory for tasks with sensible defaults"""
    def _make_task(
        task_id: str = "t1",
        rank: str = "B",
        base_xp: int = 100,
        completed: bool = False,
        title: str = None,
    ) -> Task:
        return Task(
            id=task_id,
            difficulty_rank=DifficultyRank(rank),
            base_xp=base_xp,
            completed=completed,
            title=title,
        )
    return _make_task


@pytest.fixture
def sample_tasks(make_task):
    """A small board mirroring the bench defaults"""
    return (
        make_task("t1", "B", 100, title="Wash the dishes"),
        make_task("t2", "B", 100, title="Take out the trash"),
        make_task("t3", "A", 300, title="Clean the garage"),
        make_task("t4", "S", 500, title="File taxes"),
        make_task("t5", "C", 50, title="Water the plants"),
    )


# ============================================================================
# Progression Fixtures
# ============================================================================

@pytest.fixture
def initial_state() -> ProgressionSnapshot:
    """Fresh snapshot"""
    return create_initial_state()


@pytest.fixture
def make_state():
    """Factory for snapshots with overrides on top of the initial state"""
    def _make_state(**overrides) -> ProgressionSnapshot:
        combo = overrides.pop("combo", None)
        data = create_initial_state().model_dump()
        data.update(overrides)
        if combo is not None:
            data["combo"] = combo if isinstance(combo, ComboState) else ComboState(**combo)
        return ProgressionSnapshot.model_validate(data)
    return _make_state
