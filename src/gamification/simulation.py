"""
Incentive Engine Simulation Bench

Drives the engine with virtual time so combo windows, level-ups and
achievement unlocks can be reproduced without touching the wall clock.
Each executed task auto-advances the clock by `task_duration_ms`.
"""

from dataclasses import dataclass
from typing import List, Optional, Union
import logging

from src.exceptions import ValidationError
from src.gamification.incentive_engine import create_initial_state, process_task_completion
from src.models.progression import CompletionResult, DifficultyRank, ProgressionSnapshot, Task

logger = logging.getLogger(__name__)

DEFAULT_START_TIME_MS = 1000000
DEFAULT_TASK_DURATION_MS = 5000


@dataclass(frozen=True)
class BenchLogEntry:
    """A single bench log line stamped with virtual time"""
    time: int
    message: str


class SimulationBench:
    """
    Virtual-time harness around the incentive engine.

    Example:
        bench = SimulationBench()
        bench.execute_task("B", 100)
        bench.advance_time(31000)  # break the combo
        bench.execute_task("S", 500)
    """

    def __init__(
        self,
        start_time_ms: int = DEFAULT_START_TIME_MS,
        task_duration_ms: int = DEFAULT_TASK_DURATION_MS
    ):
        if task_duration_ms < 0:
            raise ValidationError(
                "Task duration must not be negative",
                field="task_duration_ms",
                value=task_duration_ms,
            )
        self.start_time_ms = start_time_ms
        self.task_duration_ms = task_duration_ms
        self.virtual_time = start_time_ms
        self.state: ProgressionSnapshot = create_initial_state()
        self.logs: List[BenchLogEntry] = []  # newest first
        self._task_counter = 0

    @property
    def elapsed_seconds(self) -> int:
        return (self.virtual_time - self.start_time_ms) // 1000

    def _log(self, message: str) -> None:
        self.logs.insert(0, BenchLogEntry(time=self.virtual_time, message=message))
        logger.debug(f"[T+{self.elapsed_seconds}s] {message}")

    def advance_time(self, ms: int) -> None:
        """Move virtual time forward"""
        if ms < 0:
            raise ValidationError("Time can only move forward", field="ms", value=ms)

        self.virtual_time += ms
        self._log(f"⏳ Time advanced by {ms / 1000:g}s")

    def execute_task(
        self,
        rank: Union[DifficultyRank, str],
        xp: int,
        timestamp: Optional[int] = None
    ) -> Optional[CompletionResult]:
        """
        Complete a throwaway task of the given rank at the current virtual time

        Args:
            rank: Difficulty rank (S, A, B, C)
            xp: Base XP of the task
            timestamp: Override for the virtual time of this single event

        Returns:
            The engine's CompletionResult
        """
        rank = DifficultyRank(rank)
        self._task_counter += 1
        task = Task(
            id=f"bench-{self._task_counter}",
            difficulty_rank=rank,
            base_xp=xp,
            title=f"Operation {rank.value}",
        )

        result = process_task_completion(
            task.id,
            [task],
            self.state,
            self.virtual_time if timestamp is None else timestamp,
        )
        if result is None:
            return None

        self.state = result.new_state

        message = f"✅ Completed [{rank.value}] (+{result.xp_gained} XP)"
        if result.combo_triggered:
            message += f" 🔥 {result.new_state.combo.count}x Combo!"
        if result.leveled_up:
            message += " 🆙 LEVEL UP!"
        self._log(message)

        for achievement in result.achievements_unlocked:
            self._log(f"🏆 UNLOCKED: {achievement.id} {achievement.icon}")

        self.advance_time(self.task_duration_ms)
        return result

    def reset(self) -> None:
        """Restore the initial snapshot and virtual clock"""
        self.state = create_initial_state()
        self.virtual_time = self.start_time_ms
        self.logs = []
        self._task_counter = 0
        self._log("🔄 Engine Reset")
