"""
GameSession - Session Orchestration

Owns the authoritative task list and progression snapshot for one player and
feeds completion events to the incentive engine one at a time. Translates
engine results into presentation events and history log entries.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from src.exceptions import DuplicateTaskError
from src.gamification.incentive_engine import (
    create_initial_state,
    current_timestamp_ms,
    process_task_completion,
)
from src.models.progression import ProgressionSnapshot, Task
from src.models.session import (
    GameEvent,
    GameEventType,
    HistoryLogEntry,
    HistoryLogType,
)

logger = logging.getLogger(__name__)


class GameSession:
    """
    A single player's play session.

    Responsibilities:
    - Holding the current tasks and snapshot
    - Sequencing completion events against that snapshot
    - Emitting events for the presentation layer
    - Keeping a newest-first history log
    """

    def __init__(
        self,
        tasks: Optional[Sequence[Task]] = None,
        state: Optional[ProgressionSnapshot] = None,
        logs: Optional[Sequence[HistoryLogEntry]] = None
    ):
        """
        Initialize GameSession.

        Args:
            tasks: Tasks on the board (ids must be unique)
            state: Snapshot to resume from, fresh state if omitted
            logs: Existing history, newest first
        """
        self.tasks: tuple[Task, ...] = ()
        self.state = state if state is not None else create_initial_state()
        self.logs: List[HistoryLogEntry] = list(logs or [])
        self.events: List[GameEvent] = []

        self._extend_tasks(tasks or ())
        logger.debug(f"GameSession initialized with {len(self.tasks)} tasks at level {self.state.level}")

    @property
    def all_completed(self) -> bool:
        return bool(self.tasks) and all(task.completed for task in self.tasks)

    def complete_task(self, task_id: str, timestamp: Optional[int] = None) -> bool:
        """
        Complete a task and record what changed

        Args:
            task_id: Task to complete
            timestamp: Event time in epoch ms (defaults to wall clock)

        Returns:
            True if progression changed, False for a no-op
        """
        if timestamp is None:
            timestamp = current_timestamp_ms()

        result = process_task_completion(task_id, self.tasks, self.state, timestamp)
        if result is None:
            return False

        completed_task = next(task for task in self.tasks if task.id == task_id)
        self.tasks = result.new_tasks
        self.state = result.new_state

        new_events: List[GameEvent] = []
        new_logs: List[HistoryLogEntry] = []

        # 1. Task complete
        new_events.append(GameEvent(
            type=GameEventType.COMPLETE,
            task_id=task_id,
            xp=result.xp_gained,
            combo=result.new_state.combo.count if result.combo_triggered else None,
        ))
        new_logs.append(HistoryLogEntry(
            timestamp=timestamp,
            type=HistoryLogType.TASK_COMPLETE,
            message=f"Completed: {completed_task.title or 'Unknown Mission'}",
            details={"xp": result.xp_gained, "combo": result.combo_triggered},
        ))

        # 2. Level up
        if result.leveled_up:
            new_events.append(GameEvent(type=GameEventType.LEVEL_UP, level=result.new_state.level))
            new_logs.append(HistoryLogEntry(
                timestamp=timestamp,
                type=HistoryLogType.LEVEL_UP,
                message=f"Promoted to Level {result.new_state.level}",
                details={"level": result.new_state.level},
            ))

        # 3. Achievements
        for achievement in result.achievements_unlocked:
            new_events.append(GameEvent(type=GameEventType.ACHIEVEMENT, achievement=achievement))
            new_logs.append(HistoryLogEntry(
                timestamp=timestamp,
                type=HistoryLogType.ACHIEVEMENT_UNLOCK,
                message=f"Unlocked: {achievement.id}",
                details={"id": achievement.id, "icon": achievement.icon},
            ))

        self.events.extend(new_events)
        self.logs = new_logs + self.logs

        return True

    def add_tasks(self, new_tasks: Iterable[Task], timestamp: Optional[int] = None) -> None:
        """Add tasks mid-session without touching progression"""
        new_tasks = list(new_tasks)
        self._extend_tasks(new_tasks)

        self.logs.insert(0, HistoryLogEntry(
            timestamp=timestamp if timestamp is not None else current_timestamp_ms(),
            type=HistoryLogType.SESSION_START,
            message=f"Received {len(new_tasks)} new orders.",
        ))

    def drain_events(self) -> List[GameEvent]:
        """Hand pending events to the presentation layer"""
        events, self.events = self.events, []
        return events

    def soft_reset(self) -> None:
        """Clear the board but keep progression"""
        self.tasks = ()
        self.events = []
        logger.info(f"Soft reset: keeping level {self.state.level}")

    def hard_reset(self) -> None:
        """Wipe progression, tasks, events and history"""
        self.tasks = ()
        self.state = create_initial_state()
        self.events = []
        self.logs = []
        logger.info("Hard reset: progression wiped")

    def _extend_tasks(self, new_tasks: Iterable[Task]) -> None:
        known_ids = {task.id for task in self.tasks}
        added = []

        for task in new_tasks:
            if task.id in known_ids:
                raise DuplicateTaskError(f"Task {task.id} is already in the session", task_id=task.id)
            known_ids.add(task.id)
            added.append(task)

        self.tasks = (*self.tasks, *added)
