"""Session history and presentation event models"""
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from src.models.progression import UnlockedAchievement


class HistoryLogType(str, Enum):
    """Kinds of session history entries"""
    TASK_COMPLETE = "TASK_COMPLETE"
    LEVEL_UP = "LEVEL_UP"
    ACHIEVEMENT_UNLOCK = "ACHIEVEMENT_UNLOCK"
    SESSION_START = "SESSION_START"


class HistoryLogEntry(BaseModel):
    """One line of the session history"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: int  # epoch ms
    type: HistoryLogType
    message: str
    details: Optional[dict[str, Any]] = None


class GameEventType(str, Enum):
    """Events handed to the presentation layer"""
    COMPLETE = "COMPLETE"
    LEVEL_UP = "LEVEL_UP"
    ACHIEVEMENT = "ACHIEVEMENT"


class GameEvent(BaseModel):
    """A state-transition event for visual effects"""
    model_config = ConfigDict(frozen=True)

    type: GameEventType
    task_id: Optional[str] = None
    xp: Optional[int] = None
    combo: Optional[int] = None  # set only when a combo triggered
    level: Optional[int] = None
    achievement: Optional[UnlockedAchievement] = None
