"""
Service Layer Package

Services sit between the presentation layer and the pure incentive engine.

Core Services:
- GameSession: owns the board and snapshot, sequences completion events,
  emits presentation events and history log entries
"""

from src.services.session_service import GameSession

__all__ = [
    "GameSession",
]
