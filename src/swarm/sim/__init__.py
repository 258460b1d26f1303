from __future__ import annotations

from .clock import FixedStepClock, ManualTimeSource, MonotonicTimeSource, TickScheduler, TimeSource
from .session import GamePhase, Session, SessionState, TickResult

__all__ = [
    "FixedStepClock",
    "GamePhase",
    "ManualTimeSource",
    "MonotonicTimeSource",
    "Session",
    "SessionState",
    "TickResult",
    "TickScheduler",
    "TimeSource",
]
