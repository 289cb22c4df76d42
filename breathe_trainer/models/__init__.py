"""Data models for Breathe Trainer."""

from .achievement import Achievement, AchievementType
from .goal import Goal, GoalPeriod, is_goal_completed
from .pattern import BreathingPattern
from .phase import ALLOWED_SPEED_MULTIPLIERS, PHASE_ORDER, BreathingSpeed, BreathPhase
from .progress import HistoryTotals, RecomputeResult
from .session import SessionRecord
from .settings import THEME_IDS, BreathingSettings, BreathingSound
from .timer import SessionFinalization, TimerSnapshot

__all__ = [
    "BreathPhase",
    "BreathingSpeed",
    "PHASE_ORDER",
    "ALLOWED_SPEED_MULTIPLIERS",
    "BreathingPattern",
    "SessionRecord",
    "Achievement",
    "AchievementType",
    "Goal",
    "GoalPeriod",
    "is_goal_completed",
    "BreathingSettings",
    "BreathingSound",
    "THEME_IDS",
    "TimerSnapshot",
    "SessionFinalization",
    "HistoryTotals",
    "RecomputeResult",
]
