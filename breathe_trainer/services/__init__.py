"""Business logic services for Breathe Trainer."""

from .goal_manager import GoalManager
from .history_store import HistoryStore
from .pattern_catalog import (
    PatternCatalog,
    resolve_phase_duration,
    total_pattern_duration,
    validate_custom_pattern,
)
from .progress_engine import ProgressEngine
from .session_timer import SessionTimer, TimerState
from .settings_service import SettingsService
from .storage import MemoryStorage, SqliteStorage

__all__ = [
    "PatternCatalog",
    "resolve_phase_duration",
    "total_pattern_duration",
    "validate_custom_pattern",
    "SessionTimer",
    "TimerState",
    "HistoryStore",
    "ProgressEngine",
    "GoalManager",
    "SettingsService",
    "SqliteStorage",
    "MemoryStorage",
]
