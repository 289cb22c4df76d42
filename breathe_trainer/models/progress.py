"""Data models for derived progress."""

from dataclasses import dataclass, field
from datetime import date

from .achievement import Achievement


@dataclass
class HistoryTotals:
    """Aggregates over the session history."""

    total_sessions: int = 0
    total_duration: float = 0.0
    total_cycles: int = 0

    @property
    def average_session_duration(self) -> float:
        if self.total_sessions == 0:
            return 0.0
        return self.total_duration / self.total_sessions


@dataclass
class RecomputeResult:
    """Outcome of one progress recomputation."""

    unlocked: list[Achievement] = field(default_factory=list)
    weekly_stats: dict[date, int] = field(default_factory=dict)
    streak: int = 0
