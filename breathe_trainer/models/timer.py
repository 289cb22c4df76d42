"""Value objects emitted by the session timer."""

from dataclasses import dataclass
from datetime import datetime

from .phase import BreathPhase


@dataclass(frozen=True)
class TimerSnapshot:
    """Observable timer state after a tick."""

    is_running: bool
    phase: BreathPhase
    phase_elapsed: float
    phase_duration: float
    cycle_count: int
    session_elapsed: float
    pattern_id: str | None = None

    @property
    def remaining(self) -> float:
        """Time left in the current phase, floored at 0."""
        return max(0.0, self.phase_duration - self.phase_elapsed)

    @property
    def progress(self) -> float:
        """Fraction of the current phase completed, in [0, 1]."""
        if self.phase_duration <= 0:
            return 0.0
        return min(max(self.phase_elapsed / self.phase_duration, 0.0), 1.0)

    @property
    def scale(self) -> float:
        """Breathing circle scale: grows on inhale, shrinks on exhale, rests on holds."""
        if not self.is_running:
            return 1.0
        if self.phase is BreathPhase.INHALE:
            return 1.0 + self.progress * 0.5
        if self.phase is BreathPhase.EXHALE:
            return 1.5 - self.progress * 0.5
        return 1.25


@dataclass(frozen=True)
class SessionFinalization:
    """Payload produced when a running session stops (manually or automatically)."""

    pattern_id: str
    started_at: datetime
    elapsed_seconds: float
    cycles: int
    auto_stopped: bool = False

    @property
    def is_trivial(self) -> bool:
        """Sessions with no completed cycle or no elapsed time are not recorded."""
        return self.cycles <= 0 or self.elapsed_seconds <= 0
