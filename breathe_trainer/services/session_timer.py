"""Breath phase state machine for a single running session."""

import logging
import threading
import time
from collections.abc import Callable
from datetime import datetime
from enum import Enum

from breathe_trainer.exceptions import AlreadyRunningError, InvalidPatternError, ValidationError
from breathe_trainer.models import (
    PHASE_ORDER,
    BreathingPattern,
    BreathPhase,
    SessionFinalization,
    TimerSnapshot,
)
from breathe_trainer.services.pattern_catalog import total_pattern_duration
from breathe_trainer.utils import EventHook

logger = logging.getLogger(__name__)

# Absorbs float accumulation error from many small ticks
EPSILON = 1e-9


class TimerState(Enum):
    """Lifecycle state of the timer."""

    IDLE = "idle"
    RUNNING = "running"


class SessionTimer:
    """Advance through inhale/hold/exhale/pause phases on wall-clock ticks.

    The timer owns its phase, cycle and elapsed-time fields exclusively.
    ``start``, ``tick`` and ``stop`` are serialized by a re-entrant lock, so
    a handler reacting to an event may call back into the timer.

    Events (all synchronous, on the calling thread):
        on_phase_change: a new phase with positive duration became current
        on_tick: state after every tick of a running session
        on_finished: the session stopped, manually or after its cycle limit
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize an idle timer.

        Args:
            clock: Monotonic seconds source used when ``now`` is not passed
            wall_clock: Source of the session start timestamp
        """
        self._clock = clock
        self._wall_clock = wall_clock
        self._lock = threading.RLock()
        self.on_tick: EventHook[TimerSnapshot] = EventHook("tick")
        self.on_phase_change: EventHook[BreathPhase] = EventHook("phase_change")
        self.on_finished: EventHook[SessionFinalization] = EventHook("session_finished")
        self._reset()

    def _reset(self) -> None:
        self._state = TimerState.IDLE
        self._pattern: BreathingPattern | None = None
        self._speed_multiplier = 1.0
        self._phase = BreathPhase.INHALE
        self._phase_elapsed = 0.0
        self._cycle_count = 0
        self._session_elapsed = 0.0
        self._last_tick: float | None = None
        self._started_at: datetime | None = None

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is TimerState.RUNNING

    @property
    def pattern(self) -> BreathingPattern | None:
        return self._pattern

    @property
    def phase(self) -> BreathPhase:
        return self._phase

    @property
    def phase_elapsed(self) -> float:
        return self._phase_elapsed

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @property
    def session_elapsed(self) -> float:
        return self._session_elapsed

    def effective_duration(self, phase: BreathPhase) -> float:
        """Phase duration after applying the speed multiplier (0 when idle)."""
        if self._pattern is None:
            return 0.0
        return self._pattern.duration_for(phase) * self._speed_multiplier

    def start(
        self,
        pattern: BreathingPattern,
        speed_multiplier: float = 1.0,
        now: float | None = None,
    ) -> TimerSnapshot:
        """Begin a session at the start of the inhale phase.

        Args:
            pattern: Pattern to breathe through
            speed_multiplier: Scales every phase duration (1.5 slow, 0.7 fast)
            now: Monotonic reference instant; defaults to the clock

        Raises:
            AlreadyRunningError: If a session is already running
            ValidationError: If the speed multiplier is not positive
            InvalidPatternError: If a full cycle would take no time, or a
                phase is shorter than the timer can resolve
        """
        with self._lock:
            if self.is_running:
                raise AlreadyRunningError("A breathing session is already running")
            if speed_multiplier <= 0:
                raise ValidationError("speed_multiplier", "must be > 0")
            if total_pattern_duration(pattern) * speed_multiplier <= 0:
                raise InvalidPatternError(
                    f"Pattern '{pattern.name}' has no phase with a positive duration"
                )
            for phase in PHASE_ORDER:
                if 0 < pattern.duration_for(phase) * speed_multiplier <= EPSILON:
                    raise InvalidPatternError(
                        f"{phase.label} of '{pattern.name}' is too short to time"
                    )

            self._reset()
            self._state = TimerState.RUNNING
            self._pattern = pattern
            self._speed_multiplier = speed_multiplier
            self._last_tick = self._clock() if now is None else now
            self._started_at = self._wall_clock()
            logger.debug(f"Session started: {pattern.id} at x{speed_multiplier:g}")

            if self.effective_duration(self._phase) > 0:
                self.on_phase_change.emit(self._phase)
            else:
                # Skipping a zero-length opening phase announces the landing phase
                self._advance_phases()
            return self.snapshot()

    def tick(self, now: float | None = None) -> TimerSnapshot:
        """Advance by the time elapsed since the previous tick.

        Intervals need not be regular; a single large delta may cross several
        phases or cycles. Returns the state after the tick (idle if the tick
        completed the pattern's last cycle).
        """
        with self._lock:
            if not self.is_running or self._last_tick is None:
                return self.snapshot()
            if now is None:
                now = self._clock()
            delta = max(0.0, now - self._last_tick)
            self._last_tick = now
            self._session_elapsed += delta
            self._phase_elapsed += delta

            # Finished, or stopped by a phase change handler
            if self._advance_phases() is not None or not self.is_running:
                return self.snapshot()

            snapshot = self.snapshot()
            self.on_tick.emit(snapshot)
            return snapshot

    def stop(self) -> SessionFinalization | None:
        """Stop the running session and return its finalize payload.

        Calling stop while idle does nothing and returns None.
        """
        with self._lock:
            if not self.is_running:
                return None
            return self._finish(auto_stopped=False)

    def snapshot(self) -> TimerSnapshot:
        """Current observable state."""
        with self._lock:
            return TimerSnapshot(
                is_running=self.is_running,
                phase=self._phase,
                phase_elapsed=self._phase_elapsed,
                phase_duration=self.effective_duration(self._phase),
                cycle_count=self._cycle_count,
                session_elapsed=self._session_elapsed,
                pattern_id=self._pattern.id if self._pattern else None,
            )

    def _advance_phases(self) -> SessionFinalization | None:
        """Move past every phase whose duration has been used up.

        The overshoot is carried into the next phase. Zero-length phases are
        passed through without ever becoming observable; four of them in a
        row means the cycle has no duration at all.
        """
        zero_skips = 0
        while self.is_running and (
            self._phase_elapsed + EPSILON >= self.effective_duration(self._phase)
        ):
            duration = self.effective_duration(self._phase)
            if duration <= 0:
                zero_skips += 1
                if zero_skips >= len(PHASE_ORDER):
                    raise InvalidPatternError("Every phase of the pattern has zero duration")
            else:
                zero_skips = 0

            self._phase_elapsed = max(0.0, self._phase_elapsed - duration)
            leaving = self._phase
            self._phase = leaving.next()

            if leaving is BreathPhase.HOLD_AFTER_EXHALE:
                self._cycle_count += 1
                target = self._pattern.cycles if self._pattern else None
                if target is not None and self._cycle_count >= target:
                    # Time past the final cycle is not part of the session
                    self._session_elapsed = max(0.0, self._session_elapsed - self._phase_elapsed)
                    return self._finish(auto_stopped=True)

            if self.effective_duration(self._phase) > 0:
                self.on_phase_change.emit(self._phase)
        return None

    def _finish(self, auto_stopped: bool) -> SessionFinalization:
        assert self._pattern is not None and self._started_at is not None
        finalization = SessionFinalization(
            pattern_id=self._pattern.id,
            started_at=self._started_at,
            elapsed_seconds=self._session_elapsed,
            cycles=self._cycle_count,
            auto_stopped=auto_stopped,
        )
        self._reset()
        logger.debug(
            f"Session finished: {finalization.cycles} cycles in "
            f"{finalization.elapsed_seconds:.1f}s (auto={auto_stopped})"
        )
        self.on_finished.emit(finalization)
        return finalization
