"""Orchestrator tying a running breathing session to history and goals."""

import logging
from collections.abc import Callable
from dataclasses import replace

from breathe_trainer.exceptions import ValidationError
from breathe_trainer.interfaces import AudioPlayer, HapticFeedback
from breathe_trainer.models import BreathPhase, SessionFinalization, SessionRecord, TimerSnapshot
from breathe_trainer.services import (
    GoalManager,
    HistoryStore,
    PatternCatalog,
    ProgressEngine,
    SessionTimer,
    SettingsService,
)
from breathe_trainer.utils import EventHook

logger = logging.getLogger(__name__)


class BreathingSessionController:
    """Start, tick and stop sessions, and record the ones worth keeping.

    A finished timer run becomes a SessionRecord only if it completed at
    least one cycle and took some time. The record is appended to history
    (which recomputes progress), credited to title goals, and then
    announced on ``on_session_finalized``. Achievements unlocked by the
    session are announced after it.
    """

    def __init__(
        self,
        timer: SessionTimer,
        catalog: PatternCatalog,
        history: HistoryStore,
        progress: ProgressEngine,
        goals: GoalManager,
        settings_service: SettingsService,
        audio: AudioPlayer,
        haptics: HapticFeedback | None = None,
    ):
        """Initialize the controller.

        Args:
            timer: Phase state machine
            catalog: Pattern lookup
            history: Session log receiving finished sessions
            progress: Achievement tracking recomputed from history
            goals: Goal tracking credited with finished sessions
            settings_service: Source of speed and sound preferences
            audio: Sound playback collaborator
            haptics: Optional tap and vibration collaborator
        """
        self.timer = timer
        self.catalog = catalog
        self.history = history
        self.progress = progress
        self.goals = goals
        self.settings_service = settings_service
        self.audio = audio
        self.haptics = haptics
        self.on_session_finalized: EventHook[SessionRecord] = EventHook("session_finalized")
        self._last_record: SessionRecord | None = None
        timer.on_phase_change.subscribe(self._on_phase_change)
        timer.on_finished.subscribe(self._on_timer_finished)

    @property
    def on_tick(self) -> EventHook[TimerSnapshot]:
        return self.timer.on_tick

    @property
    def on_phase_change(self) -> EventHook[BreathPhase]:
        return self.timer.on_phase_change

    @property
    def is_running(self) -> bool:
        return self.timer.is_running

    @property
    def last_record(self) -> SessionRecord | None:
        """Record produced by the most recent session, if it was kept."""
        return self._last_record

    def start(
        self,
        pattern_id: str,
        speed_multiplier: float | None = None,
        cycles: int | None = None,
        now: float | None = None,
    ) -> TimerSnapshot:
        """Start a session with a catalog pattern.

        Args:
            pattern_id: Id of a built-in or custom pattern
            speed_multiplier: Overrides the speed from settings
            cycles: Overrides the pattern's cycle limit for this session
            now: Monotonic reference instant for the first tick

        Raises:
            PatternNotFoundError: If the pattern id is unknown
            AlreadyRunningError: If a session is already running
            InvalidPatternError: If the pattern has no positive-length phase
            ValidationError: If the cycle override is below 1
        """
        pattern = self.catalog.get_pattern(pattern_id)
        if cycles is not None:
            if cycles < 1:
                raise ValidationError("cycles", "must be >= 1")
            pattern = replace(pattern, cycles=cycles)
        settings = self.settings_service.settings
        if speed_multiplier is None:
            speed_multiplier = settings.speed_multiplier
        self._last_record = None
        snapshot = self.timer.start(pattern, speed_multiplier, now)
        if settings.sound_enabled:
            self._play(self.audio.play_loop, settings.selected_sound_id, settings.volume)
        logger.info(f"Started {pattern.name} ({pattern.signature})")
        return snapshot

    def tick(self, now: float | None = None) -> TimerSnapshot:
        return self.timer.tick(now)

    def stop(self) -> SessionRecord | None:
        """Stop the running session.

        Returns:
            The recorded session, or None if nothing was running or the
            session was too short to keep
        """
        if not self.timer.is_running:
            return None
        self.timer.stop()
        return self._last_record

    def run_until_finished(
        self,
        sleep: Callable[[float], None],
        interval: float,
        should_continue: Callable[[], bool] = lambda: True,
    ) -> SessionRecord | None:
        """Tick on a fixed interval until the session ends or is interrupted.

        The caller's loop is the single control thread; ``should_continue``
        returning False stops the session.
        """
        while self.timer.is_running:
            if not should_continue():
                return self.stop()
            sleep(interval)
            self.timer.tick()
        return self._last_record

    def _on_phase_change(self, phase: BreathPhase) -> None:
        settings = self.settings_service.settings
        if settings.sound_enabled:
            self._play(self.audio.play_one_shot, phase.value)
        if self.haptics is None:
            return
        if settings.haptic_enabled:
            self._play(self.haptics.pulse, phase.value)
        if settings.vibration_enabled:
            self._play(self.haptics.vibrate)

    def _on_timer_finished(self, finalization: SessionFinalization) -> None:
        self._play(self.audio.stop_all)
        if finalization.is_trivial:
            logger.info(
                f"Discarding session with {finalization.cycles} cycles "
                f"in {finalization.elapsed_seconds:.1f}s"
            )
            self._last_record = None
            return

        record = SessionRecord(
            started_at=finalization.started_at,
            duration=finalization.elapsed_seconds,
            cycles=finalization.cycles,
            pattern_id=finalization.pattern_id,
        )
        with self.progress.holding_unlocks():
            if not self.history.append(record):
                logger.warning("Session kept in memory but could not be saved")
            self.goals.record_session(record)
            self._last_record = record
            self.on_session_finalized.emit(record)

    @staticmethod
    def _play(action: Callable[..., None], *args) -> None:
        """Run an audio or haptic call; device problems never interrupt the session."""
        try:
            action(*args)
        except Exception as e:
            logger.warning(f"Feedback playback failed: {e}")
