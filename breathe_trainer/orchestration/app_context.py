"""Process-wide wiring of every Breathe Trainer component."""

import logging
import time
from collections.abc import Callable
from datetime import datetime

from breathe_trainer.config import BreatheTrainerConfig, create_default_config
from breathe_trainer.exceptions import ValidationError
from breathe_trainer.interfaces import AudioPlayer, HapticFeedback, Notifier, StorageBackend
from breathe_trainer.models import Achievement, BreathPhase, SessionRecord, TimerSnapshot
from breathe_trainer.presenters import NullAudioPlayer, NullHaptics, NullNotifier
from breathe_trainer.services import (
    GoalManager,
    HistoryStore,
    MemoryStorage,
    PatternCatalog,
    ProgressEngine,
    SessionTimer,
    SettingsService,
    SqliteStorage,
)
from breathe_trainer.utils import EventHook

from .session_controller import BreathingSessionController

logger = logging.getLogger(__name__)


class AppContext:
    """Built once at startup and handed to whatever needs the services.

    Construction order fixes the reactive chain: history change ->
    progress recompute -> goal refresh, all synchronous.
    """

    def __init__(
        self,
        config: BreatheTrainerConfig,
        storage: StorageBackend,
        notifier: Notifier,
        audio: AudioPlayer,
        haptics: HapticFeedback,
        clock: Callable[[], datetime] = datetime.now,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self.storage = storage
        self.notifier = notifier
        self.audio = audio
        self.haptics = haptics

        self.settings = SettingsService(storage)
        self.patterns = PatternCatalog(self.settings, config.max_phase_duration)
        self.history = HistoryStore(storage, config.history_capacity)
        self.progress = ProgressEngine(
            self.history,
            storage,
            reference_pattern=config.mastery_reference_pattern,
            weekly_stats_days=config.weekly_stats_days,
            clock=clock,
        )
        self.goals = GoalManager(storage, self.progress, clock=clock)
        self.timer = SessionTimer(clock=monotonic, wall_clock=clock)
        self.sessions = BreathingSessionController(
            self.timer,
            self.patterns,
            self.history,
            self.progress,
            self.goals,
            self.settings,
            audio,
            haptics,
        )
        self.progress.on_achievement_unlocked.subscribe(self._notify_unlocked)

    @classmethod
    def create(
        cls,
        config: BreatheTrainerConfig | None = None,
        storage: StorageBackend | None = None,
        notifier: Notifier | None = None,
        audio: AudioPlayer | None = None,
        haptics: HapticFeedback | None = None,
        clock: Callable[[], datetime] = datetime.now,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> "AppContext":
        """Build and load a context.

        Without an explicit storage the on-disk SQLite store is used; if it
        cannot be opened the app still runs on an in-memory store.
        """
        config = config or create_default_config()
        if storage is None:
            sqlite_storage = SqliteStorage(config.database_path)
            if sqlite_storage.load():
                storage = sqlite_storage
            else:
                logger.warning("Falling back to in-memory storage; progress will not be saved")
                storage = MemoryStorage()
        context = cls(
            config,
            storage,
            notifier or NullNotifier(),
            audio or NullAudioPlayer(),
            haptics or NullHaptics(),
            clock=clock,
            monotonic=monotonic,
        )
        context.load()
        return context

    def load(self) -> None:
        """Load all persisted state, then bring derived state up to date."""
        self.settings.load()
        self.patterns.load()
        self.history.load()
        self.progress.load()
        self.goals.load()
        self.progress.recompute()

    @property
    def on_tick(self) -> EventHook[TimerSnapshot]:
        return self.sessions.on_tick

    @property
    def on_phase_change(self) -> EventHook[BreathPhase]:
        return self.sessions.on_phase_change

    @property
    def on_session_finalized(self) -> EventHook[SessionRecord]:
        return self.sessions.on_session_finalized

    @property
    def on_achievement_unlocked(self) -> EventHook[Achievement]:
        return self.progress.on_achievement_unlocked

    def schedule_daily_reminder(self, hour: int, minute: int) -> None:
        """Ask the notifier for a daily practice reminder.

        Raises:
            ValidationError: If the time of day is out of range
        """
        if not 0 <= hour <= 23:
            raise ValidationError("hour", "must be between 0 and 23")
        if not 0 <= minute <= 59:
            raise ValidationError("minute", "must be between 0 and 59")
        self.notifier.schedule_daily_reminder(hour, minute)

    def cancel_daily_reminder(self) -> None:
        self.notifier.cancel_daily_reminder()

    def reset_progress(self) -> None:
        """Forget all sessions, unlocks, weekly stats and goals."""
        self.sessions.stop()
        self.history.clear()
        self.progress.reset_achievements()
        self.progress.reset_weekly_stats()
        self.goals.reset_all()

    def _notify_unlocked(self, achievement: Achievement) -> None:
        try:
            self.notifier.notify_achievement_unlocked(achievement)
        except Exception as e:
            logger.warning(f"Could not deliver achievement notification: {e}")
