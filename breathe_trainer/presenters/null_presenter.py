"""Null presenter, notifier, audio player and haptics for testing (no output)."""

from breathe_trainer.models import Achievement, Goal, HistoryTotals, SessionRecord, TimerSnapshot


class NullPresenter:
    """Present output to nowhere (testing implementation)."""

    def show_info(self, message: str) -> None:
        pass

    def show_success(self, message: str) -> None:
        pass

    def show_warning(self, message: str) -> None:
        pass

    def show_error(self, message: str) -> None:
        pass

    def show_tick(self, snapshot: TimerSnapshot) -> None:
        pass

    def show_session_record(self, record: SessionRecord) -> None:
        pass

    def show_totals(self, totals: HistoryTotals) -> None:
        pass

    def show_achievements(self, achievements: list[Achievement]) -> None:
        pass

    def show_goals(self, goals: list[Goal]) -> None:
        pass


class NullNotifier:
    """Notifier that drops every notification."""

    def notify_achievement_unlocked(self, achievement: Achievement) -> None:
        pass

    def schedule_daily_reminder(self, hour: int, minute: int) -> None:
        pass

    def cancel_daily_reminder(self) -> None:
        pass


class NullAudioPlayer:
    """Audio player that plays nothing."""

    def play_loop(self, sound_id: str, volume: float) -> None:
        pass

    def play_one_shot(self, phase_id: str) -> None:
        pass

    def stop_all(self) -> None:
        pass


class NullHaptics:
    """Haptic feedback that does nothing."""

    def pulse(self, phase_id: str) -> None:
        pass

    def vibrate(self) -> None:
        pass
