"""Notifier implementation using Qt signals."""

from PyQt6.QtCore import QObject, pyqtSignal

from breathe_trainer.models import Achievement


class GUINotifier(QObject):
    """Notifier that forwards every request as a Qt signal.

    Implements the Notifier protocol through structural subtyping, which
    avoids metaclass conflicts between QObject and Protocol. The window
    that owns the tray icon or scheduler connects to these signals.
    """

    achievement_unlocked = pyqtSignal(object)  # Achievement
    reminder_scheduled = pyqtSignal(int, int)  # hour, minute
    reminder_cancelled = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.reminder_time: tuple[int, int] | None = None

    def notify_achievement_unlocked(self, achievement: Achievement) -> None:
        self.achievement_unlocked.emit(achievement)

    def schedule_daily_reminder(self, hour: int, minute: int) -> None:
        """Remember the reminder time and announce it.

        Args:
            hour: Hour of day (0-23)
            minute: Minute of hour (0-59)
        """
        self.reminder_time = (hour, minute)
        self.reminder_scheduled.emit(hour, minute)

    def cancel_daily_reminder(self) -> None:
        self.reminder_time = None
        self.reminder_cancelled.emit()
