"""Protocol for user-facing notifications."""

from typing import Protocol

from breathe_trainer.models import Achievement


class Notifier(Protocol):
    """Interface for delivering notifications (desktop, mobile, console, etc)."""

    def notify_achievement_unlocked(self, achievement: Achievement) -> None:
        """Announce a newly unlocked achievement.

        Args:
            achievement: The achievement that was just unlocked
        """
        ...

    def schedule_daily_reminder(self, hour: int, minute: int) -> None:
        """Schedule a repeating daily practice reminder.

        Args:
            hour: Hour of day (0-23)
            minute: Minute of hour (0-59)
        """
        ...

    def cancel_daily_reminder(self) -> None:
        """Cancel the daily practice reminder, if any."""
        ...
