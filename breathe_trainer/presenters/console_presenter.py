"""Console presenter and notifier for CLI output."""

from breathe_trainer.models import Achievement, Goal, HistoryTotals, SessionRecord, TimerSnapshot
from breathe_trainer.utils import format_duration


class ConsolePresenter:
    """Present output to console (CLI implementation)."""

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        print(message)

    def show_success(self, message: str) -> None:
        """Display a success message."""
        print(f"[OK] {message}")

    def show_warning(self, message: str) -> None:
        """Display a warning message."""
        print(f"[WARN] {message}")

    def show_error(self, message: str) -> None:
        """Display an error message."""
        print(f"[ERROR] {message}")

    def show_tick(self, snapshot: TimerSnapshot) -> None:
        """Redraw the live session line in place."""
        bar_width = 20
        filled = int(snapshot.progress * bar_width)
        bar = "#" * filled + "-" * (bar_width - filled)
        print(
            f"\r  {snapshot.phase.label:<7s} [{bar}] {snapshot.remaining:4.1f}s"
            f"  cycle {snapshot.cycle_count + 1}"
            f"  total {format_duration(snapshot.session_elapsed)}",
            end="",
            flush=True,
        )

    def show_session_record(self, record: SessionRecord) -> None:
        """Display a finished session."""
        print("\n\nSession Complete:")
        print(f"  Pattern: {record.pattern_id}")
        print(f"  Cycles: {record.cycles}")
        print(f"  Duration: {record.formatted_duration}")

    def show_totals(self, totals: HistoryTotals) -> None:
        """Display aggregate history statistics."""
        print("\nStatistics:")
        print(f"  Total sessions: {totals.total_sessions}")
        print(f"  Total time: {format_duration(totals.total_duration)}")
        print(f"  Total cycles: {totals.total_cycles}")
        print(f"  Average session: {format_duration(totals.average_session_duration)}")

    def show_achievements(self, achievements: list[Achievement]) -> None:
        """Display the achievement catalog with unlock state."""
        unlocked = sum(1 for a in achievements if a.is_unlocked)
        print(f"\nAchievements ({unlocked}/{len(achievements)} unlocked):")
        for achievement in achievements:
            mark = "[x]" if achievement.is_unlocked else "[ ]"
            when = ""
            if achievement.date_unlocked:
                when = f" ({achievement.date_unlocked:%Y-%m-%d})"
            print(f"  {mark} {achievement.title:20s} {achievement.description}{when}")

    def show_goals(self, goals: list[Goal]) -> None:
        """Display a list of goals with progress."""
        if not goals:
            print("  (none)")
            return
        for goal in goals:
            status = "done" if goal.is_completed else f"{goal.days_remaining()}d left"
            print(
                f"  {goal.id[:8]}  {goal.title:20s} "
                f"{goal.current_value:g}/{goal.target_value:g} "
                f"({goal.progress_percentage}%, {status})"
            )

    # Notifier

    def notify_achievement_unlocked(self, achievement: Achievement) -> None:
        """Announce an unlocked achievement on the console."""
        print(f"\n[ACHIEVEMENT] {achievement.title}: {achievement.description}")

    def schedule_daily_reminder(self, hour: int, minute: int) -> None:
        """Console cannot schedule; acknowledge the request instead."""
        print(f"Daily reminder set for {hour:02d}:{minute:02d}")

    def cancel_daily_reminder(self) -> None:
        print("Daily reminder cancelled")
