"""Presenter protocol for output abstraction."""

from typing import Protocol

from breathe_trainer.models import Achievement, Goal, HistoryTotals, SessionRecord, TimerSnapshot


class PresenterProtocol(Protocol):
    """Interface for presenting output to the user (CLI, GUI, etc).

    This protocol abstracts all output operations, allowing the same
    commands to work with different presentation layers.
    """

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        ...

    def show_success(self, message: str) -> None:
        """Display a success message."""
        ...

    def show_warning(self, message: str) -> None:
        """Display a warning message."""
        ...

    def show_error(self, message: str) -> None:
        """Display an error message."""
        ...

    def show_tick(self, snapshot: TimerSnapshot) -> None:
        """Display the live state of a running session."""
        ...

    def show_session_record(self, record: SessionRecord) -> None:
        """Display a finished session."""
        ...

    def show_totals(self, totals: HistoryTotals) -> None:
        """Display aggregate history statistics."""
        ...

    def show_achievements(self, achievements: list[Achievement]) -> None:
        """Display the achievement catalog with unlock state."""
        ...

    def show_goals(self, goals: list[Goal]) -> None:
        """Display a list of goals with progress."""
        ...
