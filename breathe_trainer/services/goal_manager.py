"""Service for creating and tracking user goals."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from breathe_trainer.exceptions import GoalNotFoundError, ValidationError
from breathe_trainer.interfaces import StorageBackend
from breathe_trainer.models import (
    AchievementType,
    Goal,
    GoalPeriod,
    RecomputeResult,
    SessionRecord,
    is_goal_completed,
)
from breathe_trainer.services.progress_engine import ProgressEngine
from breathe_trainer.services.storage import load_json, save_json
from breathe_trainer.utils import start_of_day, start_of_month, start_of_week

logger = logging.getLogger(__name__)

ACTIVE_GOALS_KEY = "goals_active"
COMPLETED_GOALS_KEY = "goals_completed"

# (title, target seconds, period)
SUGGESTED_GOALS = [
    ("Daily Mindfulness", 300, GoalPeriod.DAILY),
    ("Weekly Wellness", 2100, GoalPeriod.WEEKLY),
    ("Monthly Mastery", 9000, GoalPeriod.MONTHLY),
    ("Stress Relief", 600, GoalPeriod.DAILY),
    ("Energy Boost", 180, GoalPeriod.DAILY),
    ("Deep Focus", 900, GoalPeriod.WEEKLY),
]

# period -> (minimum recommended seconds, growth factor over recent progress)
RECOMMENDATION_RULES = {
    GoalPeriod.DAILY: (300.0, 1.2),
    GoalPeriod.WEEKLY: (2100.0, 1.15),
    GoalPeriod.MONTHLY: (9000.0, 1.1),
}


class GoalManager:
    """CRUD over goals, kept in two disjoint sets: active and completed.

    Type-scoped goals follow ProgressEngine's derived values and are
    refreshed after every recompute; title goals accumulate the seconds of
    sessions breathed inside their window.
    """

    def __init__(
        self,
        storage: StorageBackend,
        progress: ProgressEngine,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._storage = storage
        self._progress = progress
        self._clock = clock
        self._active: list[Goal] = []
        self._completed: list[Goal] = []
        progress.on_recomputed.subscribe(self._on_progress_recomputed)

    @property
    def active_goals(self) -> list[Goal]:
        return list(self._active)

    @property
    def completed_goals(self) -> list[Goal]:
        return list(self._completed)

    def load(self) -> int:
        """Load persisted goals.

        Returns:
            Number of active goals
        """
        self._active = self._load_goals(ACTIVE_GOALS_KEY)
        self._completed = self._load_goals(COMPLETED_GOALS_KEY)
        logger.info(f"Loaded {len(self._active)} active and {len(self._completed)} completed goals")
        return len(self._active)

    def get_goal(self, goal_id: str) -> Goal:
        """Find a goal in either set.

        Raises:
            GoalNotFoundError: If no goal has this id
        """
        for goal in self._active + self._completed:
            if goal.id == goal_id:
                return goal
        raise GoalNotFoundError(f"No goal with id '{goal_id}'")

    def create_goal(
        self,
        title: str | None,
        target_value: float,
        period: GoalPeriod | None = None,
        duration_days: int | None = None,
        metric: AchievementType | None = None,
    ) -> Goal:
        """Create a goal starting now.

        Args:
            title: Display title; defaults to the metric name for type-scoped goals
            target_value: Value to reach (seconds for title goals)
            period: Window length as a period; mutually exclusive with duration_days
            duration_days: Window length in days
            metric: Makes the goal type-scoped, tracking that metric's live value

        Raises:
            ValidationError: Naming the offending field
        """
        if metric is not None and not title:
            title = metric.value
        if not title or not title.strip():
            raise ValidationError("title", "must not be empty")
        if target_value <= 0:
            raise ValidationError("target_value", "must be > 0")
        if (period is None) == (duration_days is None):
            raise ValidationError("period", "give exactly one of period or duration_days")
        if duration_days is not None and duration_days < 1:
            raise ValidationError("duration_days", "must be >= 1")

        start = self._clock()
        goal = Goal(
            title=title.strip(),
            target_value=float(target_value),
            current_value=float(self._progress.value_for(metric)) if metric else 0.0,
            metric=metric,
            period=period,
            duration_days=duration_days,
            start_date=start,
            end_date=self._end_date(start, period, duration_days),
        )
        if is_goal_completed(goal):
            goal.is_active = False
            self._completed.append(goal)
        else:
            self._active.append(goal)
        self._save()
        return goal

    def update_progress(self, goal_id: str, delta: float) -> Goal:
        """Add ``delta`` to an active goal, completing it if the target is reached.

        Raises:
            ValidationError: If delta is negative
            GoalNotFoundError: If no active goal has this id
        """
        if delta < 0:
            raise ValidationError("delta", "must be >= 0")
        goal = self._find_active(goal_id)
        goal.current_value += delta
        self._settle([goal])
        self._save()
        return goal

    def record_session(self, record: SessionRecord) -> list[Goal]:
        """Credit a finished session's duration to the title goals whose window holds it.

        Returns:
            The goals that were credited
        """
        credited = [
            goal
            for goal in self._active
            if goal.metric is None and goal.contains(record.started_at)
        ]
        for goal in credited:
            goal.current_value += record.duration
        if credited:
            self._settle(credited)
            self._save()
        return credited

    def refresh_progress(self) -> None:
        """Pull live metric values into every type-scoped active goal.

        Values only move up; an explicit reset is the only way down.
        """
        changed = []
        for goal in self._active:
            if goal.metric is None:
                continue
            derived = float(self._progress.value_for(goal.metric))
            if derived > goal.current_value:
                goal.current_value = derived
                changed.append(goal)
        if changed:
            self._settle(changed)
            self._save()

    def delete_goal(self, goal_id: str) -> bool:
        """Remove a goal from the active set. Completed goals are kept."""
        remaining = [g for g in self._active if g.id != goal_id]
        if len(remaining) == len(self._active):
            return False
        self._active = remaining
        self._save()
        return True

    def reset_goal(self, goal_id: str) -> Goal:
        """Zero a goal's progress, restart its window from now and reactivate it.

        Raises:
            GoalNotFoundError: If no goal has this id
        """
        goal = self.get_goal(goal_id)
        start = self._clock()
        goal.current_value = 0.0
        goal.start_date = start
        goal.end_date = self._end_date(start, goal.period, goal.duration_days)
        goal.is_active = True
        self._completed = [g for g in self._completed if g.id != goal_id]
        if goal not in self._active:
            self._active.append(goal)
        self._save()
        return goal

    def reset_all(self) -> None:
        self._active = []
        self._completed = []
        self._save()

    def suggested_goals(self) -> list[tuple[str, float, GoalPeriod]]:
        """Suggestions whose title is not already an active goal."""
        taken = {goal.title for goal in self._active}
        return [s for s in SUGGESTED_GOALS if s[0] not in taken]

    def adopt_suggestion(self, title: str) -> Goal:
        """Create a goal from one of the current suggestions.

        Raises:
            ValidationError: If the title is not an available suggestion
        """
        for suggested_title, target, period in self.suggested_goals():
            if suggested_title == title:
                return self.create_goal(suggested_title, target, period=period)
        raise ValidationError("title", f"'{title}' is not an available suggestion")

    def progress_for_period(self, period: GoalPeriod) -> float:
        """Progress of title goals with this period that started within the current period."""
        now = self._clock()
        if period is GoalPeriod.DAILY:
            period_start = start_of_day(now)
        elif period is GoalPeriod.WEEKLY:
            period_start = start_of_week(now)
        else:
            period_start = start_of_month(now)
        return sum(
            goal.current_value
            for goal in self._active + self._completed
            if goal.period is period and goal.metric is None and goal.start_date >= period_start
        )

    def recommended_target(self, period: GoalPeriod) -> float:
        """Suggest a target a little above recent progress, never below the minimum."""
        minimum, growth = RECOMMENDATION_RULES[period]
        return max(minimum, self.progress_for_period(period) * growth)

    def completion_rate(self) -> float:
        """Share of all goals that have been completed."""
        total = len(self._active) + len(self._completed)
        if total == 0:
            return 0.0
        return len(self._completed) / total

    def _settle(self, goals: list[Goal]) -> None:
        """Move completed goals from the active set to the completed set in one step."""
        done = [g for g in goals if is_goal_completed(g) and g in self._active]
        if not done:
            return
        for goal in done:
            goal.is_active = False
            logger.info(f"Goal completed: {goal.title}")
        self._active = [g for g in self._active if g not in done]
        self._completed = self._completed + done

    def _find_active(self, goal_id: str) -> Goal:
        for goal in self._active:
            if goal.id == goal_id:
                return goal
        raise GoalNotFoundError(f"No active goal with id '{goal_id}'")

    @staticmethod
    def _end_date(
        start: datetime, period: GoalPeriod | None, duration_days: int | None
    ) -> datetime:
        if period is not None:
            return period.add_to(start)
        return start + timedelta(days=duration_days or 0)

    def _on_progress_recomputed(self, result: RecomputeResult) -> None:
        self.refresh_progress()

    def _load_goals(self, key: str) -> list[Goal]:
        goals = []
        for item in load_json(self._storage, key, []) or []:
            try:
                goals.append(Goal.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping unreadable goal entry: {e}")
        return goals

    def _save(self) -> bool:
        active_ok = save_json(self._storage, ACTIVE_GOALS_KEY, [g.to_dict() for g in self._active])
        completed_ok = save_json(
            self._storage, COMPLETED_GOALS_KEY, [g.to_dict() for g in self._completed]
        )
        return active_ok and completed_ok
