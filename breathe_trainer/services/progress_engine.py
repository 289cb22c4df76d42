"""Derive achievements, streaks and weekly activity from session history."""

import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from datetime import date, datetime, timedelta

from breathe_trainer.interfaces import StorageBackend
from breathe_trainer.models import Achievement, AchievementType, RecomputeResult, SessionRecord
from breathe_trainer.services.history_store import HistoryStore
from breathe_trainer.services.storage import load_json, remove_key, save_json
from breathe_trainer.utils import EventHook, last_n_days, start_of_week

logger = logging.getLogger(__name__)

ACHIEVEMENTS_KEY = "achievements"
WEEKLY_STATS_KEY = "weekly_stats"

# (type, id, title, description, required value, icon)
# fmt: off
ACHIEVEMENT_CATALOG = [
    (AchievementType.SESSION_COUNT, "sessions_5", "Beginner", "Complete 5 sessions", 5, "1.circle.fill"),
    (AchievementType.SESSION_COUNT, "sessions_25", "Regular", "Complete 25 sessions", 25, "2.circle.fill"),
    (AchievementType.SESSION_COUNT, "sessions_100", "Master", "Complete 100 sessions", 100, "3.circle.fill"),
    (AchievementType.TOTAL_TIME, "time_60", "1 Minute Breather", "Breathe for 1 minute in total", 60, "timer"),
    (AchievementType.TOTAL_TIME, "time_3600", "Time Keeper", "Practice for 1 hour total", 3600, "clock.fill"),
    (AchievementType.TOTAL_TIME, "time_18000", "Dedicated", "Practice for 5 hours total", 18000, "clock.badge.fill"),
    (AchievementType.TOTAL_CYCLES, "cycles_50", "Cycle Starter", "Complete 50 cycles", 50, "arrow.triangle.2.circlepath"),
    (AchievementType.TOTAL_CYCLES, "cycles_500", "Cycle Master", "Complete 500 cycles", 500, "arrow.triangle.2.circlepath.circle.fill"),
    (AchievementType.STREAK, "streak_3", "3-Day Streak", "Practice for 3 days in a row", 3, "flame.fill"),
    (AchievementType.STREAK, "streak_7", "7-Day Streak", "Practice for 7 days in a row", 7, "flame.circle.fill"),
    (AchievementType.MODE_MASTERY, "mastery_box", "Box Master", "Complete 10 box breathing sessions", 10, "square.fill"),
    (AchievementType.MODE_MASTERY, "mastery_relax", "Relax Master", "Complete 10 relax breathing sessions", 10, "leaf.fill"),
]
# fmt: on


def build_achievement_catalog() -> list[Achievement]:
    """Fresh, all-locked copy of the achievement catalog."""
    return [
        Achievement(
            id=achievement_id,
            type=achievement_type,
            title=title,
            description=description,
            required_value=required,
            icon=icon,
        )
        for (
            achievement_type,
            achievement_id,
            title,
            description,
            required,
            icon,
        ) in ACHIEVEMENT_CATALOG
    ]


def calculate_streak(sessions: Iterable[SessionRecord], today: date) -> int:
    """Consecutive calendar days, ending today, with at least one session.

    A day without sessions today means no streak, whatever happened before.
    """
    practised_days = {record.started_at.date() for record in sessions}
    streak = 0
    day = today
    while day in practised_days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def calculate_weekly_stats(
    sessions: Iterable[SessionRecord], today: date, days: int = 7
) -> dict[date, int]:
    """Session count per calendar day for the ``days`` days ending today, oldest first."""
    stats = {day: 0 for day in last_n_days(today, days)}
    for record in sessions:
        day = record.started_at.date()
        if day in stats:
            stats[day] += 1
    return stats


def count_pattern_sessions(sessions: Iterable[SessionRecord], pattern_id: str) -> int:
    return sum(1 for record in sessions if record.pattern_id == pattern_id)


def metric_value(
    metric: AchievementType,
    sessions: Iterable[SessionRecord],
    today: date,
    reference_pattern: str = "box",
) -> int:
    """Current value of a progress metric, derived purely from the sessions."""
    sessions = list(sessions)
    if metric is AchievementType.SESSION_COUNT:
        return len(sessions)
    if metric is AchievementType.TOTAL_TIME:
        return int(sum(record.duration for record in sessions))
    if metric is AchievementType.TOTAL_CYCLES:
        return sum(record.cycles for record in sessions)
    if metric is AchievementType.STREAK:
        return calculate_streak(sessions, today)
    return count_pattern_sessions(sessions, reference_pattern)


class ProgressEngine:
    """Keeps achievements and weekly stats in step with the history log.

    Registers itself on the history's change event at construction, so every
    append or clear is followed by a synchronous recompute. Every mode
    mastery achievement counts sessions of the single reference pattern.

    Events:
        on_achievement_unlocked: once per achievement, when it unlocks
        on_recomputed: after every recompute, with its result
    """

    def __init__(
        self,
        history: HistoryStore,
        storage: StorageBackend,
        reference_pattern: str = "box",
        weekly_stats_days: int = 7,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._history = history
        self._storage = storage
        self._reference_pattern = reference_pattern
        self._weekly_stats_days = weekly_stats_days
        self._clock = clock
        self._achievements = build_achievement_catalog()
        self._weekly_stats: dict[date, int] = {}
        self._held_unlocks: list[Achievement] | None = None
        self.on_achievement_unlocked: EventHook[Achievement] = EventHook("achievement_unlocked")
        self.on_recomputed: EventHook[RecomputeResult] = EventHook("progress_recomputed")
        history.on_change.subscribe(self._on_history_changed)

    @property
    def achievements(self) -> list[Achievement]:
        return list(self._achievements)

    @property
    def unlocked_achievements(self) -> list[Achievement]:
        return [a for a in self._achievements if a.is_unlocked]

    @property
    def weekly_stats(self) -> dict[date, int]:
        return dict(self._weekly_stats)

    def load(self) -> None:
        """Load persisted achievement unlock state and weekly stats.

        Stored achievements are matched to the catalog by id; catalog entries
        missing from storage start locked and unknown stored ids are dropped.
        """
        stored: dict[str, Achievement] = {}
        for item in load_json(self._storage, ACHIEVEMENTS_KEY, []) or []:
            try:
                achievement = Achievement.from_dict(item)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping unreadable achievement entry: {e}")
                continue
            stored[achievement.id] = achievement

        catalog = build_achievement_catalog()
        for achievement in catalog:
            previous = stored.get(achievement.id)
            if previous is not None and previous.is_unlocked:
                achievement.unlock(previous.date_unlocked or self._clock())
        self._achievements = catalog

        weekly: dict[date, int] = {}
        raw_weekly = load_json(self._storage, WEEKLY_STATS_KEY, {})
        for key, count in (raw_weekly if isinstance(raw_weekly, dict) else {}).items():
            try:
                weekly[date.fromisoformat(key)] = int(count)
            except (TypeError, ValueError):
                logger.warning(f"Skipping unreadable weekly stats entry: {key}")
        self._weekly_stats = dict(sorted(weekly.items()))
        logger.info(f"Loaded {len(self.unlocked_achievements)} unlocked achievements")

    def value_for(self, metric: AchievementType) -> int:
        """Live value of a metric over the current history."""
        return metric_value(
            metric, self._history.sessions, self._clock().date(), self._reference_pattern
        )

    @property
    def current_streak(self) -> int:
        return self.value_for(AchievementType.STREAK)

    def recompute(self, sessions: Iterable[SessionRecord] | None = None) -> RecomputeResult:
        """Re-derive achievements and weekly stats from the session log.

        Achievements already unlocked are never re-evaluated or re-announced.
        Achievements are persisted only when one changed; weekly stats are
        replaced wholesale. Unlock events fire after persistence.
        """
        records = list(self._history.sessions if sessions is None else sessions)
        now = self._clock()
        today = now.date()

        values: dict[AchievementType, int] = {}
        unlocked: list[Achievement] = []
        for achievement in self._achievements:
            if achievement.is_unlocked:
                continue
            if achievement.type not in values:
                values[achievement.type] = metric_value(
                    achievement.type, records, today, self._reference_pattern
                )
            if values[achievement.type] >= achievement.required_value:
                achievement.unlock(now)
                unlocked.append(achievement)

        if unlocked:
            self._save_achievements()

        self._weekly_stats = calculate_weekly_stats(records, today, self._weekly_stats_days)
        self._save_weekly_stats()

        for achievement in unlocked:
            logger.info(f"Achievement unlocked: {achievement.title}")
            if self._held_unlocks is not None:
                self._held_unlocks.append(achievement)
            else:
                self.on_achievement_unlocked.emit(achievement)

        result = RecomputeResult(
            unlocked=unlocked,
            weekly_stats=self.weekly_stats,
            streak=calculate_streak(records, today),
        )
        self.on_recomputed.emit(result)
        return result

    def daily_goal_progress(self, daily_goal_seconds: float) -> float:
        """Fraction of today's practice goal reached, capped at 1.0."""
        if daily_goal_seconds <= 0:
            return 1.0
        practised = self._history.time_practised_on(self._clock().date())
        return min(practised / daily_goal_seconds, 1.0)

    def weekly_goal_progress(self, weekly_goal_seconds: float) -> float:
        """Fraction of this week's (Monday onwards) practice goal reached, capped at 1.0."""
        if weekly_goal_seconds <= 0:
            return 1.0
        practised = self._history.time_practised_since(start_of_week(self._clock()))
        return min(practised / weekly_goal_seconds, 1.0)

    @contextmanager
    def holding_unlocks(self) -> Iterator[None]:
        """Defer unlock events raised inside the block until it exits.

        Unlocks are still applied and persisted immediately; only the
        ``on_achievement_unlocked`` announcements wait.
        """
        if self._held_unlocks is not None:
            yield
            return
        self._held_unlocks = []
        try:
            yield
        finally:
            held, self._held_unlocks = self._held_unlocks, None
            for achievement in held:
                self.on_achievement_unlocked.emit(achievement)

    def reset_achievements(self) -> bool:
        """Lock every achievement again."""
        self._achievements = build_achievement_catalog()
        return self._save_achievements()

    def reset_weekly_stats(self) -> bool:
        self._weekly_stats = {}
        return remove_key(self._storage, WEEKLY_STATS_KEY)

    def _on_history_changed(self, sessions: tuple[SessionRecord, ...]) -> None:
        self.recompute(sessions)

    def _save_achievements(self) -> bool:
        return save_json(
            self._storage, ACHIEVEMENTS_KEY, [a.to_dict() for a in self._achievements]
        )

    def _save_weekly_stats(self) -> bool:
        return save_json(
            self._storage,
            WEEKLY_STATS_KEY,
            {day.isoformat(): count for day, count in self._weekly_stats.items()},
        )
