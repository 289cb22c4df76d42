"""Tests for ProgressEngine and the progress calculations."""

from datetime import date, datetime, timedelta

import pytest

from breathe_trainer.models import AchievementType
from breathe_trainer.services import HistoryStore, ProgressEngine
from breathe_trainer.services.progress_engine import (
    ACHIEVEMENT_CATALOG,
    ACHIEVEMENTS_KEY,
    WEEKLY_STATS_KEY,
    calculate_streak,
    calculate_weekly_stats,
    metric_value,
)

TODAY = datetime(2026, 3, 11, 10, 0)


@pytest.fixture
def history(memory_storage):
    return HistoryStore(memory_storage)


@pytest.fixture
def engine(history, memory_storage, wall_clock):
    progress = ProgressEngine(history, memory_storage, clock=wall_clock)
    progress.load()
    return progress


@pytest.fixture
def unlocked_events(engine):
    seen = []
    engine.on_achievement_unlocked.subscribe(seen.append)
    return seen


def days_ago(days: int, hour: int = 9) -> datetime:
    return TODAY.replace(hour=hour) - timedelta(days=days)


class TestStreak:
    """Tests for calculate_streak."""

    def test_three_consecutive_days(self, make_record):
        sessions = [make_record(started_at=days_ago(d)) for d in (0, 1, 2)]
        assert calculate_streak(sessions, TODAY.date()) == 3

    def test_gap_ends_streak(self, make_record):
        sessions = [make_record(started_at=days_ago(d)) for d in (0, 1, 2, 4, 5)]
        assert calculate_streak(sessions, TODAY.date()) == 3

    def test_no_session_today_means_zero(self, make_record):
        sessions = [make_record(started_at=days_ago(d)) for d in (1, 2, 3)]
        assert calculate_streak(sessions, TODAY.date()) == 0

    def test_several_sessions_same_day_count_once(self, make_record):
        sessions = [make_record(started_at=days_ago(0, hour)) for hour in (7, 8, 9)]
        assert calculate_streak(sessions, TODAY.date()) == 1

    def test_empty(self):
        assert calculate_streak([], TODAY.date()) == 0


class TestWeeklyStats:
    """Tests for calculate_weekly_stats."""

    def test_seven_days_oldest_first(self, make_record):
        sessions = [
            make_record(started_at=days_ago(0)),
            make_record(started_at=days_ago(0, 18)),
            make_record(started_at=days_ago(3)),
            make_record(started_at=days_ago(9)),
        ]
        stats = calculate_weekly_stats(sessions, TODAY.date())

        days = list(stats)
        assert len(days) == 7
        assert days[0] == date(2026, 3, 5)
        assert days[-1] == date(2026, 3, 11)
        assert stats[date(2026, 3, 11)] == 2
        assert stats[date(2026, 3, 8)] == 1
        assert sum(stats.values()) == 3


class TestMetricValue:
    """Tests for metric_value."""

    def test_each_metric(self, make_record):
        sessions = [
            make_record(duration=30.9, cycles=2, pattern_id="box"),
            make_record(duration=19.5, cycles=1, pattern_id="relax"),
        ]
        today = TODAY.date()
        assert metric_value(AchievementType.SESSION_COUNT, sessions, today) == 2
        assert metric_value(AchievementType.TOTAL_TIME, sessions, today) == 50
        assert metric_value(AchievementType.TOTAL_CYCLES, sessions, today) == 3
        assert metric_value(AchievementType.STREAK, sessions, today) == 1
        assert metric_value(AchievementType.MODE_MASTERY, sessions, today) == 1
        assert metric_value(AchievementType.MODE_MASTERY, sessions, today, "relax") == 1


class TestRecompute:
    """Tests for unlocking achievements."""

    def test_catalog_starts_locked(self, engine):
        assert len(engine.achievements) == len(ACHIEVEMENT_CATALOG)
        assert engine.unlocked_achievements == []

    def test_beginner_unlocks_on_fifth_session(self, history, engine, unlocked_events, make_record):
        for _ in range(4):
            history.append(make_record(duration=5, cycles=1))
        assert "sessions_5" not in {a.id for a in unlocked_events}

        history.append(make_record(duration=5, cycles=1))
        assert "sessions_5" in {a.id for a in unlocked_events}

    def test_unlock_announced_once(self, history, engine, unlocked_events, make_record):
        history.append(make_record(duration=61))
        first = engine.recompute()
        second = engine.recompute()

        assert [a.id for a in unlocked_events] == ["time_60"]
        assert first.unlocked == []
        assert second.unlocked == []

    def test_unlocks_never_revert(self, history, engine, make_record):
        history.append(make_record(duration=61))
        history.clear()
        assert "time_60" in {a.id for a in engine.unlocked_achievements}

    def test_unlock_date_is_now(self, history, engine, wall_clock, make_record):
        history.append(make_record(duration=61))
        achievement = next(a for a in engine.achievements if a.id == "time_60")
        assert achievement.date_unlocked == wall_clock.now

    def test_mastery_counts_reference_pattern_only(self, history, engine, make_record):
        for _ in range(10):
            history.append(make_record(duration=5, cycles=1, pattern_id="relax"))
        unlocked = {a.id for a in engine.unlocked_achievements}
        assert "mastery_box" not in unlocked
        assert "mastery_relax" not in unlocked

        for _ in range(10):
            history.append(make_record(duration=5, cycles=1, pattern_id="box"))
        unlocked = {a.id for a in engine.unlocked_achievements}
        assert {"mastery_box", "mastery_relax"} <= unlocked

    def test_achievements_saved_only_on_change(self, history, engine, memory_storage, make_record):
        history.append(make_record(duration=5, cycles=1))
        assert memory_storage.get(ACHIEVEMENTS_KEY) is None

        history.append(make_record(duration=61, cycles=1))
        assert memory_storage.get(ACHIEVEMENTS_KEY) is not None

    def test_unlock_event_after_persistence(self, history, engine, memory_storage, make_record):
        stored_at_event = []
        engine.on_achievement_unlocked.subscribe(
            lambda achievement: stored_at_event.append(memory_storage.get(ACHIEVEMENTS_KEY))
        )
        history.append(make_record(duration=61))
        assert stored_at_event and stored_at_event[0] is not None

    def test_recomputed_event(self, history, engine, make_record):
        results = []
        engine.on_recomputed.subscribe(results.append)
        history.append(make_record())

        assert len(results) == 1
        assert results[0].streak == 1
        assert sum(results[0].weekly_stats.values()) == 1

    def test_holding_unlocks_defers_events(self, history, engine, unlocked_events, make_record):
        with engine.holding_unlocks():
            history.append(make_record(duration=61))
            assert unlocked_events == []
            assert [a.id for a in engine.unlocked_achievements] == ["time_60"]
        assert [a.id for a in unlocked_events] == ["time_60"]

    def test_nested_hold_releases_at_outer_exit(self, history, engine, unlocked_events, make_record):
        with engine.holding_unlocks():
            with engine.holding_unlocks():
                history.append(make_record(duration=61))
            assert unlocked_events == []
        assert len(unlocked_events) == 1


class TestPersistence:
    """Tests for loading stored progress."""

    def test_unlocks_survive_reload(self, history, engine, memory_storage, wall_clock, make_record):
        history.append(make_record(duration=61))

        reloaded = ProgressEngine(HistoryStore(memory_storage), memory_storage, clock=wall_clock)
        reloaded.load()
        assert [a.id for a in reloaded.unlocked_achievements] == ["time_60"]

    def test_weekly_stats_stored_as_iso_dates(self, history, engine, memory_storage, make_record):
        history.append(make_record())
        assert b'"2026-03-11": 1' in memory_storage.get(WEEKLY_STATS_KEY)

        reloaded = ProgressEngine(HistoryStore(memory_storage), memory_storage)
        reloaded.load()
        assert reloaded.weekly_stats[date(2026, 3, 11)] == 1

    def test_unknown_stored_ids_dropped(self, memory_storage, wall_clock):
        memory_storage.set(
            ACHIEVEMENTS_KEY,
            b'[{"id": "retired", "type": "Total Time", "title": "Old",'
            b' "requiredValue": 1, "isUnlocked": true}]',
        )
        engine = ProgressEngine(HistoryStore(memory_storage), memory_storage, clock=wall_clock)
        engine.load()
        assert len(engine.achievements) == len(ACHIEVEMENT_CATALOG)
        assert engine.unlocked_achievements == []


class TestGoalRatios:
    """Tests for daily and weekly practice ratios."""

    def test_daily_ratio_capped(self, history, engine, make_record):
        history.append(make_record(duration=150))
        assert engine.daily_goal_progress(300) == pytest.approx(0.5)
        history.append(make_record(duration=400))
        assert engine.daily_goal_progress(300) == 1.0

    def test_weekly_ratio_counts_from_monday(self, history, engine, make_record):
        history.append(make_record(started_at=datetime(2026, 3, 9, 7, 0), duration=700))
        history.append(make_record(started_at=datetime(2026, 3, 8, 7, 0), duration=700))
        assert engine.weekly_goal_progress(2100) == pytest.approx(700 / 2100)

    def test_zero_goal_counts_as_reached(self, engine):
        assert engine.daily_goal_progress(0) == 1.0


class TestReset:
    """Tests for resetting progress."""

    def test_reset_achievements(self, history, engine, make_record):
        history.append(make_record(duration=61))
        engine.reset_achievements()
        assert engine.unlocked_achievements == []

    def test_reset_weekly_stats(self, history, engine, memory_storage, make_record):
        history.append(make_record())
        engine.reset_weekly_stats()
        assert engine.weekly_stats == {}
        assert memory_storage.get(WEEKLY_STATS_KEY) is None
