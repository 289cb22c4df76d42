"""Tests for data models."""

from datetime import datetime, timedelta

import pytest

from breathe_trainer.exceptions import ValidationError
from breathe_trainer.models import (
    Achievement,
    AchievementType,
    BreathingPattern,
    BreathingSettings,
    BreathingSpeed,
    BreathPhase,
    Goal,
    GoalPeriod,
    SessionFinalization,
    SessionRecord,
    TimerSnapshot,
    is_goal_completed,
)
from breathe_trainer.models.goal import add_months


class TestBreathPhase:
    def test_next_wraps(self):
        assert BreathPhase.INHALE.next() is BreathPhase.HOLD_AFTER_INHALE
        assert BreathPhase.HOLD_AFTER_EXHALE.next() is BreathPhase.INHALE

    def test_is_hold(self):
        assert BreathPhase.HOLD_AFTER_INHALE.is_hold
        assert not BreathPhase.EXHALE.is_hold


class TestBreathingSpeed:
    def test_multipliers(self):
        assert BreathingSpeed.SLOW.multiplier == 1.5
        assert BreathingSpeed.NORMAL.multiplier == 1.0
        assert BreathingSpeed.FAST.multiplier == 0.7

    def test_from_multiplier(self):
        assert BreathingSpeed.from_multiplier(0.7) is BreathingSpeed.FAST
        assert BreathingSpeed.from_multiplier(2.0) is None


class TestBreathingPattern:
    """Tests for BreathingPattern."""

    @pytest.fixture
    def pattern(self):
        return BreathingPattern(
            id="p1",
            name="Deep",
            inhale=8,
            hold_after_inhale=6,
            exhale=10,
            hold_after_exhale=2,
            cycles=12,
            is_custom=True,
            created_at=datetime(2026, 1, 2, 3, 4),
        )

    def test_cycle_and_session_time(self, pattern):
        assert pattern.cycle_duration == 26
        assert pattern.total_session_time == 312

    def test_open_ended_has_no_session_time(self, pattern):
        open_ended = BreathingPattern(
            id="x", name="x", inhale=4, hold_after_inhale=4, exhale=4, hold_after_exhale=4
        )
        assert open_ended.total_session_time is None

    def test_signature(self, pattern):
        assert pattern.signature == "8-6-10-2"

    def test_tags(self, pattern):
        assert pattern.tags == ["Deep Breathing", "Hold Focus", "Long Exhale", "Endurance"]

    def test_difficulty_level(self, pattern):
        # 26 s x 12 cycles x (1 + 8/26) / 100
        assert pattern.difficulty == pytest.approx(4.08)
        assert pattern.difficulty_level == "Beginner"

    def test_dict_uses_stored_keys(self, pattern):
        data = pattern.to_dict()
        assert data["inhaleDuration"] == 8
        assert data["hold1Duration"] == 6
        assert data["hold2Duration"] == 2
        assert BreathingPattern.from_dict(data) == pattern


class TestSessionRecord:
    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            SessionRecord(started_at=datetime.now(), duration=-1, cycles=1, pattern_id="box")

    def test_formatted_duration(self):
        record = SessionRecord(
            started_at=datetime.now(), duration=125.7, cycles=1, pattern_id="box"
        )
        assert record.formatted_duration == "2:05"

    def test_stored_keys(self):
        record = SessionRecord(
            started_at=datetime(2026, 3, 11, 9, 30), duration=64, cycles=4, pattern_id="box"
        )
        data = record.to_dict()
        assert data["date"] == "2026-03-11T09:30:00"
        assert data["completedCycles"] == 4
        assert data["mode"] == "box"


class TestTimerValues:
    def test_remaining_floored(self):
        snapshot = TimerSnapshot(
            is_running=True,
            phase=BreathPhase.INHALE,
            phase_elapsed=5.0,
            phase_duration=4.0,
            cycle_count=0,
            session_elapsed=5.0,
        )
        assert snapshot.remaining == 0.0
        assert snapshot.progress == 1.0

    def test_trivial_finalization(self):
        started = datetime(2026, 3, 11)
        assert SessionFinalization("box", started, 10.0, 0).is_trivial
        assert SessionFinalization("box", started, 0.0, 1).is_trivial
        assert not SessionFinalization("box", started, 16.0, 1).is_trivial


class TestAchievement:
    def test_unlock_is_one_way(self):
        achievement = Achievement(
            id="a", type=AchievementType.STREAK, title="t", description="d", required_value=3
        )
        first = datetime(2026, 3, 1)
        assert achievement.unlock(first) is True
        assert achievement.unlock(datetime(2026, 3, 2)) is False
        assert achievement.date_unlocked == first

    def test_dict_round_trip(self):
        achievement = Achievement(
            id="a",
            type=AchievementType.MODE_MASTERY,
            title="t",
            description="d",
            required_value=10,
            is_unlocked=True,
            date_unlocked=datetime(2026, 3, 1),
        )
        data = achievement.to_dict()
        assert data["type"] == "Mode Master"
        assert Achievement.from_dict(data) == achievement


class TestGoal:
    """Tests for Goal."""

    @pytest.fixture
    def goal(self):
        start = datetime(2026, 3, 11)
        return Goal(
            title="Daily",
            target_value=300,
            start_date=start,
            end_date=start + timedelta(days=1),
            period=GoalPeriod.DAILY,
        )

    def test_progress_capped(self, goal):
        goal.current_value = 450
        assert goal.progress == 1.0
        assert goal.progress_percentage == 100
        assert goal.remaining == 0

    def test_completion_rule(self, goal):
        goal.current_value = 299.9
        assert not is_goal_completed(goal)
        goal.current_value = 300
        assert is_goal_completed(goal)

    def test_overdue(self, goal):
        assert goal.is_overdue(datetime(2026, 3, 13)) is True
        assert goal.is_overdue(datetime(2026, 3, 11, 12)) is False
        assert goal.days_remaining(datetime(2026, 3, 11)) == 1

    def test_dict_round_trip(self, goal):
        goal.metric = AchievementType.TOTAL_TIME
        data = goal.to_dict()
        assert data["type"] == "Total Time"
        assert data["period"] == "daily"
        assert Goal.from_dict(data) == goal

    def test_add_months_clamps(self):
        assert add_months(datetime(2026, 1, 31), 1) == datetime(2026, 2, 28)
        assert add_months(datetime(2026, 12, 15), 1) == datetime(2027, 1, 15)


class TestBreathingSettings:
    def test_dict_round_trip(self):
        settings = BreathingSettings(volume=0.4, selected_theme_id="sleep")
        data = settings.to_dict()
        assert data["selectedThemeId"] == "sleep"
        assert BreathingSettings.from_dict(data) == settings
