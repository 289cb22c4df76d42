"""Tests for BreathingSessionController and AppContext."""

import pytest

from breathe_trainer.config import create_default_config
from breathe_trainer.exceptions import (
    AlreadyRunningError,
    PatternNotFoundError,
    ValidationError,
)
from breathe_trainer.models import BreathPhase
from breathe_trainer.orchestration import AppContext
from breathe_trainer.services import MemoryStorage, SqliteStorage


class TestStart:
    """Tests for starting sessions through the controller."""

    def test_unknown_pattern_raises(self, context):
        with pytest.raises(PatternNotFoundError):
            context.sessions.start("missing")

    def test_speed_defaults_to_settings(self, context, monotonic):
        context.settings.update(speed_multiplier=1.5)
        context.sessions.start("box")
        monotonic.advance(5.0)
        assert context.sessions.tick().phase is BreathPhase.INHALE
        monotonic.advance(1.0)
        assert context.sessions.tick().phase is BreathPhase.HOLD_AFTER_INHALE

    def test_cycle_override(self, context, monotonic):
        context.sessions.start("box", cycles=1)
        monotonic.advance(16.0)
        context.sessions.tick()
        assert context.sessions.is_running is False
        assert context.sessions.last_record.cycles == 1

    def test_invalid_cycle_override(self, context):
        with pytest.raises(ValidationError) as exc_info:
            context.sessions.start("box", cycles=0)
        assert exc_info.value.field == "cycles"

    def test_second_start_raises(self, context):
        context.sessions.start("box")
        with pytest.raises(AlreadyRunningError):
            context.sessions.start("relax")


class TestAudio:
    """Tests for sound cues."""

    def test_loop_and_cues_when_sound_enabled(self, context, audio, monotonic):
        context.sessions.start("box")
        monotonic.advance(4.0)
        context.sessions.tick()
        context.sessions.stop()

        assert ("loop", "nature", 0.7) in audio.calls
        assert ("cue", "inhale") in audio.calls
        assert ("cue", "hold_after_inhale") in audio.calls
        assert audio.calls[-1] == ("stop",)

    def test_silent_when_sound_disabled(self, context, audio, monotonic):
        context.settings.update(sound_enabled=False)
        context.sessions.start("box")
        monotonic.advance(4.0)
        context.sessions.tick()
        context.sessions.stop()
        assert audio.calls == [("stop",)]

    def test_audio_failure_does_not_stop_session(self, context, audio):
        def broken(*args):
            raise RuntimeError("no device")

        audio.play_loop = broken
        context.sessions.start("box")
        assert context.sessions.is_running is True


class TestHaptics:
    """Tests for tap and vibration feedback on phase changes."""

    def test_pulse_and_vibrate_on_each_phase(self, context, haptics, monotonic):
        context.sessions.start("box")
        monotonic.advance(4.0)
        context.sessions.tick()

        assert haptics.calls == [
            ("pulse", "inhale"),
            ("vibrate",),
            ("pulse", "hold_after_inhale"),
            ("vibrate",),
        ]

    def test_flags_switch_feedback_off(self, context, haptics, monotonic):
        context.settings.update(haptic_enabled=False)
        context.sessions.start("box")
        assert haptics.calls == [("vibrate",)]

        context.sessions.stop()
        context.settings.update(vibration_enabled=False)
        context.sessions.start("box")
        assert haptics.calls == [("vibrate",)]

    def test_haptics_failure_does_not_stop_session(self, context, haptics):
        def broken(*args):
            raise RuntimeError("no motor")

        haptics.pulse = broken
        context.sessions.start("box")
        assert context.sessions.is_running is True


class TestFinalize:
    """Tests for turning finished runs into history records."""

    def test_stop_without_cycles_records_nothing(self, context, monotonic):
        finalized = []
        context.on_session_finalized.subscribe(finalized.append)
        context.sessions.start("box")
        monotonic.advance(10.0)
        context.sessions.tick()

        assert context.sessions.stop() is None
        assert context.history.total_sessions == 0
        assert finalized == []

    def test_stop_after_cycle_records_session(self, context, monotonic, wall_clock):
        finalized = []
        context.on_session_finalized.subscribe(finalized.append)
        context.sessions.start("relax")
        monotonic.advance(20.0)
        context.sessions.tick()

        record = context.sessions.stop()
        assert record.cycles == 1
        assert record.duration == pytest.approx(20.0)
        assert record.pattern_id == "relax"
        assert record.started_at == wall_clock.now
        assert context.history.sessions == (record,)
        assert finalized == [record]

    def test_stop_while_idle(self, context):
        assert context.sessions.stop() is None

    def test_finalized_after_goals_credited(self, context, monotonic):
        goal = context.goals.create_goal("Daily", 600, duration_days=1)
        seen = []
        context.on_session_finalized.subscribe(lambda record: seen.append(goal.current_value))
        context.sessions.start("box", cycles=1)
        monotonic.advance(16.0)
        context.sessions.tick()
        assert seen == [pytest.approx(16.0)]

    def test_unlocks_announced_after_finalized(self, context, monotonic, make_record):
        for _ in range(4):
            context.history.append(make_record(duration=16.0, cycles=1))
        events = []
        context.on_session_finalized.subscribe(lambda record: events.append("finalized"))
        context.on_achievement_unlocked.subscribe(lambda a: events.append(a.id))

        context.sessions.start("box", cycles=1)
        monotonic.advance(16.0)
        context.sessions.tick()

        assert events == ["finalized", "sessions_5"]

    def test_run_until_finished(self, context, monotonic):
        context.sessions.start("box", cycles=2)
        record = context.sessions.run_until_finished(monotonic.advance, 0.5)
        assert record.cycles == 2
        assert record.duration == pytest.approx(32.0)

    def test_run_until_interrupted(self, context, monotonic):
        context.sessions.start("box")
        ticks = iter(range(40))
        record = context.sessions.run_until_finished(
            monotonic.advance, 0.5, should_continue=lambda: next(ticks) < 39
        )
        assert record.cycles == 1
        assert context.sessions.is_running is False


class TestAppContext:
    """Tests for wiring and loading."""

    def test_create_uses_sqlite_by_default(self, test_config):
        context = AppContext.create(test_config)
        assert isinstance(context.storage, SqliteStorage)
        assert test_config.database_path.exists()

    def test_falls_back_to_memory(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        config = create_default_config(data_dir=blocker)
        context = AppContext.create(config)
        assert isinstance(context.storage, MemoryStorage)

    def test_state_survives_restart(self, test_config, monotonic):
        first = AppContext.create(test_config, monotonic=monotonic)
        first.sessions.start("box", cycles=1)
        monotonic.advance(16.0)
        first.sessions.tick()

        second = AppContext.create(test_config)
        assert second.history.total_sessions == 1
        assert "time_60" not in {a.id for a in second.progress.unlocked_achievements}

    def test_achievement_notifications(self, context, notifier, make_record):
        context.history.append(make_record(duration=61))
        assert [a.id for a in notifier.unlocked] == ["time_60"]

    def test_notifier_failure_is_contained(self, context, notifier, make_record):
        def broken(achievement):
            raise RuntimeError("tray gone")

        notifier.notify_achievement_unlocked = broken
        context.history.append(make_record(duration=61))
        assert context.progress.unlocked_achievements

    def test_reminder_validation(self, context, notifier):
        context.schedule_daily_reminder(20, 30)
        assert notifier.reminders == [(20, 30)]
        with pytest.raises(ValidationError) as exc_info:
            context.schedule_daily_reminder(24, 0)
        assert exc_info.value.field == "hour"
        with pytest.raises(ValidationError):
            context.schedule_daily_reminder(8, 60)

        context.cancel_daily_reminder()
        assert notifier.cancelled == 1

    def test_reset_progress(self, context, make_record):
        context.history.append(make_record(duration=61))
        context.goals.create_goal("Daily", 600, duration_days=1)
        context.reset_progress()

        assert context.history.total_sessions == 0
        assert context.progress.unlocked_achievements == []
        assert context.goals.active_goals == []
