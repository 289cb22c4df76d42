"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta

import pytest

from breathe_trainer.config import create_default_config
from breathe_trainer.exceptions import StorageError
from breathe_trainer.models import BreathingPattern, SessionRecord
from breathe_trainer.orchestration import AppContext
from breathe_trainer.services import MemoryStorage

# A Wednesday, so the current week started two days earlier
FIXED_NOW = datetime(2026, 3, 11, 10, 0, 0)


class FakeMonotonic:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


class FakeWallClock:
    """Manually advanced wall clock."""

    def __init__(self, start: datetime = FIXED_NOW):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class RecordingNotifier:
    """Notifier that remembers every call."""

    def __init__(self):
        self.unlocked = []
        self.reminders = []
        self.cancelled = 0

    def notify_achievement_unlocked(self, achievement):
        self.unlocked.append(achievement)

    def schedule_daily_reminder(self, hour, minute):
        self.reminders.append((hour, minute))

    def cancel_daily_reminder(self):
        self.cancelled += 1


class RecordingAudio:
    """Audio player that remembers every call."""

    def __init__(self):
        self.calls = []

    def play_loop(self, sound_id, volume):
        self.calls.append(("loop", sound_id, volume))

    def play_one_shot(self, phase_id):
        self.calls.append(("cue", phase_id))

    def stop_all(self):
        self.calls.append(("stop",))


class RecordingHaptics:
    """Haptics collaborator that remembers every call."""

    def __init__(self):
        self.calls = []

    def pulse(self, phase_id):
        self.calls.append(("pulse", phase_id))

    def vibrate(self):
        self.calls.append(("vibrate",))


class FailingStorage(MemoryStorage):
    """Memory storage whose writes can be switched to fail."""

    def __init__(self):
        super().__init__()
        self.fail_writes = False
        self.fail_reads = False

    def get(self, key):
        if self.fail_reads:
            raise StorageError("disk unavailable")
        return super().get(key)

    def set(self, key, value):
        if self.fail_writes:
            raise StorageError("disk full")
        super().set(key, value)

    def remove(self, key):
        if self.fail_writes:
            raise StorageError("disk full")
        super().remove(key)


@pytest.fixture
def memory_storage():
    """Provide an empty in-memory store."""
    return MemoryStorage()


@pytest.fixture
def failing_storage():
    return FailingStorage()


@pytest.fixture
def monotonic():
    return FakeMonotonic()


@pytest.fixture
def wall_clock():
    return FakeWallClock()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def haptics():
    return RecordingHaptics()


@pytest.fixture
def test_config(tmp_path):
    """Provide a test configuration with temporary paths."""
    return create_default_config(data_dir=tmp_path / "data")


@pytest.fixture
def make_record():
    """Factory fixture for SessionRecord instances with sensible defaults."""

    def _make(started_at=FIXED_NOW, duration=64.0, cycles=4, pattern_id="box"):
        return SessionRecord(
            started_at=started_at,
            duration=duration,
            cycles=cycles,
            pattern_id=pattern_id,
        )

    return _make


@pytest.fixture
def make_pattern():
    """Factory fixture for BreathingPattern instances."""

    def _make(
        inhale=4.0,
        hold_after_inhale=4.0,
        exhale=4.0,
        hold_after_exhale=4.0,
        cycles=None,
        pattern_id="test",
        name="Test Pattern",
    ):
        return BreathingPattern(
            id=pattern_id,
            name=name,
            inhale=inhale,
            hold_after_inhale=hold_after_inhale,
            exhale=exhale,
            hold_after_exhale=hold_after_exhale,
            cycles=cycles,
        )

    return _make


@pytest.fixture
def context(test_config, memory_storage, notifier, audio, haptics, wall_clock, monotonic):
    """Provide a fully wired and loaded AppContext on memory storage."""
    return AppContext.create(
        test_config,
        storage=memory_storage,
        notifier=notifier,
        audio=audio,
        haptics=haptics,
        clock=wall_clock,
        monotonic=monotonic,
    )
