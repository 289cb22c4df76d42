"""Tests for the storage backends and JSON helpers."""

import pytest

from breathe_trainer.exceptions import StorageError
from breathe_trainer.services import MemoryStorage, SqliteStorage
from breathe_trainer.services.storage import load_json, remove_key, save_json


class TestSqliteStorage:
    """Tests for SqliteStorage."""

    @pytest.fixture
    def storage(self, tmp_path):
        store = SqliteStorage(tmp_path / "breathe.db")
        store.load()
        return store

    def test_load_creates_parent_directories(self, tmp_path):
        db_path = tmp_path / "nested" / "breathe.db"
        storage = SqliteStorage(db_path)
        assert storage.load() is True
        assert db_path.exists()
        assert storage.is_available() is True

    def test_is_available_false_before_load(self, tmp_path):
        assert SqliteStorage(tmp_path / "breathe.db").is_available() is False

    def test_load_idempotent(self, storage):
        assert storage.load() is True

    def test_get_before_load_raises(self, tmp_path):
        with pytest.raises(StorageError):
            SqliteStorage(tmp_path / "breathe.db").get("settings")

    def test_set_get_replace(self, storage):
        assert storage.get("sessions") is None
        storage.set("sessions", b"[]")
        storage.set("sessions", b"[1]")
        assert storage.get("sessions") == b"[1]"

    def test_remove(self, storage):
        storage.set("weekly_stats", b"{}")
        storage.remove("weekly_stats")
        storage.remove("weekly_stats")
        assert storage.get("weekly_stats") is None

    def test_keys_sorted(self, storage):
        storage.set("settings", b"{}")
        storage.set("achievements", b"[]")
        assert storage.keys() == ["achievements", "settings"]

    def test_values_survive_reopen(self, tmp_path):
        first = SqliteStorage(tmp_path / "breathe.db")
        first.load()
        first.set("settings", b'{"volume": 0.5}')

        second = SqliteStorage(tmp_path / "breathe.db")
        second.load()
        assert second.get("settings") == b'{"volume": 0.5}'

    def test_unusable_path_fails_to_load(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        assert SqliteStorage(blocker / "breathe.db").load() is False


class TestJsonHelpers:
    """Tests for load_json / save_json / remove_key."""

    def test_save_and_load(self):
        storage = MemoryStorage()
        assert save_json(storage, "goals_active", [{"title": "Calme"}]) is True
        assert load_json(storage, "goals_active", []) == [{"title": "Calme"}]

    def test_missing_key_returns_default(self):
        assert load_json(MemoryStorage(), "missing", {"a": 1}) == {"a": 1}

    def test_invalid_json_returns_default(self):
        storage = MemoryStorage()
        storage.set("settings", b"\xff\xfe")
        assert load_json(storage, "settings", None) is None

    def test_write_failure_returns_false(self, failing_storage):
        failing_storage.fail_writes = True
        assert save_json(failing_storage, "sessions", []) is False
        assert remove_key(failing_storage, "sessions") is False

    def test_read_failure_returns_default(self, failing_storage):
        failing_storage.fail_reads = True
        assert load_json(failing_storage, "sessions", []) == []
