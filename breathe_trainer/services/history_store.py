"""Bounded, append-only log of completed breathing sessions."""

import logging
from datetime import date, datetime

from breathe_trainer.interfaces import StorageBackend
from breathe_trainer.models import HistoryTotals, SessionRecord
from breathe_trainer.services.storage import load_json, save_json
from breathe_trainer.utils import EventHook

logger = logging.getLogger(__name__)

SESSIONS_KEY = "sessions"
DEFAULT_CAPACITY = 100


class HistoryStore:
    """Service for recording and querying session history.

    Sessions are kept newest first. When the log is full the entry that was
    inserted earliest is evicted, regardless of its date. Aggregates are
    computed from the log on every access and never cached.

    Subscribers of ``on_change`` receive the full log after every mutation,
    once the log has been persisted.
    """

    def __init__(self, storage: StorageBackend, capacity: int = DEFAULT_CAPACITY):
        """Initialize an empty history.

        Args:
            storage: Key/value backend for the ``sessions`` entry
            capacity: Maximum number of sessions kept
        """
        self._storage = storage
        self._capacity = capacity
        self._sessions: list[SessionRecord] = []
        self.on_change: EventHook[tuple[SessionRecord, ...]] = EventHook("history_changed")

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def sessions(self) -> tuple[SessionRecord, ...]:
        """All sessions, newest first."""
        return tuple(self._sessions)

    def load(self) -> int:
        """Load persisted sessions. Unreadable entries are skipped.

        Returns:
            Number of sessions loaded
        """
        raw = load_json(self._storage, SESSIONS_KEY, [])
        sessions: list[SessionRecord] = []
        for item in raw if isinstance(raw, list) else []:
            try:
                sessions.append(SessionRecord.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping unreadable session entry: {e}")
        self._sessions = sessions[: self._capacity]
        logger.info(f"Loaded {len(self._sessions)} sessions")
        return len(self._sessions)

    def append(self, record: SessionRecord) -> bool:
        """Insert a session at the head, evicting the oldest beyond capacity.

        Returns:
            True if the updated log was persisted
        """
        self._sessions.insert(0, record)
        if len(self._sessions) > self._capacity:
            evicted = self._sessions.pop()
            logger.debug(f"History full, evicted session {evicted.id}")
        persisted = self._save()
        self.on_change.emit(self.sessions)
        return persisted

    def clear(self) -> bool:
        """Remove every session.

        Returns:
            True if the empty log was persisted
        """
        self._sessions = []
        persisted = self._save()
        self.on_change.emit(self.sessions)
        return persisted

    def get_session(self, session_id: str) -> SessionRecord | None:
        for record in self._sessions:
            if record.id == session_id:
                return record
        return None

    def get_recent(self, limit: int = 20) -> list[SessionRecord]:
        """The most recent sessions, newest first."""
        return self._sessions[:limit]

    @property
    def total_sessions(self) -> int:
        return len(self._sessions)

    @property
    def total_duration(self) -> float:
        return sum(record.duration for record in self._sessions)

    @property
    def total_cycles(self) -> int:
        return sum(record.cycles for record in self._sessions)

    @property
    def average_session_duration(self) -> float:
        if not self._sessions:
            return 0.0
        return self.total_duration / len(self._sessions)

    def totals(self) -> HistoryTotals:
        return HistoryTotals(
            total_sessions=self.total_sessions,
            total_duration=self.total_duration,
            total_cycles=self.total_cycles,
        )

    def sessions_for_pattern(self, pattern_id: str) -> int:
        """Number of sessions breathed with the given pattern."""
        return sum(1 for record in self._sessions if record.pattern_id == pattern_id)

    def time_practised_on(self, day: date) -> float:
        """Seconds practised in sessions started on ``day``."""
        return sum(r.duration for r in self._sessions if r.started_at.date() == day)

    def time_practised_since(self, start: datetime) -> float:
        """Seconds practised in sessions started at or after ``start``."""
        return sum(r.duration for r in self._sessions if r.started_at >= start)

    def _save(self) -> bool:
        return save_json(self._storage, SESSIONS_KEY, [r.to_dict() for r in self._sessions])
