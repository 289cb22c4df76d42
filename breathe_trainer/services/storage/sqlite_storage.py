"""SQLite-backed key/value storage."""

import logging
import sqlite3
from pathlib import Path

from breathe_trainer.exceptions import StorageError

logger = logging.getLogger(__name__)


class SqliteStorage:
    """Key/value store kept in a single SQLite table.

    Thread Safety:
        Each method creates its own sqlite3.Connection, so the store can be
        used from the session thread and from GUI/worker threads alike.
    """

    def __init__(self, db_path: Path):
        self._db_path = db_path
        self._initialized = False

    def load(self) -> bool:
        """Initialize the database, creating the table if needed."""
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = self._connect()
            try:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value BLOB NOT NULL,
                        updated_at TEXT NOT NULL DEFAULT (datetime('now'))
                    )
                """)
                conn.commit()
            finally:
                conn.close()
            self._initialized = True
            logger.info(f"Storage initialized at {self._db_path}")
            return True
        except (sqlite3.Error, OSError):
            logger.exception("Failed to initialize storage database")
            return False

    def is_available(self) -> bool:
        """Check if the storage has been initialized."""
        return self._initialized

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self._db_path))

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise StorageError(f"Storage at {self._db_path} is not initialized")

    def get(self, key: str) -> bytes | None:
        self._require_initialized()
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read '{key}': {e}") from e
        if row is None:
            return None
        return bytes(row[0])

    def set(self, key: str, value: bytes) -> None:
        self._require_initialized()
        try:
            conn = self._connect()
            try:
                conn.execute(
                    """INSERT OR REPLACE INTO kv_store (key, value, updated_at)
                       VALUES (?, ?, datetime('now'))""",
                    (key, sqlite3.Binary(value)),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to write '{key}': {e}") from e

    def remove(self, key: str) -> None:
        self._require_initialized()
        try:
            conn = self._connect()
            try:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to remove '{key}': {e}") from e

    def keys(self) -> list[str]:
        """List stored keys, sorted."""
        self._require_initialized()
        conn = self._connect()
        try:
            rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        finally:
            conn.close()
        return [row[0] for row in rows]
