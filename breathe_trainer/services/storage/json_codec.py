"""Best-effort JSON persistence helpers on top of a StorageBackend."""

import json
import logging
from typing import Any

from breathe_trainer.exceptions import StorageError
from breathe_trainer.interfaces import StorageBackend

logger = logging.getLogger(__name__)


def load_json(storage: StorageBackend, key: str, default: Any) -> Any:
    """Read and decode a JSON value.

    Missing keys, unreadable storage and corrupt JSON all fall back to
    ``default``; the latter two are logged as warnings.
    """
    try:
        raw = storage.get(key)
    except StorageError as e:
        logger.warning(f"Could not read '{key}', using defaults: {e}")
        return default
    if raw is None:
        return default
    try:
        return json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Invalid data stored under '{key}', using defaults: {e}")
        return default


def save_json(storage: StorageBackend, key: str, value: Any) -> bool:
    """Encode and write a JSON value.

    Returns:
        True if written, False if the write failed (logged as a warning).
        In-memory state is never rolled back on failure; the next successful
        write persists the current state again.
    """
    try:
        payload = json.dumps(value, ensure_ascii=False).encode("utf-8")
        storage.set(key, payload)
        return True
    except (StorageError, OSError) as e:
        logger.warning(f"Failed to persist '{key}': {e}")
        return False


def remove_key(storage: StorageBackend, key: str) -> bool:
    """Delete a key, returning False (and logging) on failure."""
    try:
        storage.remove(key)
        return True
    except (StorageError, OSError) as e:
        logger.warning(f"Failed to remove '{key}': {e}")
        return False
