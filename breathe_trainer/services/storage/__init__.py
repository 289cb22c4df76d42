"""Key/value storage backends."""

from .json_codec import load_json, remove_key, save_json
from .memory_storage import MemoryStorage
from .sqlite_storage import SqliteStorage

__all__ = ["SqliteStorage", "MemoryStorage", "load_json", "save_json", "remove_key"]
