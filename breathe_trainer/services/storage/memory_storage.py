"""In-memory key/value storage (testing, dry runs)."""


class MemoryStorage:
    """Dict-backed store with the same interface as SqliteStorage."""

    def __init__(self):
        self._data: dict[str, bytes] = {}
        self.write_count = 0

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)
        self.write_count += 1

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)
