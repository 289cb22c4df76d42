"""Protocol for the key/value persistence backend."""

from typing import Protocol


class StorageBackend(Protocol):
    """Interface for a flat key/value store holding serialized JSON blobs.

    No transactions across keys are required; each key is written whole.
    """

    def get(self, key: str) -> bytes | None:
        """Read the value stored under ``key``.

        Returns:
            Stored bytes, or None if the key is absent.

        Raises:
            StorageError: If the backend cannot be read.
        """
        ...

    def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Raises:
            StorageError: If the backend cannot be written.
        """
        ...

    def remove(self, key: str) -> None:
        """Delete ``key`` if present.

        Raises:
            StorageError: If the backend cannot be written.
        """
        ...
