"""Persistence-layer exceptions."""

from .base import BreatheTrainerException


class StorageError(BreatheTrainerException):
    """Raised when the key/value store cannot be read or written."""

    pass
