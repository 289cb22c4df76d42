"""Custom exceptions for Breathe Trainer."""

from .base import BreatheTrainerException
from .session import (
    AlreadyRunningError,
    GoalNotFoundError,
    InvalidPatternError,
    PatternNotFoundError,
)
from .storage import StorageError
from .validation import ValidationError

__all__ = [
    "BreatheTrainerException",
    "ValidationError",
    "AlreadyRunningError",
    "InvalidPatternError",
    "PatternNotFoundError",
    "GoalNotFoundError",
    "StorageError",
]
