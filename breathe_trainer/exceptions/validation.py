"""Validation-related exceptions."""

from .base import BreatheTrainerException


class ValidationError(BreatheTrainerException):
    """Raised when user input (pattern, goal, settings) fails validation.

    Attributes:
        field: Name of the offending field
    """

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")
