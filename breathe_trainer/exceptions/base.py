"""Base exception classes for Breathe Trainer."""


class BreatheTrainerException(Exception):
    """Base exception for all Breathe Trainer errors.

    All custom exceptions in the breathe_trainer package should inherit
    from this base class for consistent error handling.
    """

    pass
