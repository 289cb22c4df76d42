"""Session timer and pattern lookup exceptions."""

from .base import BreatheTrainerException


class AlreadyRunningError(BreatheTrainerException):
    """Raised when a session is started while another one is running."""

    pass


class InvalidPatternError(BreatheTrainerException):
    """Raised when a pattern has no positive-duration phase to breathe through."""

    pass


class PatternNotFoundError(BreatheTrainerException):
    """Raised when a pattern id is not in the catalog."""

    pass


class GoalNotFoundError(BreatheTrainerException):
    """Raised when a goal id is neither active nor completed."""

    pass
