"""Interface protocols for Breathe Trainer."""

from .audio import AudioPlayer
from .haptics import HapticFeedback
from .notifier import Notifier
from .presenter import PresenterProtocol
from .storage import StorageBackend

__all__ = ["AudioPlayer", "HapticFeedback", "Notifier", "PresenterProtocol", "StorageBackend"]
