"""Presenter implementations for output handling."""

from .console_presenter import ConsolePresenter
from .null_presenter import NullAudioPlayer, NullHaptics, NullNotifier, NullPresenter

__all__ = ["ConsolePresenter", "NullPresenter", "NullNotifier", "NullAudioPlayer", "NullHaptics"]
