"""GUI-specific presenters."""

from .gui_notifier import GUINotifier

__all__ = ["GUINotifier"]
