"""Orchestration layer wiring services into a running application."""

from .app_context import AppContext
from .session_controller import BreathingSessionController

__all__ = ["AppContext", "BreathingSessionController"]
