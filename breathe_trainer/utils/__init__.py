"""Utility helpers for Breathe Trainer."""

from .events import EventHook
from .time_utils import format_duration, last_n_days, start_of_day, start_of_month, start_of_week

__all__ = [
    "EventHook",
    "format_duration",
    "last_n_days",
    "start_of_day",
    "start_of_week",
    "start_of_month",
]
