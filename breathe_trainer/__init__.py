"""
Breathe Trainer - Guided Breathing Session Engine

Drives timed inhale/hold/exhale/pause breathing sessions, keeps a local
history of completed sessions, and derives achievements, streaks, weekly
activity and goal progress from it.
"""

__version__ = "1.0.0"
__author__ = "Breathe Trainer Contributors"
