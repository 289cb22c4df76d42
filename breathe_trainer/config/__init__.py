"""Configuration management for Breathe Trainer."""

from .config import BreatheTrainerConfig
from .defaults import create_default_config

__all__ = ["BreatheTrainerConfig", "create_default_config"]
