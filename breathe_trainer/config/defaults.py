"""Default configuration values for Breathe Trainer."""

from .config import BreatheTrainerConfig


def create_default_config(**overrides) -> BreatheTrainerConfig:
    """Create a default configuration with optional overrides.

    Args:
        **overrides: Keyword arguments to override default values

    Returns:
        BreatheTrainerConfig with defaults and overrides applied

    Example:
        config = create_default_config(
            data_dir="/tmp/breathe",
            tick_interval=0.25
        )
    """
    return BreatheTrainerConfig(**overrides)
