"""Configuration classes for Breathe Trainer."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class BreatheTrainerConfig:
    """Immutable configuration for the breathing engine.

    User-editable preferences (sound, theme, speed, daily goals) live in
    BreathingSettings and are persisted; this object only carries
    process-level wiring and limits.
    """

    # Storage settings
    data_dir: Path = field(default_factory=lambda: Path.home() / ".breathe_trainer")
    database_path: Path | None = None  # Defaults to data_dir / "breathe.db"

    # History settings
    history_capacity: int = 100

    # Pattern settings
    max_phase_duration: float = 60.0  # Upper bound for any custom phase, in seconds

    # Timer settings
    tick_interval: float = 0.1  # Seconds between ticks when driving a session

    # Progress settings
    mastery_reference_pattern: str = "box"
    weekly_stats_days: int = 7

    def __post_init__(self):
        """Convert string paths to Path objects and derive the database path."""
        if isinstance(self.data_dir, str):
            object.__setattr__(self, "data_dir", Path(self.data_dir))
        if isinstance(self.database_path, str):
            object.__setattr__(self, "database_path", Path(self.database_path))
        if self.database_path is None:
            object.__setattr__(self, "database_path", self.data_dir / "breathe.db")
