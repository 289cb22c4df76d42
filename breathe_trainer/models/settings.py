"""Data model for persisted user settings."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .pattern import BreathingPattern


class BreathingSound(Enum):
    """Ambient background loops."""

    NATURE = "nature"
    OCEAN = "ocean"
    RAIN = "rain"
    FOREST = "forest"
    WHITE_NOISE = "white_noise"
    MEDITATION = "meditation"

    @property
    def filename(self) -> str:
        return {
            BreathingSound.NATURE: "nature_ambient",
            BreathingSound.OCEAN: "ocean_waves",
            BreathingSound.RAIN: "rain_ambient",
            BreathingSound.FOREST: "forest_ambient",
            BreathingSound.WHITE_NOISE: "white_noise",
            BreathingSound.MEDITATION: "meditation_bells",
        }[self]


THEME_IDS: tuple[str, ...] = ("calm", "energize", "focus", "sleep", "custom")


@dataclass
class BreathingSettings:
    """User preferences, stored as one flat object under the ``settings`` key."""

    sound_enabled: bool = True
    haptic_enabled: bool = True
    vibration_enabled: bool = True
    volume: float = 0.7
    selected_sound_id: str = BreathingSound.NATURE.value
    selected_theme_id: str = "calm"
    speed_multiplier: float = 1.0
    daily_goal_seconds: float = 300.0  # 5 minutes
    weekly_goal_seconds: float = 2100.0  # 35 minutes
    show_breathing_guide: bool = True
    auto_start_next_session: bool = False
    custom_patterns: list[BreathingPattern] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "soundEnabled": self.sound_enabled,
            "hapticEnabled": self.haptic_enabled,
            "vibrationEnabled": self.vibration_enabled,
            "volume": self.volume,
            "selectedSoundId": self.selected_sound_id,
            "selectedThemeId": self.selected_theme_id,
            "speedMultiplier": self.speed_multiplier,
            "dailyGoalSeconds": self.daily_goal_seconds,
            "weeklyGoalSeconds": self.weekly_goal_seconds,
            "showBreathingGuide": self.show_breathing_guide,
            "autoStartNextSession": self.auto_start_next_session,
            "customPatterns": [p.to_dict() for p in self.custom_patterns],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BreathingSettings":
        """Rebuild settings, falling back to defaults for missing keys."""
        defaults = cls()
        return cls(
            sound_enabled=bool(data.get("soundEnabled", defaults.sound_enabled)),
            haptic_enabled=bool(data.get("hapticEnabled", defaults.haptic_enabled)),
            vibration_enabled=bool(data.get("vibrationEnabled", defaults.vibration_enabled)),
            volume=float(data.get("volume", defaults.volume)),
            selected_sound_id=data.get("selectedSoundId", defaults.selected_sound_id),
            selected_theme_id=data.get("selectedThemeId", defaults.selected_theme_id),
            speed_multiplier=float(data.get("speedMultiplier", defaults.speed_multiplier)),
            daily_goal_seconds=float(data.get("dailyGoalSeconds", defaults.daily_goal_seconds)),
            weekly_goal_seconds=float(
                data.get("weeklyGoalSeconds", defaults.weekly_goal_seconds)
            ),
            show_breathing_guide=bool(
                data.get("showBreathingGuide", defaults.show_breathing_guide)
            ),
            auto_start_next_session=bool(
                data.get("autoStartNextSession", defaults.auto_start_next_session)
            ),
            custom_patterns=[
                BreathingPattern.from_dict(p) for p in data.get("customPatterns", [])
            ],
        )
