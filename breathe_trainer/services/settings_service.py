"""Service for loading, validating and persisting user settings."""

import logging
from dataclasses import fields, replace
from typing import Any

from breathe_trainer.exceptions import ValidationError
from breathe_trainer.interfaces import StorageBackend
from breathe_trainer.models import (
    ALLOWED_SPEED_MULTIPLIERS,
    THEME_IDS,
    BreathingSettings,
    BreathingSound,
)
from breathe_trainer.services.storage import load_json, save_json

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"


def validate_settings(settings: BreathingSettings) -> None:
    """Check every constrained field.

    Raises:
        ValidationError: Naming the first offending field
    """
    if not 0.0 <= settings.volume <= 1.0:
        raise ValidationError("volume", "must be between 0 and 1")
    if not any(abs(settings.speed_multiplier - m) < 1e-9 for m in ALLOWED_SPEED_MULTIPLIERS):
        allowed = ", ".join(f"{m:g}" for m in ALLOWED_SPEED_MULTIPLIERS)
        raise ValidationError("speed_multiplier", f"must be one of {allowed}")
    if settings.selected_sound_id not in {s.value for s in BreathingSound}:
        raise ValidationError("selected_sound_id", f"unknown sound '{settings.selected_sound_id}'")
    if settings.selected_theme_id not in THEME_IDS:
        raise ValidationError("selected_theme_id", f"unknown theme '{settings.selected_theme_id}'")
    if settings.daily_goal_seconds < 0:
        raise ValidationError("daily_goal_seconds", "must be >= 0")
    if settings.weekly_goal_seconds < 0:
        raise ValidationError("weekly_goal_seconds", "must be >= 0")


class SettingsService:
    """Owns the persisted BreathingSettings object."""

    def __init__(self, storage: StorageBackend):
        self._storage = storage
        self._settings = BreathingSettings()
        self.loaded_from_storage = False

    @property
    def settings(self) -> BreathingSettings:
        return self._settings

    def load(self) -> BreathingSettings:
        """Load settings, falling back to defaults if absent or invalid."""
        data = load_json(self._storage, SETTINGS_KEY, None)
        self.loaded_from_storage = data is not None
        if data is None:
            self._settings = BreathingSettings()
            return self._settings
        try:
            loaded = BreathingSettings.from_dict(data)
            validate_settings(loaded)
            self._settings = loaded
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.warning(f"Invalid stored settings, using defaults: {e}")
            self._settings = BreathingSettings()
        return self._settings

    def update(self, **changes: Any) -> BreathingSettings:
        """Apply and persist field changes.

        Raises:
            ValidationError: If a field is unknown or a value is out of range;
                the current settings are left untouched.
        """
        known = {f.name for f in fields(BreathingSettings)}
        for name in changes:
            if name not in known:
                raise ValidationError(name, "unknown setting")
        candidate = replace(self._settings, **changes)
        validate_settings(candidate)
        self._settings = candidate
        self.save()
        return self._settings

    def save(self) -> bool:
        return save_json(self._storage, SETTINGS_KEY, self._settings.to_dict())

    def reset(self) -> BreathingSettings:
        """Restore defaults, keeping the user's custom patterns."""
        self._settings = BreathingSettings(custom_patterns=list(self._settings.custom_patterns))
        self.save()
        return self._settings
