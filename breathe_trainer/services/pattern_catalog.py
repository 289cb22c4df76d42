"""Catalog of built-in and user-defined breathing patterns."""

import logging
from dataclasses import replace
from datetime import datetime
from uuid import uuid4

from breathe_trainer.exceptions import PatternNotFoundError, ValidationError
from breathe_trainer.models import PHASE_ORDER, BreathingPattern, BreathPhase
from breathe_trainer.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

BUILTIN_PATTERNS: tuple[BreathingPattern, ...] = (
    BreathingPattern(
        id="box",
        name="Box Breathing",
        description="Equal inhale, hold, exhale and pause",
        inhale=4,
        hold_after_inhale=4,
        exhale=4,
        hold_after_exhale=4,
        created_at=datetime(2024, 1, 1),
    ),
    BreathingPattern(
        id="relax",
        name="Relax",
        description="4-7-8 breathing to calm down",
        inhale=4,
        hold_after_inhale=7,
        exhale=8,
        hold_after_exhale=0,
        created_at=datetime(2024, 1, 1),
    ),
)

# (name, description, inhale, hold1, exhale, hold2, cycles)
PREDEFINED_CUSTOM_PATTERNS = [
    ("4-7-8 Sleep", "Perfect for falling asleep quickly", 4, 7, 8, 0, 4),
    ("Box Breathing", "Military technique for focus and calm", 4, 4, 4, 4, 5),
    ("Triangle Breathing", "Simple pattern for beginners", 3, 3, 3, 0, 10),
    ("Energy Boost", "Quick energizing breathing", 2, 1, 2, 0, 15),
    ("Deep Relaxation", "Slow breathing for deep relaxation", 6, 8, 10, 2, 3),
]


def resolve_phase_duration(pattern: BreathingPattern, phase: BreathPhase) -> float:
    """Base duration in seconds of one phase of a pattern."""
    return pattern.duration_for(phase)


def total_pattern_duration(pattern: BreathingPattern) -> float:
    """Duration in seconds of one full cycle of a pattern."""
    return sum(resolve_phase_duration(pattern, phase) for phase in PHASE_ORDER)


def validate_custom_pattern(
    name: str,
    inhale: float,
    hold_after_inhale: float,
    exhale: float,
    hold_after_exhale: float,
    cycles: int,
    max_phase_duration: float = 60.0,
) -> None:
    """Validate user-supplied pattern fields.

    Raises:
        ValidationError: Naming the first offending field
    """
    if not name or not name.strip():
        raise ValidationError("name", "must not be empty")
    durations = {
        "inhale": inhale,
        "hold_after_inhale": hold_after_inhale,
        "exhale": exhale,
        "hold_after_exhale": hold_after_exhale,
    }
    for field_name, value in durations.items():
        if value < 0:
            raise ValidationError(field_name, "must be >= 0")
        if value > max_phase_duration:
            raise ValidationError(field_name, f"must be <= {max_phase_duration:g} seconds")
    if inhale <= 0:
        raise ValidationError("inhale", "must be > 0")
    if exhale <= 0:
        raise ValidationError("exhale", "must be > 0")
    if cycles < 1:
        raise ValidationError("cycles", "must be >= 1")


class PatternCatalog:
    """Read access to all patterns plus CRUD over the custom subset.

    Custom patterns are persisted as part of the user's settings.
    """

    def __init__(self, settings_service: SettingsService, max_phase_duration: float = 60.0):
        self._settings_service = settings_service
        self._max_phase_duration = max_phase_duration

    def load(self, seed_predefined: bool = True) -> int:
        """Seed the predefined custom patterns on first run.

        Returns:
            Number of custom patterns available
        """
        if seed_predefined and not self._settings_service.loaded_from_storage:
            self.add_predefined_patterns()
        count = len(self.custom_patterns)
        logger.info(f"Loaded {count} custom patterns")
        return count

    @property
    def builtin_patterns(self) -> list[BreathingPattern]:
        return list(BUILTIN_PATTERNS)

    @property
    def custom_patterns(self) -> list[BreathingPattern]:
        return list(self._settings_service.settings.custom_patterns)

    @property
    def all_patterns(self) -> list[BreathingPattern]:
        return self.builtin_patterns + self.custom_patterns

    @property
    def favorite_patterns(self) -> list[BreathingPattern]:
        return [p for p in self.custom_patterns if p.is_favorite]

    def get_pattern(self, pattern_id: str) -> BreathingPattern:
        """Look up a pattern by id.

        Raises:
            PatternNotFoundError: If no pattern has this id
        """
        for pattern in self.all_patterns:
            if pattern.id == pattern_id:
                return pattern
        raise PatternNotFoundError(f"No pattern with id '{pattern_id}'")

    def find_pattern(self, key: str) -> BreathingPattern | None:
        """Look up by id, then by case-insensitive name (built-ins win)."""
        try:
            return self.get_pattern(key)
        except PatternNotFoundError:
            pass
        lowered = key.strip().lower()
        for pattern in self.all_patterns:
            if pattern.name.lower() == lowered:
                return pattern
        return None

    def create_custom_pattern(
        self,
        name: str,
        inhale: float,
        hold_after_inhale: float,
        exhale: float,
        hold_after_exhale: float,
        cycles: int,
        description: str = "",
    ) -> BreathingPattern:
        """Validate and store a new custom pattern.

        Raises:
            ValidationError: If any field is invalid or the name is taken
        """
        validate_custom_pattern(
            name,
            inhale,
            hold_after_inhale,
            exhale,
            hold_after_exhale,
            cycles,
            self._max_phase_duration,
        )
        if any(p.name.lower() == name.strip().lower() for p in self.custom_patterns):
            raise ValidationError("name", f"a custom pattern named '{name}' already exists")

        pattern = BreathingPattern(
            id=str(uuid4()),
            name=name.strip(),
            description=description,
            inhale=float(inhale),
            hold_after_inhale=float(hold_after_inhale),
            exhale=float(exhale),
            hold_after_exhale=float(hold_after_exhale),
            cycles=int(cycles),
            is_custom=True,
        )
        self._store(self.custom_patterns + [pattern])
        return pattern

    def update_custom_pattern(self, pattern: BreathingPattern) -> BreathingPattern:
        """Replace a stored custom pattern with an edited copy.

        Raises:
            PatternNotFoundError: If the pattern is not a stored custom pattern
            ValidationError: If the edited fields are invalid
        """
        validate_custom_pattern(
            pattern.name,
            pattern.inhale,
            pattern.hold_after_inhale,
            pattern.exhale,
            pattern.hold_after_exhale,
            pattern.cycles or 0,
            self._max_phase_duration,
        )
        patterns = self.custom_patterns
        for index, existing in enumerate(patterns):
            if existing.id == pattern.id:
                patterns[index] = replace(pattern, is_custom=True)
                self._store(patterns)
                return patterns[index]
        raise PatternNotFoundError(f"No custom pattern with id '{pattern.id}'")

    def delete_custom_pattern(self, pattern_id: str) -> bool:
        """Remove a custom pattern. Returns False if it was not found."""
        patterns = self.custom_patterns
        remaining = [p for p in patterns if p.id != pattern_id]
        if len(remaining) == len(patterns):
            return False
        self._store(remaining)
        return True

    def toggle_favorite(self, pattern_id: str) -> BreathingPattern:
        """Flip the favorite flag of a custom pattern.

        Raises:
            PatternNotFoundError: If the pattern is not a stored custom pattern
        """
        patterns = self.custom_patterns
        for index, existing in enumerate(patterns):
            if existing.id == pattern_id:
                patterns[index] = replace(existing, is_favorite=not existing.is_favorite)
                self._store(patterns)
                return patterns[index]
        raise PatternNotFoundError(f"No custom pattern with id '{pattern_id}'")

    def add_predefined_patterns(self) -> int:
        """Add the predefined custom patterns whose names are not taken yet.

        Returns:
            Number of patterns added
        """
        patterns = self.custom_patterns
        existing_names = {p.name for p in patterns}
        added = 0
        for name, description, inhale, hold1, exhale, hold2, cycles in PREDEFINED_CUSTOM_PATTERNS:
            if name in existing_names:
                continue
            patterns.append(
                BreathingPattern(
                    id=str(uuid4()),
                    name=name,
                    description=description,
                    inhale=inhale,
                    hold_after_inhale=hold1,
                    exhale=exhale,
                    hold_after_exhale=hold2,
                    cycles=cycles,
                    is_custom=True,
                )
            )
            added += 1
        if added:
            self._store(patterns)
        return added

    def search(self, query: str) -> list[BreathingPattern]:
        """Custom patterns whose name or description contains ``query``."""
        if not query:
            return self.custom_patterns
        lowered = query.lower()
        return [
            p
            for p in self.custom_patterns
            if lowered in p.name.lower() or lowered in p.description.lower()
        ]

    def patterns_by_duration(
        self, min_seconds: float, max_seconds: float
    ) -> list[BreathingPattern]:
        """Custom patterns whose full session time lies within the range."""
        return [
            p
            for p in self.custom_patterns
            if min_seconds <= (p.total_session_time or 0.0) <= max_seconds
        ]

    def patterns_by_difficulty(self) -> list[BreathingPattern]:
        """Custom patterns sorted easiest first."""
        return sorted(self.custom_patterns, key=lambda p: p.difficulty)

    def _store(self, patterns: list[BreathingPattern]) -> None:
        self._settings_service.update(custom_patterns=patterns)
