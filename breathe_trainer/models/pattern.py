"""Data model for breathing patterns."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .phase import PHASE_ORDER, BreathPhase


@dataclass(frozen=True)
class BreathingPattern:
    """Named set of phase durations (seconds) for one breath cycle.

    Built-in modes leave ``cycles`` as None and run until stopped. Custom
    patterns carry a fixed cycle count and stop on their own.
    """

    id: str
    name: str
    inhale: float
    hold_after_inhale: float
    exhale: float
    hold_after_exhale: float
    cycles: int | None = None
    description: str = ""
    is_custom: bool = False
    is_favorite: bool = False
    created_at: datetime = field(default_factory=datetime.now)

    def duration_for(self, phase: BreathPhase) -> float:
        """Base duration of a phase, before any speed multiplier."""
        return {
            BreathPhase.INHALE: self.inhale,
            BreathPhase.HOLD_AFTER_INHALE: self.hold_after_inhale,
            BreathPhase.EXHALE: self.exhale,
            BreathPhase.HOLD_AFTER_EXHALE: self.hold_after_exhale,
        }[phase]

    @property
    def phase_durations(self) -> dict[BreathPhase, float]:
        return {phase: self.duration_for(phase) for phase in PHASE_ORDER}

    @property
    def cycle_duration(self) -> float:
        """Sum of all four phase durations."""
        return self.inhale + self.hold_after_inhale + self.exhale + self.hold_after_exhale

    @property
    def total_session_time(self) -> float | None:
        """Length of a full fixed-cycle session, or None for open-ended modes."""
        if self.cycles is None:
            return None
        return self.cycle_duration * self.cycles

    @property
    def difficulty(self) -> float:
        """Rough difficulty score; longer sessions and longer holds score higher."""
        total = self.cycle_duration
        if total <= 0:
            return 0.0
        cycles = self.cycles or 1
        complexity = (self.hold_after_inhale + self.hold_after_exhale) / total
        return (total * cycles * (1 + complexity)) / 100

    @property
    def difficulty_level(self) -> str:
        score = self.difficulty
        if score < 50:
            return "Beginner"
        if score < 100:
            return "Intermediate"
        if score < 200:
            return "Advanced"
        return "Expert"

    @property
    def tags(self) -> list[str]:
        tags = []
        if self.inhale > 6:
            tags.append("Deep Breathing")
        if self.hold_after_inhale > 5:
            tags.append("Hold Focus")
        if self.exhale > 8:
            tags.append("Long Exhale")
        if self.cycles is not None and self.cycles > 10:
            tags.append("Endurance")
        if (self.total_session_time or 0) > 600:
            tags.append("Long Session")
        return tags

    @property
    def signature(self) -> str:
        """Compact ``4-7-8-0`` style description of the durations."""
        return "-".join(f"{d:g}" for d in self.phase_durations.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "inhaleDuration": self.inhale,
            "hold1Duration": self.hold_after_inhale,
            "exhaleDuration": self.exhale,
            "hold2Duration": self.hold_after_exhale,
            "cycles": self.cycles,
            "isFavorite": self.is_favorite,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BreathingPattern":
        """Rebuild a custom pattern from its persisted form."""
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            inhale=float(data["inhaleDuration"]),
            hold_after_inhale=float(data.get("hold1Duration", 0.0)),
            exhale=float(data["exhaleDuration"]),
            hold_after_exhale=float(data.get("hold2Duration", 0.0)),
            cycles=data.get("cycles"),
            is_custom=True,
            is_favorite=bool(data.get("isFavorite", False)),
            created_at=datetime.fromisoformat(data["createdAt"])
            if data.get("createdAt")
            else datetime.now(),
        )
