"""Data model for completed breathing sessions."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

from breathe_trainer.exceptions import ValidationError


@dataclass(frozen=True)
class SessionRecord:
    """Immutable record of one finished, non-trivial breathing session."""

    started_at: datetime
    duration: float
    cycles: int
    pattern_id: str
    id: str = field(default_factory=lambda: str(uuid4()))

    def __post_init__(self):
        if self.duration < 0:
            raise ValidationError("duration", "must be >= 0")
        if self.cycles < 0:
            raise ValidationError("cycles", "must be >= 0")

    @property
    def formatted_duration(self) -> str:
        """Duration as ``m:ss``."""
        seconds = int(self.duration)
        return f"{seconds // 60}:{seconds % 60:02d}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.started_at.isoformat(),
            "duration": self.duration,
            "completedCycles": self.cycles,
            "mode": self.pattern_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionRecord":
        return cls(
            id=data["id"],
            started_at=datetime.fromisoformat(data["date"]),
            duration=float(data["duration"]),
            cycles=int(data["completedCycles"]),
            pattern_id=data["mode"],
        )
