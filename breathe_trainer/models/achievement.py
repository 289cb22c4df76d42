"""Data models for achievements."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class AchievementType(Enum):
    """Metric an achievement (or a type-scoped goal) is measured against."""

    SESSION_COUNT = "Total Sessions"
    TOTAL_TIME = "Total Time"
    TOTAL_CYCLES = "Total Cycles"
    STREAK = "Daily Streak"
    MODE_MASTERY = "Mode Master"


@dataclass
class Achievement:
    """A one-way unlockable milestone.

    Title and description are display text only; nothing branches on them.
    """

    id: str
    type: AchievementType
    title: str
    description: str
    required_value: int
    icon: str = ""
    is_unlocked: bool = False
    date_unlocked: datetime | None = None

    def unlock(self, when: datetime) -> bool:
        """Mark as unlocked. Returns False if it already was."""
        if self.is_unlocked:
            return False
        self.is_unlocked = True
        self.date_unlocked = when
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "requiredValue": self.required_value,
            "icon": self.icon,
            "isUnlocked": self.is_unlocked,
            "dateUnlocked": self.date_unlocked.isoformat() if self.date_unlocked else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Achievement":
        unlocked_at = data.get("dateUnlocked")
        return cls(
            id=data["id"],
            type=AchievementType(data["type"]),
            title=data["title"],
            description=data.get("description", ""),
            required_value=int(data["requiredValue"]),
            icon=data.get("icon", ""),
            is_unlocked=bool(data.get("isUnlocked", False)),
            date_unlocked=datetime.fromisoformat(unlocked_at) if unlocked_at else None,
        )
