"""Data models for user goals."""

import calendar
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any
from uuid import uuid4

from .achievement import AchievementType


class GoalPeriod(Enum):
    """Length of a period goal's window."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    def add_to(self, start: datetime) -> datetime:
        """Return ``start`` plus exactly one period unit."""
        if self is GoalPeriod.DAILY:
            return start + timedelta(days=1)
        if self is GoalPeriod.WEEKLY:
            return start + timedelta(weeks=1)
        return add_months(start, 1)


def add_months(moment: datetime, months: int) -> datetime:
    """Add calendar months, clamping the day to the target month's length."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


@dataclass
class Goal:
    """A user target tracked against live progress.

    A goal with a ``metric`` is type-scoped: its current value follows the
    derived value of that metric. Without one it is a title goal whose value
    accumulates practised seconds.
    """

    title: str
    target_value: float
    start_date: datetime
    end_date: datetime
    current_value: float = 0.0
    metric: AchievementType | None = None
    period: GoalPeriod | None = None
    duration_days: int | None = None
    is_active: bool = True
    id: str = field(default_factory=lambda: str(uuid4()))

    @property
    def is_completed(self) -> bool:
        return is_goal_completed(self)

    @property
    def progress(self) -> float:
        """Fraction of the target reached, capped at 1.0."""
        if self.target_value <= 0:
            return 1.0
        return min(self.current_value / self.target_value, 1.0)

    @property
    def progress_percentage(self) -> int:
        return int(self.progress * 100)

    @property
    def remaining(self) -> float:
        return max(0.0, self.target_value - self.current_value)

    def days_remaining(self, now: datetime | None = None) -> int:
        now = now or datetime.now()
        return (self.end_date - now).days

    def is_overdue(self, now: datetime | None = None) -> bool:
        now = now or datetime.now()
        return now > self.end_date and not self.is_completed

    def contains(self, moment: datetime) -> bool:
        """Whether ``moment`` falls inside the goal's window."""
        return self.start_date <= moment <= self.end_date

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.metric.value if self.metric else None,
            "targetValue": self.target_value,
            "currentValue": self.current_value,
            "period": self.period.value if self.period else None,
            "durationDays": self.duration_days,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "isActive": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Goal":
        return cls(
            id=data["id"],
            title=data["title"],
            metric=AchievementType(data["type"]) if data.get("type") else None,
            target_value=float(data["targetValue"]),
            current_value=float(data.get("currentValue", 0.0)),
            period=GoalPeriod(data["period"]) if data.get("period") else None,
            duration_days=data.get("durationDays"),
            start_date=datetime.fromisoformat(data["startDate"]),
            end_date=datetime.fromisoformat(data["endDate"]),
            is_active=bool(data.get("isActive", True)),
        )


def is_goal_completed(goal: Goal) -> bool:
    """The one completion rule: current value has reached the target."""
    return goal.current_value >= goal.target_value
