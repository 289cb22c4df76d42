"""Calendar helpers shared by progress calculations."""

from datetime import date, datetime, time, timedelta


def start_of_day(moment: datetime) -> datetime:
    """Midnight (local, naive) of the day containing ``moment``."""
    return datetime.combine(moment.date(), time.min)


def start_of_week(moment: datetime) -> datetime:
    """Midnight of the Monday of the week containing ``moment``."""
    return start_of_day(moment) - timedelta(days=moment.weekday())


def start_of_month(moment: datetime) -> datetime:
    return start_of_day(moment).replace(day=1)


def last_n_days(today: date, days: int) -> list[date]:
    """The ``days`` calendar days ending with ``today``, oldest first."""
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def format_duration(seconds: float) -> str:
    """Format seconds as ``m:ss`` or ``h:mm:ss``."""
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
