from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Iterator

ONE_DAY = timedelta(days=1)


def _as_date(value: date | datetime) -> date:
    # datetime is a subclass of date; drop time-of-day and tz offset.
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_date(value: Any) -> date | None:
    """Return the calendar date for a date, datetime or ISO string, else None."""
    if isinstance(value, (date, datetime)):
        return _as_date(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def days_between_inclusive(start: date | datetime, end: date | datetime) -> int:
    """Inclusive day count: a same-day stay is 1 day, adjacent days are 2."""
    return abs((_as_date(end) - _as_date(start)).days) + 1


class DayRange:
    """Ascending, restartable sequence of calendar days in [start, end]."""

    __slots__ = ("start", "end")

    def __init__(self, start: date | datetime, end: date | datetime) -> None:
        self.start = _as_date(start)
        self.end = _as_date(end)

    def __iter__(self) -> Iterator[date]:
        day = self.start
        while day <= self.end:
            yield day
            if day == self.end:
                break
            day += ONE_DAY

    def __len__(self) -> int:
        if self.end < self.start:
            return 0
        return (self.end - self.start).days + 1

    def __contains__(self, day: object) -> bool:
        if not isinstance(day, date):
            return False
        return self.start <= _as_date(day) <= self.end

    def __repr__(self) -> str:
        return f"DayRange({self.start.isoformat()}, {self.end.isoformat()})"


def iter_days(start: date | datetime, end: date | datetime) -> DayRange:
    return DayRange(start, end)
