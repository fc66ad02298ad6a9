"""Clock-string helpers shared by the capacity, ranking and allocation steps."""

import re
from datetime import date
from typing import Optional

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
SHORT_WEEKDAY_NAMES = [n[:3] for n in WEEKDAY_NAMES]

MINUTES_PER_DAY = 24 * 60

_CLOCK_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")
_TASK_NUMBER_RE = re.compile(r"^\s*[Tt](\d+)")


def is_clock_time(value: Optional[str]) -> bool:
    return bool(value) and _CLOCK_RE.match(value.strip()) is not None


def time_to_minutes(value: Optional[str]) -> int:
    """'HH:MM' → minutes since midnight. Anything without a colon is 0."""
    if not value or ":" not in value:
        return 0
    hours, minutes = value.strip().split(":", 1)
    return int(hours) * 60 + int(minutes)


def minutes_to_time(total: int) -> str:
    """Minutes since midnight → 'HH:MM'. Hours are not wrapped past 23."""
    return f"{total // 60:02d}:{total % 60:02d}"


def shift_minutes(start: str, end: str) -> int:
    """Length of a shift; an end earlier than the start spans midnight."""
    s = time_to_minutes(start)
    e = time_to_minutes(end)
    if e < s:
        e += MINUTES_PER_DAY
    return e - s


def weekday_name(iso_date: str) -> str:
    """'2024-06-04' → 'Tuesday'."""
    return WEEKDAY_NAMES[date.fromisoformat(iso_date).weekday()]


def same_weekday(detail: Optional[str], iso_date: str) -> bool:
    """Compare a recurrence weekday ('Tuesday', 'Tue', 'tue') to a date."""
    if not detail:
        return False
    day = weekday_name(iso_date)
    d = detail.strip().lower()
    return d == day.lower() or d == day[:3].lower()


def task_number_from_code(code: Optional[str]) -> Optional[int]:
    """Number from a leading 'T<digits>' task code ('T3' → 3, 't12b' → 12, 'X-T4' → None)."""
    if not code:
        return None
    m = _TASK_NUMBER_RE.match(code)
    return int(m.group(1)) if m else None
