"""Clock-time, epoch and duration helpers.

Timestamps are epoch milliseconds. Calendar questions ("same day",
"midnight of a date") are answered in the local timezone of the process.
"""

import math
import re
from datetime import date, datetime, timedelta
from typing import NamedTuple

from babydaily.engine.errors import InvalidFormat

MINUTES_PER_DAY = 24 * 60
MS_PER_DAY = 24 * 60 * 60 * 1000

_CLOCK_RE = re.compile(r"([0-9]{2}):([0-9]{2})")
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class ClockTime(NamedTuple):
    hour: int
    minute: int


def parse_clock(value: str) -> ClockTime:
    """Parse an ``HH:MM`` string into hour and minute."""
    match = _CLOCK_RE.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise InvalidFormat(f"Expected HH:MM, got {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if not 0 <= hour <= 23 or not 0 <= minute <= 59:
        raise InvalidFormat(f"Clock time out of range: {value!r}")
    return ClockTime(hour, minute)


def duration_minutes(start: str, end: str) -> int:
    """Minutes from ``start`` to ``end``, wrapping past midnight at most once."""
    s, e = parse_clock(start), parse_clock(end)
    diff = (e.hour * 60 + e.minute) - (s.hour * 60 + s.minute)
    if diff < 0:
        diff += MINUTES_PER_DAY
    return diff


def format_minutes(total: int) -> str:
    return f"{total // 60}h {total % 60}m"


def duration_between(start: str, end: str) -> str:
    """Human duration between two clock times, e.g. ``"10h 0m"`` for 20:00 → 06:00."""
    return format_minutes(duration_minutes(start, end))


def to_12_hour(value: str) -> str:
    """``"13:30"`` → ``"1:30 PM"``; midnight is 12 AM and noon 12 PM."""
    t = parse_clock(value)
    suffix = "AM" if t.hour < 12 else "PM"
    hour = t.hour % 12 or 12
    return f"{hour}:{t.minute:02d} {suffix}"


def date_to_epoch(value: str) -> int:
    """Epoch milliseconds at local midnight of a ``YYYY-MM-DD`` date."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        raise InvalidFormat(f"Expected YYYY-MM-DD, got {value!r}")
    try:
        day = date.fromisoformat(value)
    except (TypeError, ValueError):
        raise InvalidFormat(f"Expected YYYY-MM-DD, got {value!r}") from None
    return epoch_ms(datetime(day.year, day.month, day.day))


def epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def from_epoch_ms(ms: int) -> datetime:
    """Local naive datetime for an epoch millisecond timestamp."""
    return datetime.fromtimestamp(ms / 1000)


def format_clock(ms: int) -> str:
    return from_epoch_ms(ms).strftime("%H:%M")


def format_date(ms: int) -> str:
    return from_epoch_ms(ms).strftime("%Y-%m-%d")


def same_local_day(a_ms: int, b_ms: int) -> bool:
    return from_epoch_ms(a_ms).date() == from_epoch_ms(b_ms).date()


def days_apart(a_ms: int, b_ms: int) -> int:
    """Whole days between two timestamps, rounded up."""
    return math.ceil(abs(a_ms - b_ms) / MS_PER_DAY)


def add_hours(ms: int, hours: float) -> int:
    return ms + int(timedelta(hours=hours).total_seconds() * 1000)
