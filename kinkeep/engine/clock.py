"""Instant and calendar-day conversions.

Instants are integer milliseconds since the Unix epoch. Calendar questions
(which weekday, which day) are answered in an explicit timezone so the
same (contacts, now) pair always gives the same answer.

Weekdays follow the contact model: 0 = Sunday ... 6 = Saturday.
"""

import time
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional, Union

MS_PER_DAY = 86_400_000

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MS = timedelta(milliseconds=1)

Moment = Union[int, date, datetime]


def now_ms() -> int:
    """Current wall-clock instant. Only callers at the edge should use this."""
    return time.time_ns() // 1_000_000


def to_datetime(instant_ms: int, tz: Optional[tzinfo] = None) -> datetime:
    """Aware datetime for an instant, in tz (default UTC)."""
    return (EPOCH + instant_ms * ONE_MS).astimezone(tz or timezone.utc)


def from_datetime(value: datetime, tz: Optional[tzinfo] = None) -> int:
    """Instant for a datetime. Naive values are read in tz (default UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz or timezone.utc)
    # Integer arithmetic; float timestamps drift by a millisecond
    return (value - EPOCH) // ONE_MS


def local_date(moment: Moment, tz: Optional[tzinfo] = None) -> date:
    """Calendar day of an instant, datetime or date.

    Aware datetimes are converted to tz first; naive datetimes and plain
    dates are taken as already local.
    """
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(tz or timezone.utc)
        return moment.date()
    if isinstance(moment, date):
        return moment
    return to_datetime(moment, tz).date()


def weekday(instant_ms: int, tz: Optional[tzinfo] = None) -> int:
    """Day of week for an instant, 0 = Sunday."""
    # datetime.weekday() is Monday-based
    return (to_datetime(instant_ms, tz).weekday() + 1) % 7


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative if end is earlier)."""
    return (end - start).days


def add_days(instant_ms: int, days: int) -> int:
    """Shift an instant by whole 24-hour days."""
    return instant_ms + days * MS_PER_DAY


def same_day(a: Moment, b: Moment, tz: Optional[tzinfo] = None) -> bool:
    """True if both moments fall on the same calendar day in tz."""
    return local_date(a, tz) == local_date(b, tz)
