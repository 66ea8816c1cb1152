"""Birthday proximity.

Answers "how many days until this contact's next birthday?" on calendar
days, ignoring the birth year.

Known quirk: once this year's birthday has passed, the date is pushed
forward a fixed 365 days rather than to the same month/day next year. Across
a leap day that lands one day early (e.g. a 03-01 birthday that passed in
2027 reads as 2028-02-29). Feb 29 birthdays in non-leap years sit on Mar 1.

Usage:
    from kinkeep.engine.birthdays import days_until_birthday

    days = days_until_birthday("12-25", date(2025, 12, 20))  # 5
"""

from datetime import date, timedelta, tzinfo
from typing import Optional

from kinkeep.core.exceptions import ValidationError
from kinkeep.engine.clock import Moment, days_between, local_date

# Returned when there is no birthday on file; never inside any lookahead window
NO_BIRTHDAY_DAYS = 999

ROLL_FORWARD = timedelta(days=365)


def parse_birthday(birthday: str) -> tuple[int, int]:
    """Split a birthday string into (month, day).

    Accepts "MM-DD" (5 chars) or "YYYY-MM-DD" (10 chars). The year, if
    present, is discarded.

    Raises:
        ValidationError: If the length or digits are wrong, or the
            month/day never occurs on a calendar
    """
    if len(birthday) == 5:
        year_part, month_part, day_part = "", birthday[0:2], birthday[3:5]
        seps = birthday[2]
    elif len(birthday) == 10:
        year_part, month_part, day_part = birthday[0:4], birthday[5:7], birthday[8:10]
        seps = birthday[4] + birthday[7]
    else:
        raise ValidationError(
            f"Birthday must be MM-DD or YYYY-MM-DD, got {birthday!r} ({len(birthday)} chars)"
        )

    digits = year_part + month_part + day_part
    if set(seps) != {"-"} or not (digits.isascii() and digits.isdigit()):
        raise ValidationError(f"Birthday must be MM-DD or YYYY-MM-DD, got {birthday!r}")

    month, day = int(month_part), int(day_part)
    # 2000 is a leap year, so this accepts 02-29 and nothing else invalid
    try:
        date(2000, month, day)
    except ValueError as e:
        raise ValidationError(f"Birthday {birthday!r} is not a calendar date") from e

    return month, day


def birthday_in_year(month: int, day: int, year: int) -> date:
    """The birthday's date in a given year. Feb 29 becomes Mar 1 off leap years."""
    try:
        return date(year, month, day)
    except ValueError:
        return date(year, 2, 28) + timedelta(days=1)


def next_birthday(birthday: str, today: date) -> date:
    """Date of the next birthday on or after today (365-day roll-forward)."""
    month, day = parse_birthday(birthday)
    candidate = birthday_in_year(month, day, today.year)
    if candidate < today:
        candidate += ROLL_FORWARD
    return candidate


def days_until_birthday(
    birthday: Optional[str],
    today: Moment,
    tz: Optional[tzinfo] = None,
) -> int:
    """Days from today until the next birthday.

    Args:
        birthday: "MM-DD", "YYYY-MM-DD", or None
        today: Current instant (ms), datetime or date; only its calendar
            day in tz matters
        tz: Timezone for reading instants (default UTC)

    Returns:
        0 on the birthday itself, NO_BIRTHDAY_DAYS when there is none

    Raises:
        ValidationError: If birthday is malformed
    """
    if not birthday:
        return NO_BIRTHDAY_DAYS

    day = local_date(today, tz)
    return days_between(day, next_birthday(birthday, day))
