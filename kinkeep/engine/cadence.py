"""Cadence system for follow-up timing.

A contact is due one cadence after they were last contacted. If they have a
preferred weekday, the due date snaps forward (never back) to the next
occurrence of that weekday, so a late check-in re-anchors the rhythm on the
preferred day instead of drifting with the last-contact timestamp.

Usage:
    from kinkeep.engine.cadence import next_due_date, is_overdue

    due = next_due_date(contact)
    if is_overdue(contact, now):
        ...
"""

from dataclasses import replace
from datetime import tzinfo
from typing import Optional

from kinkeep.core.exceptions import ValidationError
from kinkeep.core.logging import get_logger
from kinkeep.db.models import Contact
from kinkeep.engine.birthdays import parse_birthday
from kinkeep.engine.clock import add_days, weekday

logger = get_logger(__name__)

DEFAULT_SNOOZE_DAYS = 3


# =============================================================================
# DUE DATES
# =============================================================================


def _check_weekday(value: int) -> None:
    if not 0 <= value <= 6:
        raise ValidationError(f"Preferred day of week must be 0-6 (0 = Sunday), got {value}")


def base_due_date(contact: Contact) -> int:
    """Last contact plus one cadence, before any weekday alignment."""
    return add_days(contact.last_contacted, contact.frequency_days)


def align_to_weekday(instant_ms: int, target_day: int, tz: Optional[tzinfo] = None) -> int:
    """Move an instant forward 0-6 days so it falls on target_day.

    Args:
        instant_ms: Instant to align
        target_day: Weekday, 0 = Sunday
        tz: Timezone the weekday is read in (default UTC)

    Returns:
        Aligned instant, same time of day

    Raises:
        ValidationError: If target_day is outside 0-6
    """
    _check_weekday(target_day)
    days_to_add = target_day - weekday(instant_ms, tz)
    if days_to_add < 0:
        days_to_add += 7
    return add_days(instant_ms, days_to_add)


def next_due_date(contact: Contact, tz: Optional[tzinfo] = None) -> int:
    """Instant at which the contact is next due for outreach.

    Args:
        contact: Contact record
        tz: Timezone the preferred weekday is read in (default UTC)

    Returns:
        Due instant in ms since epoch

    Raises:
        ValidationError: If preferred_day_of_week is outside 0-6
    """
    due = base_due_date(contact)
    if contact.preferred_day_of_week is None:
        return due
    return align_to_weekday(due, contact.preferred_day_of_week, tz)


def is_overdue(contact: Contact, now: int, tz: Optional[tzinfo] = None) -> bool:
    """True if the due date is strictly before now."""
    return next_due_date(contact, tz) < now


# =============================================================================
# VALIDATION
# =============================================================================


def validate_contact(contact: Contact) -> list[str]:
    """Check a contact against the scheduling contract.

    The store should call this before saving; the engine assumes valid input.

    Returns:
        List of issues (empty if valid)
    """
    issues: list[str] = []

    cadence = contact.frequency_days
    if not isinstance(cadence, int) or isinstance(cadence, bool) or cadence <= 0:
        issues.append(f"Cadence must be a positive number of days, got {cadence!r}")

    if contact.preferred_day_of_week is not None:
        try:
            _check_weekday(contact.preferred_day_of_week)
        except ValidationError as e:
            issues.append(str(e))

    if contact.birthday:
        try:
            parse_birthday(contact.birthday)
        except ValidationError as e:
            issues.append(str(e))

    if contact.last_contacted < 0:
        issues.append(f"Last contacted must not be negative, got {contact.last_contacted}")

    return issues


# =============================================================================
# CONTACT ACTIONS
# =============================================================================


def mark_contacted(contact: Contact, now: int) -> Contact:
    """Copy of the contact with outreach logged at now and snooze cleared."""
    logger.info(
        "Contact marked as contacted",
        extra={"context": {"contact_id": contact.id, "now": now}},
    )
    return replace(contact, last_contacted=now, snoozed_until=None)


def snooze(contact: Contact, now: int, days: int = DEFAULT_SNOOZE_DAYS) -> Contact:
    """Copy of the contact suppressed for the next `days` days.

    Callers that follow configuration pass ScoringRules.snooze_days.

    Raises:
        ValidationError: If days is not positive
    """
    if days <= 0:
        raise ValidationError(f"Snooze length must be positive, got {days}")
    until = add_days(now, days)
    logger.info(
        "Contact snoozed",
        extra={"context": {"contact_id": contact.id, "snoozed_until": until}},
    )
    return replace(contact, snoozed_until=until)


def apply_plan(
    contact: Contact,
    frequency_days: Optional[int] = None,
    preferred_day_of_week: Optional[int] = None,
) -> Contact:
    """Copy of the contact with a new cadence and/or preferred weekday.

    Arguments left as None keep the contact's current value.

    Raises:
        ValidationError: If the resulting contact breaks the contract
    """
    updates: dict[str, int] = {}
    if frequency_days is not None:
        updates["frequency_days"] = frequency_days
    if preferred_day_of_week is not None:
        updates["preferred_day_of_week"] = preferred_day_of_week

    if not updates:
        return contact

    planned = replace(contact, **updates)
    issues = validate_contact(planned)
    if issues:
        raise ValidationError("; ".join(issues))

    logger.info(
        "Contact plan updated",
        extra={"context": {"contact_id": contact.id, **updates}},
    )
    return planned
