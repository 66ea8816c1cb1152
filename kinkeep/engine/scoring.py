"""Contact priority scoring.

Turns each contact into one signed urgency score and orders the whole list
by it, most urgent first. Three bands, checked in order:

    1. Snoozed (snoozed_until > now): fixed -100000, nothing else checked
    2. Birthday within 14 days: 20000 - days_to_birthday (19986-20000)
    3. Otherwise: now - next_due_date in ms (positive = overdue)

The due-date band is in milliseconds while the birthday band is a small
constant, so a contact more than 20 seconds overdue outranks an imminent
birthday, and anyone not yet due ranks below it. classify_priority gives an
explicit class for callers that would rather not lean on the numbers.

Usage:
    from kinkeep.engine.scoring import rank_contacts

    ranked = rank_contacts(contacts, now)
"""

from dataclasses import dataclass, field, replace
from datetime import timezone, tzinfo
from enum import IntEnum
from typing import Iterable

from kinkeep.core.config import Config, resolve_timezone
from kinkeep.core.logging import get_logger
from kinkeep.db.models import Contact
from kinkeep.engine.birthdays import days_until_birthday
from kinkeep.engine.cadence import DEFAULT_SNOOZE_DAYS, next_due_date

logger = get_logger(__name__)


# =============================================================================
# SCORING RULES
# =============================================================================


@dataclass(frozen=True)
class ScoringRules:
    """Constants that define the score bands.

    Attributes:
        snoozed_score: Score given to every snoozed contact
        birthday_base_score: Score of a birthday that is today
        birthday_window_days: Lookahead in which birthdays outrank cadence
        snooze_days: Snooze length callers pass to cadence.snooze
        upcoming_horizon_days: Contacts due further out than this stay off
            the dashboard's upcoming list
        tz: Timezone for weekdays and calendar days
    """

    snoozed_score: int = -100_000
    birthday_base_score: int = 20_000
    birthday_window_days: int = 14
    snooze_days: int = DEFAULT_SNOOZE_DAYS
    upcoming_horizon_days: int = 100
    tz: tzinfo = field(default=timezone.utc)


DEFAULT_RULES = ScoringRules()


def rules_from_config(config: Config) -> ScoringRules:
    """Build scoring rules from application configuration.

    Raises:
        ConfigurationError: If the configured timezone is unknown
    """
    return ScoringRules(
        birthday_window_days=config.birthday_window_days,
        snooze_days=config.snooze_days,
        upcoming_horizon_days=config.upcoming_horizon_days,
        tz=resolve_timezone(config.timezone),
    )


class PriorityClass(IntEnum):
    """Urgency class, ordered least to most urgent."""

    SNOOZED = 0
    DUE_SOON = 1
    OVERDUE = 2
    BIRTHDAY_IMMINENT = 3


# =============================================================================
# SCORING FUNCTIONS
# =============================================================================


def is_snoozed(contact: Contact, now: int) -> bool:
    """True while snoozed_until is set and still in the future."""
    return contact.snoozed_until is not None and contact.snoozed_until > now


def score_contact(contact: Contact, now: int, rules: ScoringRules = DEFAULT_RULES) -> Contact:
    """Decorate one contact with score and is_birthday_upcoming.

    Args:
        contact: Contact record (not modified)
        now: Current instant in ms since epoch
        rules: Score band constants

    Returns:
        New Contact with the computed fields set

    Raises:
        ValidationError: If the birthday or preferred weekday is malformed
    """
    if is_snoozed(contact, now):
        return replace(contact, score=rules.snoozed_score, is_birthday_upcoming=False)

    days_to_birthday = days_until_birthday(contact.birthday, now, rules.tz)
    if 0 <= days_to_birthday <= rules.birthday_window_days:
        return replace(
            contact,
            score=rules.birthday_base_score - days_to_birthday,
            is_birthday_upcoming=True,
        )

    due = next_due_date(contact, rules.tz)
    return replace(contact, score=now - due, is_birthday_upcoming=False)


def rank_contacts(
    contacts: Iterable[Contact],
    now: int,
    rules: ScoringRules = DEFAULT_RULES,
) -> list[Contact]:
    """Score every contact and sort most urgent first.

    Ties keep their input order (Python's sort is stable), but callers
    should not rely on that.

    Args:
        contacts: Full contact list from the store
        now: Current instant in ms since epoch
        rules: Score band constants

    Returns:
        New list of decorated contacts, descending by score

    Raises:
        ValidationError: If any contact is malformed; nothing is returned
    """
    scored = [score_contact(c, now, rules) for c in contacts]
    scored.sort(key=lambda c: c.score, reverse=True)

    logger.debug(
        "Ranked contacts",
        extra={
            "context": {
                "contact_count": len(scored),
                "now": now,
                "birthdays": sum(1 for c in scored if c.is_birthday_upcoming),
            }
        },
    )
    return scored


def classify_priority(
    contact: Contact,
    now: int,
    rules: ScoringRules = DEFAULT_RULES,
) -> PriorityClass:
    """Urgency class for a contact, consistent with score_contact."""
    if is_snoozed(contact, now):
        return PriorityClass.SNOOZED
    scored = score_contact(contact, now, rules)
    if scored.is_birthday_upcoming:
        return PriorityClass.BIRTHDAY_IMMINENT
    if scored.score > 0:
        return PriorityClass.OVERDUE
    return PriorityClass.DUE_SOON
