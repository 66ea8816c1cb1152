"""Dashboard buckets.

Splits the ranked contact list into the sections the dashboard shows:

    - critical: birthday coming up or past due, and not already handled today
    - upcoming: everyone else who is due within the upcoming horizon
    - later: active, but due further out than the horizon
    - snoozed: suppressed until their snooze runs out

Archived contacts are left out entirely. Every bucket keeps rank order. The
filter chips show critical and upcoming only; later is kept so every active
contact lands somewhere.

Usage:
    from kinkeep.engine.buckets import build_dashboard, filter_dashboard

    dashboard = build_dashboard(contacts, now)
    shown = filter_dashboard(dashboard, DashboardFilter.OVERDUE)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from kinkeep.core.logging import get_logger
from kinkeep.db.models import Contact
from kinkeep.engine.clock import MS_PER_DAY, same_day
from kinkeep.engine.scoring import DEFAULT_RULES, ScoringRules, is_snoozed, rank_contacts

logger = get_logger(__name__)


class DashboardFilter(str, Enum):
    """Filter chips on the dashboard."""

    ALL = "all"
    BIRTHDAYS = "birthdays"
    OVERDUE = "overdue"
    UPCOMING = "upcoming"


@dataclass
class Dashboard:
    """Ranked contacts split into display sections."""

    critical: list[Contact] = field(default_factory=list)
    upcoming: list[Contact] = field(default_factory=list)
    snoozed: list[Contact] = field(default_factory=list)
    later: list[Contact] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.critical or self.upcoming or self.snoozed or self.later)

    @property
    def all_caught_up(self) -> bool:
        """Nothing critical or upcoming left to show."""
        return not (self.critical or self.upcoming)


def is_critical(contact: Contact, now: int, rules: ScoringRules = DEFAULT_RULES) -> bool:
    """Critical test for an already scored contact.

    Critical means birthday-imminent or past due, while not snoozed and not
    already contacted today.
    """
    if is_snoozed(contact, now):
        return False
    if contact.last_contacted and same_day(contact.last_contacted, now, rules.tz):
        return False
    return contact.is_birthday_upcoming or (contact.score or 0) > 0


def is_upcoming(contact: Contact, rules: ScoringRules = DEFAULT_RULES) -> bool:
    """True if a non-critical contact is due within the upcoming horizon."""
    return (contact.score or 0) > -rules.upcoming_horizon_days * MS_PER_DAY


def build_dashboard(
    contacts: Iterable[Contact],
    now: int,
    rules: ScoringRules = DEFAULT_RULES,
) -> Dashboard:
    """Rank the active contacts and sort them into buckets.

    Args:
        contacts: Full contact list from the store
        now: Current instant in ms since epoch
        rules: Score band constants

    Returns:
        Dashboard with critical, upcoming, snoozed and later sections
    """
    dashboard = Dashboard()
    for contact in rank_contacts((c for c in contacts if not c.is_archived), now, rules):
        if is_snoozed(contact, now):
            dashboard.snoozed.append(contact)
        elif is_critical(contact, now, rules):
            dashboard.critical.append(contact)
        elif is_upcoming(contact, rules):
            dashboard.upcoming.append(contact)
        else:
            dashboard.later.append(contact)

    logger.debug(
        "Dashboard built",
        extra={
            "context": {
                "critical": len(dashboard.critical),
                "upcoming": len(dashboard.upcoming),
                "snoozed": len(dashboard.snoozed),
                "later": len(dashboard.later),
            }
        },
    )
    return dashboard


def filter_dashboard(dashboard: Dashboard, chip: DashboardFilter) -> list[Contact]:
    """Contacts visible under a filter chip, critical section first."""
    if chip == DashboardFilter.BIRTHDAYS:
        return [c for c in dashboard.critical if c.is_birthday_upcoming]
    if chip == DashboardFilter.OVERDUE:
        return [c for c in dashboard.critical if not c.is_birthday_upcoming]
    if chip == DashboardFilter.UPCOMING:
        return list(dashboard.upcoming)
    return dashboard.critical + dashboard.upcoming
