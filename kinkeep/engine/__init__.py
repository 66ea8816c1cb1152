"""Engine package - Scheduling and prioritization logic.

Everything here is pure: contacts in, decorated copies out, with "now"
passed explicitly.

Modules:
    - clock: Instant and calendar-day conversions
    - birthdays: Days until next birthday
    - cadence: Next due date, contact actions, validation
    - scoring: Urgency score and ranking
    - buckets: Dashboard sections and filters
    - templates: Message template ordering and rendering
"""

from kinkeep.engine.birthdays import NO_BIRTHDAY_DAYS, days_until_birthday, parse_birthday
from kinkeep.engine.buckets import Dashboard, DashboardFilter, build_dashboard, filter_dashboard
from kinkeep.engine.cadence import (
    align_to_weekday,
    apply_plan,
    is_overdue,
    mark_contacted,
    next_due_date,
    snooze,
    validate_contact,
)
from kinkeep.engine.clock import MS_PER_DAY, now_ms
from kinkeep.engine.scoring import (
    DEFAULT_RULES,
    PriorityClass,
    ScoringRules,
    classify_priority,
    rank_contacts,
    rules_from_config,
    score_contact,
)
from kinkeep.engine.templates import (
    DEFAULT_TEMPLATES,
    order_templates,
    render_message,
    validate_template,
)

__all__ = [
    # Clock
    "MS_PER_DAY",
    "now_ms",
    # Birthdays
    "NO_BIRTHDAY_DAYS",
    "days_until_birthday",
    "parse_birthday",
    # Cadence
    "align_to_weekday",
    "apply_plan",
    "is_overdue",
    "mark_contacted",
    "next_due_date",
    "snooze",
    "validate_contact",
    # Scoring
    "DEFAULT_RULES",
    "PriorityClass",
    "ScoringRules",
    "classify_priority",
    "rank_contacts",
    "rules_from_config",
    "score_contact",
    # Buckets
    "Dashboard",
    "DashboardFilter",
    "build_dashboard",
    "filter_dashboard",
    # Templates
    "DEFAULT_TEMPLATES",
    "order_templates",
    "render_message",
    "validate_template",
]
