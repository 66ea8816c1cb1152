"""Record models supplied by the contact store.

Modules:
    - models: Contact and Template records, enums, lookup tables
"""

from kinkeep.db.models import (
    DAYS_OF_WEEK,
    DEFAULT_FREQUENCY_DAYS,
    FREQUENCIES,
    Contact,
    ContactCategory,
    Frequency,
    Template,
    TemplateCategory,
    Weekday,
    frequency_label,
)

__all__ = [
    "DAYS_OF_WEEK",
    "DEFAULT_FREQUENCY_DAYS",
    "FREQUENCIES",
    "Contact",
    "ContactCategory",
    "Frequency",
    "Template",
    "TemplateCategory",
    "Weekday",
    "frequency_label",
]
