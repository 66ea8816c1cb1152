"""Data models and enumerations for KinKeep.

Records arrive from the contact store as whole snapshots. The engine reads
them and hands back decorated copies; it never writes to the store.

This module defines:
    - Enumerations for categorical fields
    - Dataclasses for contact and template records
    - Cadence and weekday lookup tables
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

# =============================================================================
# ENUMERATIONS
# =============================================================================


class ContactCategory(str, Enum):
    """Relationship group a contact belongs to."""

    ISLAMIC = "islamic"
    FRIENDS = "friends"
    COLLEAGUES = "colleagues"
    NETWORK = "network"
    OTHER = "other"


class TemplateCategory(str, Enum):
    """Category of a message template.

    Every contact category, plus BIRTHDAY. CASUAL, RELIGIOUS and FORMAL
    exist because the seeded template set still uses them.
    """

    ISLAMIC = "islamic"
    FRIENDS = "friends"
    COLLEAGUES = "colleagues"
    NETWORK = "network"
    OTHER = "other"
    BIRTHDAY = "birthday"
    CASUAL = "casual"
    RELIGIOUS = "religious"
    FORMAL = "formal"


# =============================================================================
# LOOKUP TABLES
# =============================================================================


@dataclass(frozen=True)
class Frequency:
    """A selectable cadence.

    Attributes:
        value: Cadence in days
        label: Display label
    """

    value: int
    label: str


FREQUENCIES: tuple[Frequency, ...] = (
    Frequency(1, "Daily"),
    Frequency(3, "Every 3 Days"),
    Frequency(7, "Weekly"),
    Frequency(14, "Bi-Weekly"),
    Frequency(30, "Monthly"),
    Frequency(90, "Quarterly"),
    Frequency(180, "Every 6 Months"),
    Frequency(365, "Yearly"),
)

DEFAULT_FREQUENCY_DAYS = 30


@dataclass(frozen=True)
class Weekday:
    """A preferred day of week. 0 = Sunday."""

    value: int
    label: str
    full_label: str


DAYS_OF_WEEK: tuple[Weekday, ...] = (
    Weekday(0, "Sun", "Sunday"),
    Weekday(1, "Mon", "Monday"),
    Weekday(2, "Tue", "Tuesday"),
    Weekday(3, "Wed", "Wednesday"),
    Weekday(4, "Thu", "Thursday"),
    Weekday(5, "Fri", "Friday"),
    Weekday(6, "Sat", "Saturday"),
)


def frequency_label(days: int) -> str:
    """Label for a cadence, falling back to "Every N Days"."""
    for freq in FREQUENCIES:
        if freq.value == days:
            return freq.label
    return f"Every {days} Days"


# =============================================================================
# DATACLASSES
# =============================================================================


@dataclass
class Contact:
    """Contact record.

    Timestamps are integer milliseconds since the Unix epoch.

    Attributes:
        id: Store identifier
        first_name: First name
        last_name: Last name
        phone_number: Phone number, E.164 where possible
        email: Email address
        frequency_days: Cadence in days, always > 0
        last_contacted: Last outreach instant, 0 = never contacted
        birthday: "MM-DD" or "YYYY-MM-DD"; the year is ignored
        snoozed_until: Instant until which the contact is suppressed
        is_archived: Hidden from the dashboard
        category: Relationship group
        tags: Free-form tags
        preferred_day_of_week: 0 (Sunday) to 6 (Saturday)
        notes: Free-form notes
        score: Computed urgency, higher = more urgent (engine-owned)
        is_birthday_upcoming: Computed birthday flag (engine-owned)
    """

    id: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    phone_number: str = ""
    email: Optional[str] = None
    frequency_days: int = DEFAULT_FREQUENCY_DAYS
    last_contacted: int = 0
    birthday: Optional[str] = None
    snoozed_until: Optional[int] = None
    is_archived: bool = False
    category: Optional[ContactCategory] = None
    tags: list[str] = field(default_factory=list)
    preferred_day_of_week: Optional[int] = None
    notes: Optional[str] = None

    # Computed on every scoring pass, never read back by the engine
    score: Optional[int] = None
    is_birthday_upcoming: bool = False

    @property
    def full_name(self) -> str:
        """Return full name."""
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class Template:
    """Message template.

    Attributes:
        id: Store identifier
        category: Template category
        text: Jinja2 text, e.g. "Happy Birthday {{ first_name }}!"
        is_default: Offered first within its category
    """

    id: Optional[str] = None
    category: TemplateCategory = TemplateCategory.OTHER
    text: str = ""
    is_default: bool = False
