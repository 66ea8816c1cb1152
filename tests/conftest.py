"""Shared pytest fixtures for KinKeep tests.

Fixtures:
    - clean_config: Fresh config singleton, no KINKEEP_* environment leakage
    - now: Fixed "now" instant (Wednesday 2025-06-11 12:00 UTC)
    - sample_contact: Plain weekly contact, no birthday, not snoozed
    - sample_templates: The default template set
"""

from datetime import datetime, timezone

import pytest

from kinkeep.core.config import reset_config
from kinkeep.db.models import Contact, ContactCategory, Template
from kinkeep.engine.clock import MS_PER_DAY, from_datetime
from kinkeep.engine.templates import DEFAULT_TEMPLATES


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch):
    """Drop cached config and any KINKEEP_* variables from the host."""
    import os

    for key in list(os.environ):
        if key.startswith("KINKEEP_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def now() -> int:
    """Wednesday 2025-06-11 12:00:00 UTC in ms."""
    return from_datetime(datetime(2025, 6, 11, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def sample_contact(now: int) -> Contact:
    """Weekly contact last reached three days ago."""
    return Contact(
        id="c-1",
        first_name="Sara",
        last_name="Haddad",
        phone_number="+15555550100",
        frequency_days=7,
        last_contacted=now - 3 * MS_PER_DAY,
        category=ContactCategory.FRIENDS,
    )


@pytest.fixture
def sample_templates() -> list[Template]:
    """Default seeded templates."""
    return list(DEFAULT_TEMPLATES)
