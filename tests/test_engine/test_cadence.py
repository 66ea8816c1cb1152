"""Tests for cadence system.

    - Base due date (last contact + cadence)
    - Forward-only alignment to a preferred weekday
    - Overdue detection
    - Contract validation
    - Contact actions (mark contacted, snooze, plan)
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from kinkeep.core.config import load_config
from kinkeep.core.exceptions import ValidationError
from kinkeep.db.models import Contact
from kinkeep.engine.cadence import (
    DEFAULT_SNOOZE_DAYS,
    align_to_weekday,
    apply_plan,
    base_due_date,
    is_overdue,
    mark_contacted,
    next_due_date,
    snooze,
    validate_contact,
)
from kinkeep.engine.clock import MS_PER_DAY, from_datetime, weekday
from kinkeep.engine.scoring import rules_from_config


def _ms(*args: int) -> int:
    return from_datetime(datetime(*args, tzinfo=timezone.utc))


# Friday 2025-01-03 09:30 UTC
FRIDAY = _ms(2025, 1, 3, 9, 30)


# =============================================================================
# DUE DATES
# =============================================================================


class TestNextDueDate:
    """Test next_due_date."""

    @pytest.mark.parametrize("frequency", [1, 7, 30, 365])
    def test_without_weekday_is_exact(self, frequency):
        """No preferred weekday: exactly last contact + cadence."""
        contact = Contact(last_contacted=FRIDAY, frequency_days=frequency)
        assert next_due_date(contact) == FRIDAY + frequency * 86_400_000

    def test_never_contacted(self):
        """last_contacted=0 counts from the epoch."""
        contact = Contact(last_contacted=0, frequency_days=7)
        assert next_due_date(contact) == 7 * MS_PER_DAY

    def test_friday_weekly_snaps_to_monday(self):
        """Friday + 7 days lands on Friday; Monday is 3 days further."""
        contact = Contact(last_contacted=FRIDAY, frequency_days=7, preferred_day_of_week=1)
        base = base_due_date(contact)
        assert weekday(base) == 5

        due = next_due_date(contact)
        assert due == base + 3 * MS_PER_DAY
        assert due == _ms(2025, 1, 13, 9, 30)
        assert weekday(due) == 1

    def test_already_on_preferred_day(self):
        """Base due date on the preferred day is left alone."""
        contact = Contact(last_contacted=FRIDAY, frequency_days=7, preferred_day_of_week=5)
        assert next_due_date(contact) == base_due_date(contact)

    def test_late_check_in_resets_rhythm(self):
        """Saturday + 7 with Friday preferred goes to the Friday after."""
        saturday = _ms(2025, 1, 4, 10)
        contact = Contact(last_contacted=saturday, frequency_days=7, preferred_day_of_week=5)
        assert next_due_date(contact) == saturday + 13 * MS_PER_DAY

    def test_sunday_is_zero(self):
        contact = Contact(last_contacted=FRIDAY, frequency_days=1, preferred_day_of_week=0)
        # Friday + 1 = Saturday, Sunday is one more day
        assert next_due_date(contact) == FRIDAY + 2 * MS_PER_DAY

    def test_aligned_never_before_base_and_on_target(self):
        """For every weekday and cadence, snap forward 0-6 days onto the target."""
        for frequency in (1, 3, 7, 14, 30):
            for target in range(7):
                contact = Contact(
                    last_contacted=FRIDAY,
                    frequency_days=frequency,
                    preferred_day_of_week=target,
                )
                due = next_due_date(contact)
                base = base_due_date(contact)
                assert base <= due <= base + 6 * MS_PER_DAY
                assert weekday(due) == target

    def test_weekday_read_in_timezone(self):
        """Friday 23:00 UTC is already Saturday at UTC+2."""
        late_friday = _ms(2025, 1, 3, 23)
        plus_two = timezone(timedelta(hours=2))
        contact = Contact(last_contacted=late_friday, frequency_days=7, preferred_day_of_week=6)

        assert next_due_date(contact) == late_friday + 8 * MS_PER_DAY
        assert next_due_date(contact, plus_two) == late_friday + 7 * MS_PER_DAY

    def test_out_of_range_weekday_raises(self):
        contact = Contact(last_contacted=FRIDAY, frequency_days=7, preferred_day_of_week=7)
        with pytest.raises(ValidationError):
            next_due_date(contact)


class TestAlignToWeekday:
    """Test align_to_weekday."""

    def test_negative_difference_wraps(self):
        """Friday to Monday: 1 - 5 + 7 = 3 days."""
        assert align_to_weekday(FRIDAY, 1) == FRIDAY + 3 * MS_PER_DAY

    def test_positive_difference(self):
        """Friday to Saturday: 1 day."""
        assert align_to_weekday(FRIDAY, 6) == FRIDAY + MS_PER_DAY

    @pytest.mark.parametrize("target", [-1, 7, 10])
    def test_rejects_bad_target(self, target):
        with pytest.raises(ValidationError):
            align_to_weekday(FRIDAY, target)


class TestIsOverdue:
    """Test overdue detection."""

    def test_overdue(self, now):
        contact = Contact(last_contacted=now - 8 * MS_PER_DAY, frequency_days=7)
        assert is_overdue(contact, now) is True

    def test_not_yet_due(self, sample_contact, now):
        assert is_overdue(sample_contact, now) is False

    def test_due_exactly_now_is_not_overdue(self, now):
        contact = Contact(last_contacted=now - 7 * MS_PER_DAY, frequency_days=7)
        assert is_overdue(contact, now) is False


# =============================================================================
# VALIDATION
# =============================================================================


class TestValidateContact:
    """Test contract validation."""

    def test_valid_contact(self, sample_contact):
        assert validate_contact(sample_contact) == []

    def test_full_valid_contact(self, now):
        contact = Contact(
            last_contacted=now,
            frequency_days=14,
            preferred_day_of_week=6,
            birthday="1990-02-28",
        )
        assert validate_contact(contact) == []

    @pytest.mark.parametrize("frequency", [0, -7])
    def test_non_positive_cadence(self, frequency):
        issues = validate_contact(Contact(frequency_days=frequency))
        assert len(issues) == 1
        assert "Cadence" in issues[0]

    @pytest.mark.parametrize("frequency", [True, False])
    def test_boolean_cadence_rejected(self, frequency):
        """bool is an int subclass but is not a cadence."""
        issues = validate_contact(Contact(frequency_days=frequency))
        assert len(issues) == 1
        assert "Cadence" in issues[0]

    def test_apply_plan_rejects_boolean_cadence(self, sample_contact):
        with pytest.raises(ValidationError, match="Cadence"):
            apply_plan(sample_contact, frequency_days=True)

    def test_bad_weekday(self):
        issues = validate_contact(Contact(preferred_day_of_week=7))
        assert any("day of week" in i for i in issues)

    def test_bad_birthday(self):
        issues = validate_contact(Contact(birthday="25-12-1990"))
        assert any("Birthday" in i for i in issues)

    def test_collects_every_issue(self):
        contact = Contact(frequency_days=0, preferred_day_of_week=-1, birthday="xx")
        assert len(validate_contact(contact)) == 3


# =============================================================================
# CONTACT ACTIONS
# =============================================================================


class TestMarkContacted:
    """Test mark_contacted."""

    def test_sets_last_contacted_and_clears_snooze(self, sample_contact, now):
        snoozed = snooze(sample_contact, now)
        updated = mark_contacted(snoozed, now)
        assert updated.last_contacted == now
        assert updated.snoozed_until is None

    def test_does_not_mutate_input(self, sample_contact, now):
        before = sample_contact.last_contacted
        mark_contacted(sample_contact, now)
        assert sample_contact.last_contacted == before


class TestSnooze:
    """Test snooze."""

    def test_default_length(self, sample_contact, now):
        assert DEFAULT_SNOOZE_DAYS == 3
        assert snooze(sample_contact, now).snoozed_until == now + 3 * MS_PER_DAY

    def test_custom_length(self, sample_contact, now):
        assert snooze(sample_contact, now, days=10).snoozed_until == now + 10 * MS_PER_DAY

    def test_configured_length(
        self, sample_contact, now, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """KINKEEP_SNOOZE_DAYS flows through the scoring rules into snooze."""
        monkeypatch.setenv("KINKEEP_SNOOZE_DAYS", "10")
        rules = rules_from_config(load_config(tmp_path / "missing.env"))
        snoozed = snooze(sample_contact, now, rules.snooze_days)
        assert snoozed.snoozed_until - now == 10 * MS_PER_DAY

    def test_rejects_non_positive(self, sample_contact, now):
        with pytest.raises(ValidationError):
            snooze(sample_contact, now, days=0)

    def test_does_not_mutate_input(self, sample_contact, now):
        snooze(sample_contact, now)
        assert sample_contact.snoozed_until is None


class TestApplyPlan:
    """Test apply_plan (planning flow)."""

    def test_updates_both(self, sample_contact):
        planned = apply_plan(sample_contact, frequency_days=14, preferred_day_of_week=2)
        assert planned.frequency_days == 14
        assert planned.preferred_day_of_week == 2
        assert sample_contact.frequency_days == 7

    def test_partial_update_keeps_rest(self, sample_contact):
        planned = apply_plan(sample_contact, preferred_day_of_week=0)
        assert planned.frequency_days == 7
        assert planned.preferred_day_of_week == 0

    def test_no_changes_returns_same(self, sample_contact):
        assert apply_plan(sample_contact) is sample_contact

    def test_invalid_plan_raises(self, sample_contact):
        with pytest.raises(ValidationError, match="Cadence"):
            apply_plan(sample_contact, frequency_days=0)
        with pytest.raises(ValidationError, match="day of week"):
            apply_plan(sample_contact, preferred_day_of_week=9)
