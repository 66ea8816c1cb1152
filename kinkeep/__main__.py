"""KinKeep - Stay in touch with the people who matter.

Command-line entry point.

Usage:
    python -m kinkeep --demo       # Rank a sample contact list
    python -m kinkeep --status     # Show configuration report
    python -m kinkeep --version    # Show version
"""

import argparse
import sys
from typing import Optional

from kinkeep import __version__
from kinkeep.core.config import get_config, validate_config
from kinkeep.core.exceptions import KinKeepError
from kinkeep.core.logging import get_logger, setup_logging_from_config
from kinkeep.db.models import Contact, ContactCategory
from kinkeep.engine.buckets import Dashboard, build_dashboard
from kinkeep.engine.cadence import snooze
from kinkeep.engine.clock import MS_PER_DAY, local_date, now_ms
from kinkeep.engine.scoring import ScoringRules, rules_from_config


def _demo_contacts(now: int, rules: ScoringRules) -> list[Contact]:
    """Sample contacts spread across every dashboard section."""
    today = local_date(now, rules.tz)
    soon = local_date(now + 5 * MS_PER_DAY, rules.tz)
    return [
        Contact(
            id="demo-1",
            first_name="Amina",
            last_name="Yusuf",
            frequency_days=7,
            last_contacted=now - 9 * MS_PER_DAY,
            category=ContactCategory.FRIENDS,
        ),
        Contact(
            id="demo-2",
            first_name="Ben",
            last_name="Okafor",
            frequency_days=30,
            last_contacted=now - 10 * MS_PER_DAY,
            birthday=f"{soon.month:02d}-{soon.day:02d}",
            category=ContactCategory.FRIENDS,
        ),
        Contact(
            id="demo-3",
            first_name="Chloe",
            last_name="Marsh",
            frequency_days=14,
            last_contacted=now - 2 * MS_PER_DAY,
            preferred_day_of_week=1,
            category=ContactCategory.COLLEAGUES,
        ),
        snooze(
            Contact(
                id="demo-4",
                first_name="Dev",
                last_name="Raman",
                frequency_days=3,
                last_contacted=now - 20 * MS_PER_DAY,
                category=ContactCategory.NETWORK,
            ),
            now,
            rules.snooze_days,
        ),
        Contact(
            id="demo-5",
            first_name="Elif",
            last_name="Demir",
            frequency_days=90,
            last_contacted=now - 100 * MS_PER_DAY,
            birthday=f"{today.year - 30}-{today.month:02d}-{today.day:02d}",
            is_archived=True,
        ),
        Contact(
            id="demo-6",
            first_name="Farid",
            last_name="Nasser",
            frequency_days=365,
            last_contacted=now - 10 * MS_PER_DAY,
            category=ContactCategory.ISLAMIC,
        ),
    ]


def _print_dashboard(dashboard: Dashboard) -> None:
    sections = (
        ("Critical", dashboard.critical),
        ("Upcoming", dashboard.upcoming),
        ("Snoozed", dashboard.snoozed),
        ("Later", dashboard.later),
    )
    for title, contacts in sections:
        print(f"\n{title} ({len(contacts)})")
        for contact in contacts:
            flag = " [birthday soon]" if contact.is_birthday_upcoming else ""
            print(f"  {contact.score:>14}  {contact.full_name}{flag}")
    if dashboard.all_caught_up:
        print("\nYou're all caught up for today!")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for KinKeep.

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    parser = argparse.ArgumentParser(description="KinKeep - engagement scheduling engine")
    parser.add_argument("--demo", action="store_true", help="Rank a sample contact list")
    parser.add_argument("--status", action="store_true", help="Show configuration report and exit")
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    if args.version:
        print(f"KinKeep v{__version__}")
        return 0

    try:
        config = get_config()
    except KinKeepError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging_from_config(config, debug=args.debug)
    logger = get_logger("main")
    logger.info(f"KinKeep v{__version__} starting...")

    issues = validate_config(config)
    for issue in issues:
        logger.warning(f"Configuration issue: {issue}")

    if args.status:
        print(f"\nKinKeep v{__version__} - Configuration\n")
        print(f"  Timezone:        {config.timezone}")
        print(f"  Birthday window: {config.birthday_window_days} days")
        print(f"  Snooze length:   {config.snooze_days} days")
        print(f"  Upcoming within: {config.upcoming_horizon_days} days")
        print(f"  Log path:        {config.log_path}")
        if issues:
            print(f"\nConfiguration issues ({len(issues)}):")
            for issue in issues:
                print(f"  ! {issue}")
        print()
        return 0

    if args.demo:
        try:
            rules = rules_from_config(config)
        except KinKeepError as e:
            logger.error(f"Cannot build scoring rules: {e}")
            return 1
        now = now_ms()
        _print_dashboard(build_dashboard(_demo_contacts(now, rules), now, rules))
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
