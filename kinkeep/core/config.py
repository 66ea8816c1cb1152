"""Configuration management for KinKeep.

Loads configuration from environment variables and .env file.
Provides validation and sensible defaults.

Usage:
    from kinkeep.core.config import get_config, validate_config

    config = get_config()
    issues = validate_config(config)
    if issues:
        for issue in issues:
            print(f"Config issue: {issue}")
"""

import os
from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from kinkeep.core.exceptions import ConfigurationError

DEFAULT_LOG_PATH = Path.home() / ".kinkeep" / "logs"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        log_path: Directory for log files
        timezone: IANA zone used to read weekdays and calendar days off instants
        birthday_window_days: Lookahead window in which birthdays outrank cadence
        snooze_days: Length of a snooze when the caller gives none
        upcoming_horizon_days: How far ahead the dashboard's upcoming list reaches
        debug: Enable debug logging
    """

    log_path: Path = field(default_factory=lambda: DEFAULT_LOG_PATH)
    timezone: str = "UTC"
    birthday_window_days: int = 14
    snooze_days: int = 3
    upcoming_horizon_days: int = 100
    debug: bool = False


def load_env_file(path: Path) -> dict[str, str]:
    """Read KEY=VALUE pairs from a .env file.

    Blank lines and # comments are skipped, a leading ``export`` is
    allowed, and matching quotes around a value are dropped. Unquoted
    values end at an inline `` #`` comment. Lines without ``=`` are ignored.

    Returns:
        Mapping of the file's keys (empty if the file does not exist)
    """
    if not path.exists():
        return {}

    env_vars: dict[str, str] = {}
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()

        key, _, value = line.partition("=")
        key, value = key.strip(), value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
            value = value[1:-1]
        elif " #" in value:
            value = value.split(" #", 1)[0].rstrip()
        env_vars[key] = value

    return env_vars


def _lookup(key: str, env_vars: dict[str, str]) -> Optional[str]:
    """Raw setting: process environment first, then .env. Empty means unset."""
    return os.environ.get(key) or env_vars.get(key) or None


def _get_path(key: str, default: Path, env_vars: dict[str, str]) -> Path:
    value = _lookup(key, env_vars)
    return Path(value).expanduser().resolve() if value else default


def _get_str(key: str, default: str, env_vars: dict[str, str]) -> str:
    return _lookup(key, env_vars) or default


def _get_int(key: str, default: int, env_vars: dict[str, str]) -> int:
    """Integer setting.

    Raises:
        ConfigurationError: If the value is not an integer
    """
    value = _lookup(key, env_vars)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from e


def _get_bool(key: str, default: bool, env_vars: dict[str, str]) -> bool:
    value = _lookup(key, env_vars)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def load_config(env_file: Optional[Path] = None) -> Config:
    """Load configuration from environment and .env file.

    Priority:
        1. Environment variables (highest)
        2. .env file
        3. Default values (lowest)

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If a numeric setting cannot be parsed
    """
    if env_file is None:
        env_file = Path.cwd() / ".env"

    env_vars = load_env_file(Path(env_file))
    defaults = Config()

    return Config(
        log_path=_get_path("KINKEEP_LOG_PATH", defaults.log_path, env_vars),
        timezone=_get_str("KINKEEP_TIMEZONE", defaults.timezone, env_vars),
        birthday_window_days=_get_int(
            "KINKEEP_BIRTHDAY_WINDOW_DAYS", defaults.birthday_window_days, env_vars
        ),
        snooze_days=_get_int("KINKEEP_SNOOZE_DAYS", defaults.snooze_days, env_vars),
        upcoming_horizon_days=_get_int(
            "KINKEEP_UPCOMING_HORIZON_DAYS", defaults.upcoming_horizon_days, env_vars
        ),
        debug=_get_bool("KINKEEP_DEBUG", defaults.debug, env_vars),
    )


def resolve_timezone(name: str) -> tzinfo:
    """Turn a configured zone name into a tzinfo.

    Raises:
        ConfigurationError: If the zone is unknown
    """
    if name.upper() in ("UTC", "Z"):
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown timezone: {name}") from e


def validate_config(config: Config) -> list[str]:
    """Validate configuration.

    Checks:
        - Log path exists or can be created, and is writable
        - Timezone is a known IANA zone
        - Birthday window, snooze length and upcoming horizon are in range

    Args:
        config: Configuration to validate

    Returns:
        List of issues (empty if valid)
    """
    issues: list[str] = []

    try:
        config.log_path.mkdir(parents=True, exist_ok=True)
        if not os.access(config.log_path, os.W_OK):
            issues.append(f"Log directory not writable: {config.log_path}")
    except OSError as e:
        issues.append(f"Cannot create log directory {config.log_path}: {e}")

    try:
        resolve_timezone(config.timezone)
    except ConfigurationError as e:
        issues.append(str(e))

    if config.birthday_window_days < 0:
        issues.append(
            f"KINKEEP_BIRTHDAY_WINDOW_DAYS must be >= 0, got {config.birthday_window_days}"
        )
    elif config.birthday_window_days >= 365:
        issues.append(
            "KINKEEP_BIRTHDAY_WINDOW_DAYS covers the whole year; "
            "every contact with a birthday would rank as birthday-imminent"
        )

    if config.snooze_days < 1:
        issues.append(f"KINKEEP_SNOOZE_DAYS must be >= 1, got {config.snooze_days}")

    if config.upcoming_horizon_days < 0:
        issues.append(
            f"KINKEEP_UPCOMING_HORIZON_DAYS must be >= 0, got {config.upcoming_horizon_days}"
        )

    return issues


_config: Optional[Config] = None


def get_config() -> Config:
    """Return cached configuration singleton.

    Loads configuration on first call, returns cached version thereafter.

    Returns:
        Application configuration
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset cached configuration.

    Used primarily for testing.
    """
    global _config
    _config = None
