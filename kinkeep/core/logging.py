"""Structured JSON logging for KinKeep.

Provides consistent logging across all modules with:
    - JSON format for file logs
    - Human-readable console output
    - Rotating file handler
    - Context fields (contact_id, contact_count, now, etc.)

Engine code logs instants as raw ms since epoch. The JSON log keeps them as
numbers; the console shows them as UTC timestamps.

Usage:
    from kinkeep.core.logging import get_logger, setup_logging_from_config

    setup_logging_from_config(get_config())  # Call once at startup
    logger = get_logger(__name__)

    logger.debug("Ranked contacts", extra={"context": {"contact_count": 12}})
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

from kinkeep.core.config import DEFAULT_LOG_PATH, Config

ROOT_LOGGER_NAME = "kinkeep"
LOG_FILE_NAME = "kinkeep.log"

# Context keys that carry ms-since-epoch instants
INSTANT_KEYS = frozenset({"now", "last_contacted", "snoozed_until"})

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _format_instant(value: int) -> str:
    moment = _EPOCH + timedelta(milliseconds=value)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }

        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Enums and Paths in context fall back to str
        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable format for console output."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%H:%M:%S")
        message = record.getMessage()

        context = getattr(record, "context", None)
        if context:
            parts = []
            for key, value in context.items():
                if key in INSTANT_KEYS and isinstance(value, int) and not isinstance(value, bool):
                    value = _format_instant(value)
                parts.append(f"{key}={value}")
            message += f" [{', '.join(parts)}]"

        return f"{timestamp} {record.levelname[:4]:4s} {record.name}: {message}"


_logging_initialized = False


def setup_logging(
    log_dir: Optional[Path] = None,
    console_level: Optional[int] = None,
    file_level: int = logging.DEBUG,
    debug: bool = False,
) -> None:
    """Initialize logging system.

    Call once at application startup. Library callers that never call this
    get the standard library's default (silent) behavior.

    Args:
        log_dir: Directory for log files. Defaults to ~/.kinkeep/logs
        console_level: Minimum level for console output. Defaults to DEBUG
            when debug is set, INFO otherwise.
        file_level: Minimum level for file output (default: DEBUG)
        debug: Show per-ranking debug lines on the console
    """
    global _logging_initialized

    if _logging_initialized:
        return

    if console_level is None:
        console_level = logging.DEBUG if debug else logging.INFO

    log_dir = log_dir or DEFAULT_LOG_PATH
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ConsoleFormatter())
    root_logger.addHandler(console_handler)

    file_handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)

    _logging_initialized = True
    root_logger.info(
        "Logging initialized",
        extra={"context": {"log_dir": str(log_dir), "debug": debug}},
    )


def setup_logging_from_config(config: Config, debug: bool = False) -> None:
    """Initialize logging from configuration.

    Args:
        config: Application configuration (log_path, debug)
        debug: Force debug output regardless of KINKEEP_DEBUG
    """
    setup_logging(log_dir=config.log_path, debug=debug or config.debug)


def reset_logging() -> None:
    """Close and detach the handlers installed by setup_logging.

    Used primarily for testing.
    """
    global _logging_initialized
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root_logger.handlers):
        if isinstance(handler.formatter, (JSONFormatter, ConsoleFormatter)):
            root_logger.removeHandler(handler)
            handler.close()
    _logging_initialized = False


def get_logger(name: str) -> logging.Logger:
    """Get logger for module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger under the kinkeep root
    """
    # kinkeep.engine.scoring -> kinkeep.engine.scoring, scoring -> kinkeep.scoring
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
