"""Core package - Configuration, logging, exceptions.

This package provides foundational infrastructure used by all other layers.

Modules:
    - config: Environment and configuration management
    - logging: Structured JSON logging
    - exceptions: Custom exception hierarchy
"""

from kinkeep.core.exceptions import (
    ConfigurationError,
    KinKeepError,
    TemplateError,
    ValidationError,
)

__all__ = [
    "KinKeepError",
    "ConfigurationError",
    "ValidationError",
    "TemplateError",
]
