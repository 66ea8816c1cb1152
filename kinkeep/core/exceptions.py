"""KinKeep Exception Hierarchy.

All custom exceptions inherit from KinKeepError.

Exception Hierarchy:
    KinKeepError (base)
    ├── ConfigurationError
    ├── ValidationError
    └── TemplateError
"""


class KinKeepError(Exception):
    """Base exception for all KinKeep errors.

    Allows callers to catch anything the engine raises in one clause.
    """

    pass


class ConfigurationError(KinKeepError):
    """Configuration is invalid or missing.

    Raised when:
        - An environment value cannot be parsed (bad integer, unknown timezone)
        - Log path is not writable
    """

    pass


class ValidationError(KinKeepError):
    """Contact data violates the engine's input contract.

    Raised when:
        - Birthday string is not "MM-DD" or "YYYY-MM-DD"
        - Birthday month/day is not a real calendar date
        - Preferred weekday is outside 0-6
        - Cadence is not a positive number of days
    """

    pass


class TemplateError(KinKeepError):
    """Message template could not be rendered.

    Raised when:
        - Template text has a Jinja2 syntax error
        - Template references a variable the contact does not provide
    """

    pass
