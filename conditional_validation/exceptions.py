"""
Conditional Validation Exceptions

Two classes of problems exist in this package:
- Configuration errors: malformed rules, unknown validators, bad attribute paths.
  These are raised and abort the validation pass.
- Validation failures: never raised, they are added to the record's error collection.
"""


class ConditionalValidationError(Exception):
    """Base class for all errors raised by the package."""


class ConfigurationError(ConditionalValidationError, ValueError):
    """Raised when a validator or rule set is configured incorrectly."""


class UnknownValidatorError(ConfigurationError):
    """Raised when a validator identifier is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown validator '{name}'")
