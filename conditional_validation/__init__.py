"""
Conditional Validation Package

Validates record attributes only when the attributes they depend on are
valid, possibly across one relation hop.

Main Components:
- engine: Conditional validator and rule set loading
- checks: Validator base class, registry and built-in validators
- models: Record contract, validator definitions and results
- metrics: Prometheus-compatible metrics

Quick Start:
    from conditional_validation import ConditionalValidator, DictRecord

    order = DictRecord({"shipping_method": "air"},
                       relations={"customer": DictRecord({"country": ""})})
    validator = ConditionalValidator(dependent_validations={"customer.country": ["required"]})
    validator.validate(order, "shipping_method")
    order.get_errors()
    # [('shipping_method', 'Country cannot be blank.')]
"""

from .exceptions import ConditionalValidationError, ConfigurationError, UnknownValidatorError
from .messages import format_message
from .models import (
    Record,
    DictRecord,
    ValidationSpec,
    DependentValidation,
    ValidationResult,
    ValidationFailure,
    ValidationStatus,
    ConditionalOutcome,
)
from .checks import Validator, register_validator, create_validator, available_validators
from .engine import ConditionalValidator, RuleSet, build_rules, load_rules
from .record_validator import RecordValidator
from .metrics import get_metrics

__version__ = "1.0.0"

__all__ = [
    "ConditionalValidationError",
    "ConfigurationError",
    "UnknownValidatorError",
    "format_message",
    "Record",
    "DictRecord",
    "ValidationSpec",
    "DependentValidation",
    "ValidationResult",
    "ValidationFailure",
    "ValidationStatus",
    "ConditionalOutcome",
    "Validator",
    "register_validator",
    "create_validator",
    "available_validators",
    "ConditionalValidator",
    "RuleSet",
    "build_rules",
    "load_rules",
    "RecordValidator",
    "get_metrics",
]
