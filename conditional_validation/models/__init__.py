"""
Conditional Validation Models Module

Defines the record contract, validator definitions and validation results.
"""

from .record import Record, DictRecord, generate_attribute_label
from .validation_result import ValidationStatus, ConditionalOutcome, ValidationFailure, ValidationResult
from .validation_spec import (
    ValidationSpec,
    DependentValidation,
    ValidationTarget,
    DependencyError,
    parse_specs,
    split_attribute_key,
    normalize_dependent_validations,
)

__all__ = [
    "Record",
    "DictRecord",
    "generate_attribute_label",
    "ValidationStatus",
    "ConditionalOutcome",
    "ValidationFailure",
    "ValidationResult",
    "ValidationSpec",
    "DependentValidation",
    "ValidationTarget",
    "DependencyError",
    "parse_specs",
    "split_attribute_key",
    "normalize_dependent_validations",
]
