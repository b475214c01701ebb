"""
Validation Checks Package

Contains the validator base class, the registry and the built-in validators:
- value_checks: required, length, match, in, numerical, compare, email
- type_checks: type, boolean
"""

from .base import Validator, InlineValidator, is_empty
from .registry import (
    register_validator,
    unregister_validator,
    get_validator_class,
    available_validators,
    create_validator,
)
from .value_checks import (
    RequiredValidator,
    LengthValidator,
    MatchValidator,
    InValidator,
    NumberValidator,
    CompareValidator,
    EmailValidator,
)
from .type_checks import TypeValidator, BooleanValidator

__all__ = [
    'Validator',
    'InlineValidator',
    'is_empty',
    'register_validator',
    'unregister_validator',
    'get_validator_class',
    'available_validators',
    'create_validator',
    'RequiredValidator',
    'LengthValidator',
    'MatchValidator',
    'InValidator',
    'NumberValidator',
    'CompareValidator',
    'EmailValidator',
    'TypeValidator',
    'BooleanValidator',
]
