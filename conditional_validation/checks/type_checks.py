"""
Type Validation Checks

Validates data types of attribute values.
"""

from typing import Any

from ..exceptions import ConfigurationError
from ..models.record import Record
from .base import Validator, is_empty
from .registry import register_validator


@register_validator("type")
class TypeValidator(Validator):
    """
    Validates that attribute values match an expected data type.

    Supported types:
    - string
    - integer
    - float
    - number
    - boolean
    - list/array
    - dict/object
    """

    # Type mapping from rule string to Python types
    TYPE_MAP = {
        'string': str,
        'str': str,
        'integer': int,
        'int': int,
        'float': float,
        'number': (int, float),
        'boolean': bool,
        'bool': bool,
        'list': list,
        'array': list,
        'dict': dict,
        'object': dict,
    }

    name = "type"
    positional = ("type",)
    defaults = {"type": "string", "allow_empty": True}
    default_message = "{attribute} must be {type}."

    def configure(self) -> None:
        if not isinstance(self.type, str) or self.type.lower() not in self.TYPE_MAP:
            raise ConfigurationError(
                f"Unsupported type '{self.type}' for validator 'type'")
        self._expected = self.TYPE_MAP[self.type.lower()]

    def validate_attribute(self, record: Record, attribute: str) -> None:
        value = record.get_attribute(attribute)
        if self.allow_empty and is_empty(value):
            return

        if not self._check_type(value):
            self.add_error(record, attribute, params={"type": self.type})

    def _check_type(self, value: Any) -> bool:
        # bool is a subclass of int but never counts as a number here
        if isinstance(value, bool):
            return self._expected is bool
        return isinstance(value, self._expected)


@register_validator("boolean")
class BooleanValidator(Validator):
    """Checks that a value is either ``true_value`` or ``false_value``."""

    name = "boolean"
    defaults = {"true_value": True, "false_value": False, "strict": False, "allow_empty": True}
    default_message = "{attribute} must be either {true} or {false}."

    _LOOSE_TRUE = ("1", "true", "yes", "on")
    _LOOSE_FALSE = ("0", "false", "no", "off")

    def validate_attribute(self, record: Record, attribute: str) -> None:
        value = record.get_attribute(attribute)
        if self.allow_empty and is_empty(value):
            return

        if not self._is_boolean(value):
            self.add_error(record, attribute, params={
                "true": self.true_value,
                "false": self.false_value,
            })

    def _is_boolean(self, value: Any) -> bool:
        if self.strict:
            return any(type(value) is type(v) and value == v
                       for v in (self.true_value, self.false_value))

        if value in (self.true_value, self.false_value):
            return True
        text = str(value).strip().lower()
        candidates = {str(self.true_value).lower(), str(self.false_value).lower()}
        if self.true_value is True and self.false_value is False:
            candidates.update(self._LOOSE_TRUE + self._LOOSE_FALSE)
        return text in candidates
