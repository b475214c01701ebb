"""
Value Validation Checks

Validates attribute values against specific constraints:
- Required values
- String length
- Regex patterns
- Allowed values
- Numeric ranges
- Comparison with another attribute or a constant
- Email addresses
"""

import operator
import re
from typing import Any, Callable, Dict, Optional, Tuple

from ..exceptions import ConfigurationError
from ..models.record import Record
from .base import Validator, is_empty
from .registry import register_validator

_INTEGER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")
_NUMBER_PATTERN = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?\s*$")


def _same(a: Any, b: Any, strict: bool) -> bool:
    if a is None or b is None:
        return a is b if strict else is_empty(a) and is_empty(b)
    if strict:
        return type(a) is type(b) and a == b
    return a == b or str(a) == str(b)


def _as_number(value: Any) -> Optional[float]:
    """Convert numbers and numeric strings to float, anything else to None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str) and _NUMBER_PATTERN.match(value):
        return float(value)
    return None


@register_validator("required")
class RequiredValidator(Validator):
    """
    Checks that an attribute is not empty, or equals ``required_value``.
    """

    name = "required"
    positional = ("required_value",)
    defaults = {"required_value": None, "strict": False, "trim": True}
    default_message = "{attribute} cannot be blank."

    def validate_attribute(self, record: Record, attribute: str) -> None:
        value = record.get_attribute(attribute)

        if self.required_value is not None:
            if not _same(value, self.required_value, self.strict):
                self.add_error(record, attribute, "{attribute} must be {value}.",
                               {"value": self.required_value})
        elif is_empty(value, trim=self.trim):
            self.add_error(record, attribute)


@register_validator("length")
class LengthValidator(Validator):
    """Checks the length of a string value."""

    name = "length"
    positional = ("min", "max")
    defaults = {
        "min": None,
        "max": None,
        "is": None,
        "too_short": None,
        "too_long": None,
        "allow_empty": True,
    }

    def configure(self) -> None:
        for option in ("min", "max", "is"):
            bound = getattr(self, option)
            if bound is not None and (not isinstance(bound, int) or isinstance(bound, bool) or bound < 0):
                raise ConfigurationError(
                    f"Option '{option}' of validator 'length' must be a non-negative integer")

    def validate_attribute(self, record: Record, attribute: str) -> None:
        value = record.get_attribute(attribute)
        if self.allow_empty and is_empty(value):
            return

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            self.add_error(record, attribute)
            return

        length = len(value)
        if self.min is not None and length < self.min:
            self.add_error(
                record, attribute,
                self.too_short or "{attribute} is too short (minimum is {min} characters).",
                {"min": self.min})
        if self.max is not None and length > self.max:
            self.add_error(
                record, attribute,
                self.too_long or "{attribute} is too long (maximum is {max} characters).",
                {"max": self.max})
        if getattr(self, "is") is not None and length != getattr(self, "is"):
            self.add_error(
                record, attribute,
                "{attribute} is of the wrong length (should be {length} characters).",
                {"length": getattr(self, "is")})


@register_validator("match")
class MatchValidator(Validator):
    """Checks a value against a regular expression (``re.search``)."""

    name = "match"
    positional = ("pattern",)
    defaults = {"pattern": None, "not": False, "allow_empty": True}

    def configure(self) -> None:
        # Pre-compile the pattern once per validator
        if not self.pattern:
            raise ConfigurationError("Validator 'match' requires a 'pattern'")
        try:
            self._compiled = re.compile(self.pattern)
        except re.error as e:
            raise ConfigurationError(f"Invalid regex pattern '{self.pattern}': {e}") from e

    def validate_attribute(self, record: Record, attribute: str) -> None:
        value = record.get_attribute(attribute)
        if self.allow_empty and is_empty(value):
            return

        if isinstance(value, (list, tuple, dict, set)):
            self.add_error(record, attribute)
            return

        matched = value is not None and self._compiled.search(str(value)) is not None
        if matched == bool(getattr(self, "not")):
            self.add_error(record, attribute)


@register_validator("in")
class InValidator(Validator):
    """Checks that a value is (or, with ``not``, is not) in ``range``."""

    name = "in"
    positional = ("range",)
    defaults = {"range": None, "strict": False, "not": False, "allow_empty": True}

    def configure(self) -> None:
        if not isinstance(self.range, (list, tuple, set, frozenset)):
            raise ConfigurationError("Validator 'in' requires a 'range' list")

    def validate_attribute(self, record: Record, attribute: str) -> None:
        value = record.get_attribute(attribute)
        if self.allow_empty and is_empty(value):
            return

        found = any(_same(value, allowed, self.strict) for allowed in self.range)
        if getattr(self, "not"):
            if found:
                self.add_error(record, attribute, "{attribute} is in the list.")
        elif not found:
            self.add_error(record, attribute, "{attribute} is not in the list.")


@register_validator("numerical")
@register_validator("number")
class NumberValidator(Validator):
    """Checks that a value is a number (or an integer) within bounds."""

    name = "numerical"
    positional = ("min", "max")
    defaults = {
        "integer_only": False,
        "min": None,
        "max": None,
        "too_small": None,
        "too_big": None,
        "allow_empty": True,
    }

    def validate_attribute(self, record: Record, attribute: str) -> None:
        value = record.get_attribute(attribute)
        if self.allow_empty and is_empty(value, trim=True):
            return

        if self.integer_only:
            valid = (isinstance(value, int) and not isinstance(value, bool)) or (
                isinstance(value, str) and _INTEGER_PATTERN.match(value) is not None)
            if not valid:
                self.add_error(record, attribute, "{attribute} must be an integer.")
                return

        number = _as_number(value)
        if number is None:
            self.add_error(record, attribute, "{attribute} must be a number.")
            return

        if self.min is not None and number < self.min:
            self.add_error(record, attribute,
                           self.too_small or "{attribute} is too small (minimum is {min}).",
                           {"min": self.min})
        if self.max is not None and number > self.max:
            self.add_error(record, attribute,
                           self.too_big or "{attribute} is too big (maximum is {max}).",
                           {"max": self.max})


_COMPARISONS: Dict[str, Tuple[Callable[[Any, Any], bool], str]] = {
    "=": (operator.eq, '{attribute} must be equal to "{compareValue}".'),
    "==": (operator.eq, '{attribute} must be equal to "{compareValue}".'),
    "!=": (operator.ne, '{attribute} must not be equal to "{compareValue}".'),
    ">": (operator.gt, '{attribute} must be greater than "{compareValue}".'),
    ">=": (operator.ge, '{attribute} must be greater than or equal to "{compareValue}".'),
    "<": (operator.lt, '{attribute} must be less than "{compareValue}".'),
    "<=": (operator.le, '{attribute} must be less than or equal to "{compareValue}".'),
}


@register_validator("compare")
class CompareValidator(Validator):
    """
    Compares a value with another attribute or with ``compare_value``.

    Without either option the value is compared with ``<attribute>_repeat``.
    """

    name = "compare"
    positional = ("compare_attribute",)
    defaults = {
        "compare_attribute": None,
        "compare_value": None,
        "operator": "=",
        "strict": False,
        "allow_empty": False,
    }

    def configure(self) -> None:
        if self.operator not in _COMPARISONS:
            raise ConfigurationError(
                f"Invalid operator '{self.operator}' for validator 'compare'")

    def validate_attribute(self, record: Record, attribute: str) -> None:
        value = record.get_attribute(attribute)
        if self.allow_empty and is_empty(value):
            return

        if self.compare_value is not None:
            compare_to = self.compare_value
            compare_label = self.compare_value
            repeat = False
        else:
            compare_attribute = self.compare_attribute or f"{attribute}_repeat"
            compare_to = record.get_attribute(compare_attribute)
            compare_label = record.get_attribute_label(compare_attribute)
            repeat = True

        check, message = _COMPARISONS[self.operator]
        if check in (operator.eq, operator.ne):
            passed = _same(value, compare_to, self.strict) == (check is operator.eq)
            if repeat and check is operator.eq:
                message = "{attribute} must be repeated exactly."
        else:
            left, right = value, compare_to
            if not self.strict:
                left_number, right_number = _as_number(value), _as_number(compare_to)
                if left_number is not None and right_number is not None:
                    left, right = left_number, right_number
            try:
                passed = check(left, right)
            except TypeError:
                passed = False

        if not passed:
            self.add_error(record, attribute, message, {"compareValue": compare_label})


_EMAIL_PATTERN = (
    r"^[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?\.)+[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?$"
)


@register_validator("email")
class EmailValidator(Validator):
    """Checks that a value looks like an email address."""

    name = "email"
    defaults = {"pattern": _EMAIL_PATTERN, "allow_empty": True}
    default_message = "{attribute} is not a valid email address."

    def configure(self) -> None:
        try:
            self._compiled = re.compile(self.pattern)
        except re.error as e:
            raise ConfigurationError(f"Invalid email pattern '{self.pattern}': {e}") from e

    def validate_attribute(self, record: Record, attribute: str) -> None:
        value = record.get_attribute(attribute)
        if self.allow_empty and is_empty(value):
            return

        if not isinstance(value, str) or not self._compiled.match(value):
            self.add_error(record, attribute)
