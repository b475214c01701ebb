"""
Validator Base Class

Every validator is built from a ValidationSpec: positional parameters are
mapped onto the class's ``positional`` option names, keyword options are
checked against the options the class declares.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Tuple

from ..exceptions import ConfigurationError
from ..messages import format_message, placeholders
from ..models.record import Record


def is_empty(value: Any, trim: bool = False) -> bool:
    """Check if a value counts as empty (None, "", [] or {})."""
    if value is None:
        return True
    if isinstance(value, str):
        return (value.strip() if trim else value) == ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def parse_scenarios(value: Any) -> Tuple[str, ...]:
    """Accept "create, update" or ["create", "update"]."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    return tuple(s.strip() for s in value if s and s.strip())


class Validator(ABC):
    """
    Base class for validators.

    Common options:
        message: Replaces the validator's default message
        skip_on_error: Skip the attribute when it already has errors
        on: Scenarios the validator applies to (all when empty)
        except: Scenarios the validator does not apply to
    """

    name: ClassVar[str] = ""
    positional: ClassVar[Tuple[str, ...]] = ()
    defaults: ClassVar[Dict[str, Any]] = {}
    default_message: ClassVar[str] = "{attribute} is invalid."

    common_defaults: ClassVar[Dict[str, Any]] = {
        "message": None,
        "skip_on_error": False,
        "on": None,
        "except": None,
    }

    def __init__(self, *params: Any, **options: Any):
        if len(params) > len(self.positional):
            raise ConfigurationError(
                f"Validator '{self.name}' takes at most {len(self.positional)} "
                f"positional parameters, got {len(params)}")

        for option, value in zip(self.positional, params):
            if option in options:
                raise ConfigurationError(
                    f"Validator '{self.name}' got multiple values for '{option}'")
            options[option] = value

        allowed = {**self.common_defaults, **self.defaults}
        unknown = sorted(set(options) - set(allowed))
        if unknown:
            raise ConfigurationError(
                f"Unknown option(s) for validator '{self.name}': {', '.join(unknown)}")

        config = {**allowed, **options}
        self.on = parse_scenarios(config.pop("on"))
        self.except_on = parse_scenarios(config.pop("except"))
        for option, value in config.items():
            setattr(self, option, value)

        self.configure()

    def configure(self) -> None:
        """Hook for subclasses to check and prepare their options."""

    def applies_to(self, scenario: Optional[str]) -> bool:
        """Check whether the validator is active for ``scenario``."""
        if scenario in self.except_on:
            return False
        return not self.on or scenario in self.on

    def validate(self, record: Record, attribute: str) -> None:
        """Validate one attribute, adding errors to the record on failure."""
        if self.skip_on_error and record.has_errors(attribute):
            return
        self.validate_attribute(record, attribute)

    @abstractmethod
    def validate_attribute(self, record: Record, attribute: str) -> None:
        pass

    def add_error(
        self,
        record: Record,
        attribute: str,
        message: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Add a templated error to ``record``.

        ``{attribute}`` and ``{value}`` are always available; ``params`` adds
        validator-specific placeholders (given without braces).
        """
        template = self.message or message or self.default_message
        values = placeholders(
            attribute=record.get_attribute_label(attribute),
            value=record.get_attribute(attribute),
        )
        values.update(placeholders(**(params or {})))
        record.add_error(attribute, format_message(template, values))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


InlineFunction = Callable[[Record, str, Dict[str, Any]], None]


class InlineValidator(Validator):
    """
    Wraps a plain function ``func(record, attribute, params)``.

    The function adds errors to the record itself. Any options not known to
    the base class are passed through in ``params``.
    """

    name = "inline"
    func: ClassVar[Optional[InlineFunction]] = None

    def __init__(self, *params: Any, **options: Any):
        if params:
            raise ConfigurationError(
                f"Inline validator '{self.name}' only accepts keyword options")
        self.params = {k: v for k, v in options.items() if k not in self.common_defaults}
        common = {k: v for k, v in options.items() if k in self.common_defaults}
        super().__init__(**common)

    def validate_attribute(self, record: Record, attribute: str) -> None:
        type(self).func(record, attribute, dict(self.params))
