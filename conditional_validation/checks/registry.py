"""
Validator Registry

Maps validator names to validator classes and builds validator instances
from ValidationSpecs.

Usage:
    @register_validator("postcode")
    class PostcodeValidator(Validator):
        ...

    validator = create_validator(ValidationSpec.parse(["length", {"max": 10}]))
    validator.validate(record, "postcode")
"""

import importlib
import logging
from typing import Any, Dict, List, Optional, Type, Union

from ..exceptions import ConfigurationError, UnknownValidatorError
from ..models.validation_spec import ValidationSpec
from .base import InlineFunction, InlineValidator, Validator

logger = logging.getLogger(__name__)

_REGISTRY: Dict[str, Type[Validator]] = {}

# Modules whose import registers the built-in validators
_BUILTIN_MODULES = (
    "conditional_validation.checks.value_checks",
    "conditional_validation.checks.type_checks",
    "conditional_validation.engine.conditional",
)
_builtins_loaded = False


def _load_builtins() -> None:
    global _builtins_loaded
    if _builtins_loaded:
        return
    for module in _BUILTIN_MODULES:
        importlib.import_module(module)
    _builtins_loaded = True


def register_validator(
    name: str,
    validator: Optional[Union[Type[Validator], InlineFunction]] = None,
    replace: bool = False,
) -> Any:
    """
    Register a validator class or inline function under ``name``.

    Can be used directly or as a class/function decorator.
    """
    if validator is None:
        def decorator(obj: Any) -> Any:
            register_validator(name, obj, replace=replace)
            return obj
        return decorator

    if name in _REGISTRY and not replace:
        raise ConfigurationError(f"Validator '{name}' is already registered")

    if isinstance(validator, type) and issubclass(validator, Validator):
        cls = validator
    elif callable(validator):
        cls = type(
            f"Inline_{name}",
            (InlineValidator,),
            {"name": name, "func": staticmethod(validator)},
        )
    else:
        raise ConfigurationError(
            f"Validator '{name}' must be a Validator subclass or a callable")

    _REGISTRY[name] = cls
    logger.debug(f"Registered validator '{name}' -> {cls.__name__}")
    return validator


def unregister_validator(name: str) -> None:
    _REGISTRY.pop(name, None)


def get_validator_class(name: str) -> Type[Validator]:
    _load_builtins()
    try:
        return _REGISTRY[name]
    except KeyError:
        raise UnknownValidatorError(name) from None


def available_validators() -> List[str]:
    _load_builtins()
    return sorted(_REGISTRY)


def create_validator(spec: Union[ValidationSpec, Any]) -> Validator:
    """Instantiate the validator described by ``spec`` (or any definition form)."""
    spec = ValidationSpec.parse(spec)
    cls = get_validator_class(spec.name)
    return cls(*spec.params, **dict(spec.options))

