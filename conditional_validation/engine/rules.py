"""
Rule Set Loading

Builds validators from rule definitions, either given as Python data or
loaded from a YAML file:

    version: "1.0"
    rules:
      - attributes: shipping_method
        validator: conditional
        validation: required
        dependent_validations:
          customer.country: [required]
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Union

import yaml

from ..checks.base import Validator
from ..checks.registry import create_validator
from ..exceptions import ConfigurationError
from ..models.validation_spec import ValidationSpec, split_attribute_key

logger = logging.getLogger(__name__)

RULES_PATH_ENV = "CONDITIONAL_VALIDATION_RULES"


@dataclass(frozen=True)
class ValidatorRule:
    """A validator bound to the attributes it checks."""
    attributes: Tuple[str, ...]
    validator: Validator

    def applies_to(self, scenario: Optional[str]) -> bool:
        return self.validator.applies_to(scenario)


@dataclass(frozen=True)
class RuleSet:
    """All rules of a model, with the version they were loaded from."""
    rules: Tuple[ValidatorRule, ...]
    version: str = "unknown"

    def __iter__(self):
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def attribute_names(self) -> List[str]:
        """Attributes mentioned by any rule, in first-seen order."""
        names: List[str] = []
        for rule in self.rules:
            for attribute in rule.attributes:
                if attribute not in names:
                    names.append(attribute)
        return names


def _parse_attributes(value: Any, index: int) -> Tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        value = ",".join(str(v) for v in value)
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"Rule #{index} is missing 'attributes'")

    attributes = split_attribute_key(value)
    for attribute in attributes:
        if "." in attribute:
            raise ConfigurationError(
                f"Rule #{index}: attribute '{attribute}' must belong to the validated record")
    return attributes


def build_rule(definition: Mapping[str, Any], index: int = 0) -> ValidatorRule:
    """Build one rule from ``{"attributes": ..., "validator": ..., **options}``."""
    if not isinstance(definition, Mapping):
        raise ConfigurationError(f"Rule #{index} must be a mapping, got {definition!r}")

    options = dict(definition)
    attributes = _parse_attributes(options.pop("attributes", None), index)
    if not isinstance(options.get("validator"), str):
        raise ConfigurationError(f"Rule #{index} is missing 'validator'")

    validator = create_validator(ValidationSpec.parse(options))
    check = getattr(validator, "check_configuration", None)
    if check is not None:
        check()

    return ValidatorRule(attributes=attributes, validator=validator)


def build_rules(data: Union[Mapping[str, Any], List[Any], None]) -> RuleSet:
    """
    Build a RuleSet from parsed rule data.

    Args:
        data: Either a mapping with a ``rules`` list (and optional ``version``)
            or the list of rules itself
    """
    version = "unknown"
    if isinstance(data, Mapping):
        version = str(data.get("version", version))
        definitions = data.get("rules")
    else:
        definitions = data

    if not isinstance(definitions, list):
        raise ConfigurationError("Rule data must contain a 'rules' list")

    rules = tuple(build_rule(definition, index) for index, definition in enumerate(definitions))
    logger.debug(f"Built {len(rules)} rule(s), version {version}")
    return RuleSet(rules=rules, version=version)


def load_rules(rules_path: Union[str, Path, None] = None) -> RuleSet:
    """
    Load validation rules from a YAML file.

    Falls back to the path in the CONDITIONAL_VALIDATION_RULES environment
    variable when ``rules_path`` is not given.
    """
    if rules_path is None:
        rules_path = os.getenv(RULES_PATH_ENV)
    if not rules_path:
        raise ConfigurationError(
            f"No rules file given and {RULES_PATH_ENV} is not set")

    path = Path(rules_path)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found: {rules_path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in rules file {rules_path}: {e}") from e

    rule_set = build_rules(data)
    logger.info(f"Loaded {len(rule_set)} rule(s) from {path}")
    return rule_set


def default_rules_path() -> Path:
    """Path of the example rules shipped with the package."""
    return Path(__file__).parent.parent / "rules" / "orders.yaml"
