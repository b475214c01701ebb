"""
Conditional Validator

Validates an attribute only when other (dependent) attributes are valid:
1. Resolves dependent attribute paths, following one relation hop
2. Probes every dependent validator without leaving errors on the target
3. Either skips the attribute or reports dependency errors on it
4. Runs the primary validation when every dependency passed

Usage:
    validator = ConditionalValidator(
        validation="required",
        dependent_validations={"customer.country": ["required"]},
    )
    validator.validate(order, "shipping_method")
"""

import logging
from typing import Any, List, Mapping, Optional

from ..checks.base import Validator
from ..checks.registry import create_validator, register_validator
from ..exceptions import ConfigurationError
from ..messages import Translator, format_message, placeholders
from ..models.record import Record
from ..models.validation_result import ConditionalOutcome
from ..models.validation_spec import (
    DependencyError,
    DependentValidation,
    ValidationSpec,
    ValidationTarget,
    normalize_dependent_validations,
    parse_specs,
)

logger = logging.getLogger(__name__)


@register_validator("conditional")
class ConditionalValidator(Validator):
    """
    Gates the validation of an attribute on the validity of other attributes.

    Options:
        validation: Primary validation, one definition or a list of them
        dependent_validations: Mapping of "attr, relation.attr" keys to a list
            of validator definitions, or to {"validations": [...], "message": "..."}
        message: Template used when a failing dependent validator gives no message
        skip_on_dependency_error: Leave the attribute untouched on dependency failure
        translator: Callable (message, params) -> str used to render dependency errors

    Placeholders available in dependency error messages: {attribute}, {value},
    {dependentAttribute}, {dependentValue}.
    """

    name = "conditional"
    defaults = {
        "validation": "required",
        "dependent_validations": None,
        "skip_on_dependency_error": False,
        "translator": None,
    }
    default_message = "{dependentAttribute} is invalid."

    def configure(self) -> None:
        self.primary_specs = parse_specs(self.validation)

        if self.dependent_validations is None:
            self.dependent_validations = {}
        if not isinstance(self.dependent_validations, Mapping):
            raise ConfigurationError(
                "Option 'dependent_validations' must be a mapping of attribute keys "
                f"to validator lists, got {type(self.dependent_validations).__name__}")
        self.dependent_validations = dict(self.dependent_validations)

        if self.translator is not None and not callable(self.translator):
            raise ConfigurationError("Option 'translator' must be callable")

    def check_configuration(self) -> List[DependentValidation]:
        """
        Parse every dependent entry and build every validator up front.

        Raises ConfigurationError for the first malformed entry.
        """
        entries = normalize_dependent_validations(self.dependent_validations)
        for spec in self.primary_specs:
            create_validator(spec)
        for entry in entries:
            for spec in entry.specs:
                create_validator(spec)
        return entries

    def validate_attribute(self, record: Record, attribute: str) -> None:
        self.evaluate(record, attribute)

    def evaluate(self, record: Record, attribute: str) -> ConditionalOutcome:
        """Validate ``attribute`` and report which branch was taken."""
        errors = self.validate_dependent_attributes(record)

        if errors:
            if self.skip_on_dependency_error:
                logger.debug(
                    f"Skipping '{attribute}': {len(errors)} dependency error(s)")
                return ConditionalOutcome.SKIPPED

            for error in errors:
                self.apply_dependency_error(error, record, attribute)
            logger.debug(
                f"Applied {len(errors)} dependency error(s) to '{attribute}'")
            return ConditionalOutcome.DEPENDENCY_ERRORS_APPLIED

        for spec in self.primary_specs:
            self.run_validator(record, attribute, spec)
        return ConditionalOutcome.PRIMARY_VALIDATED

    def validate_dependent_attributes(self, record: Record) -> List[DependencyError]:
        """
        Probe every (path, spec) pair of every dependent entry.

        Returns one DependencyError per failing pair, in iteration order.
        """
        errors: List[DependencyError] = []

        for key, value in self.dependent_validations.items():
            entry = DependentValidation.from_config(key, value)

            for path in entry.attributes:
                for spec in entry.specs:
                    target = ValidationTarget.resolve(record, path)
                    if target is None:
                        # Missing relations are checked by their own rules
                        logger.debug(f"Relation for '{path}' is empty, skipping {spec}")
                        continue

                    message = self.run_validator_keep_existing(
                        target.record, target.attribute, spec)
                    if message is None:
                        continue

                    logger.debug(f"Dependent check {spec} failed on '{path}': {message}")
                    errors.append(DependencyError(
                        record=target.record,
                        attribute=target.attribute,
                        message=(entry.message if entry.message is not None
                                 else message or self.message or self.default_message),
                    ))

        return errors

    def apply_dependency_error(
        self, error: DependencyError, record: Record, attribute: str
    ) -> None:
        """Add ``error`` to ``attribute`` of the validated record."""
        params = placeholders(
            attribute=record.get_attribute_label(attribute),
            value=record.get_attribute(attribute),
            dependentAttribute=error.record.get_attribute_label(error.attribute),
            dependentValue=error.record.get_attribute(error.attribute),
        )
        record.add_error(attribute, self.translate(error.message, params))

    def translate(self, message: str, params: Mapping[str, Any]) -> str:
        translator: Translator = self.translator or format_message
        return translator(message, params)

    @staticmethod
    def run_validator_keep_existing(
        record: Record, attribute: str, spec: ValidationSpec
    ) -> Optional[str]:
        """
        Run ``spec`` on ``attribute`` and return its error message, if any.

        The record's error collection is restored to exactly what it was
        before the call, even if the validator raises.
        """
        backup = list(record.get_errors())
        record.clear_errors()
        try:
            ConditionalValidator.run_validator(record, attribute, spec)
            return record.get_error(attribute)
        finally:
            record.clear_errors()
            record.add_errors(backup)

    @staticmethod
    def run_validator(record: Record, attribute: str, spec: ValidationSpec) -> None:
        create_validator(spec).validate(record, attribute)
