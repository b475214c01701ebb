"""
Record Validation Module

Main entry point for validating whole records.

This module orchestrates:
1. Loading validation rules
2. Running every applicable validator over its attributes
3. Summarising the record's errors
4. Exposing metrics

Usage:
    from conditional_validation import RecordValidator, DictRecord

    validator = RecordValidator(rules_path="rules/orders.yaml")
    result = validator.validate(DictRecord.from_dict(data))
    if result.passed:
        # Save the record
        pass
"""

import logging
import time
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from .engine import RuleSet, build_rules, load_rules
from .metrics import get_metrics
from .models import Record, ValidationResult

logger = logging.getLogger(__name__)


class RecordValidator:
    """
    High-level API for validating records against a rule set.

    Configuration errors raised by validators are not caught: a broken rule
    aborts the pass instead of being reported as a record error.
    """

    def __init__(
        self,
        rules_path: Optional[Union[str, Path]] = None,
        rules: Optional[Union[RuleSet, Mapping[str, Any], List[Any]]] = None,
        enable_metrics: bool = True,
    ):
        """
        Initialize record validator.

        Args:
            rules_path: Path to a YAML rules file
            rules: RuleSet or rule data (alternative to a file)
            enable_metrics: Whether to collect metrics
        """
        if isinstance(rules, RuleSet):
            self.rules = rules
        elif rules is not None:
            self.rules = build_rules(rules)
        else:
            self.rules = load_rules(rules_path)

        self.enable_metrics = enable_metrics
        self.metrics = get_metrics() if enable_metrics else None

    def validate(
        self,
        record: Record,
        attributes: Optional[Iterable[str]] = None,
        scenario: Optional[str] = None,
        clear_errors: bool = True,
    ) -> ValidationResult:
        """
        Run every rule that applies to ``scenario`` over ``record``.

        Args:
            record: Record to validate; errors are added to it
            attributes: Only validate these attributes (all when None)
            scenario: Active scenario for ``on``/``except`` filtering
            clear_errors: Clear the record's errors before validating

        Returns:
            ValidationResult built from the record's errors
        """
        start_time = time.time()
        only = set(attributes) if attributes is not None else None

        if clear_errors:
            record.clear_errors()

        for rule in self.rules:
            if not rule.applies_to(scenario):
                continue
            for attribute in rule.attributes:
                if only is not None and attribute not in only:
                    continue
                rule.validator.validate(record, attribute)

        result = ValidationResult.from_errors(
            record.get_errors(),
            processing_time_ms=(time.time() - start_time) * 1000,
            metadata={"rules_version": self.rules.version, "scenario": scenario},
        )

        logger.info(
            f"Validated record: status={result.status.value}, errors={len(result.errors)}")

        if self.enable_metrics and self.metrics:
            self.metrics.record_validation(result)

        return result

    def validate_batch(
        self, records: Iterable[Record], scenario: Optional[str] = None
    ) -> List[ValidationResult]:
        """Validate several independent records."""
        return [self.validate(record, scenario=scenario) for record in records]
