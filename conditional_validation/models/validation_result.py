"""
Validation Result Data Models

Summarises the outcome of a validation pass over one record.

Design Philosophy:
- Immutable where possible (use dataclasses with frozen=True)
- Type-safe (use enums for status, proper typing)
- Serializable (can be converted to JSON for API responses)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple
import json


class ValidationStatus(Enum):
    """
    Outcome of a validation pass.

    PASS: The record has no errors
    FAIL: At least one attribute has an error
    """
    PASS = "PASS"
    FAIL = "FAIL"


class ConditionalOutcome(Enum):
    """What a conditional validator did for one attribute."""
    PRIMARY_VALIDATED = "primary_validated"
    DEPENDENCY_ERRORS_APPLIED = "dependency_errors_applied"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ValidationFailure:
    """
    A single error found on a record.

    Attributes:
        attribute: Attribute the error is attached to
        message: Human-readable error description
    """
    attribute: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"attribute": self.attribute, "message": self.message}

    def __str__(self) -> str:
        return f"{self.attribute}: {self.message}"


@dataclass
class ValidationResult:
    """
    Result of validating one record.

    Attributes:
        status: PASS when no errors were found
        errors: All errors on the record after the pass, in order
        validation_timestamp: When validation was performed
        processing_time_ms: How long validation took
        metadata: Additional context (rules version, scenario, ...)
    """
    status: ValidationStatus
    errors: List[ValidationFailure] = field(default_factory=list)
    validation_timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    processing_time_ms: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_errors(cls, errors: Iterable[Tuple[str, str]], **kwargs: Any) -> "ValidationResult":
        """Build a result from a record's (attribute, message) error list."""
        failures = [ValidationFailure(attribute, message) for attribute, message in errors]
        status = ValidationStatus.FAIL if failures else ValidationStatus.PASS
        return cls(status=status, errors=failures, **kwargs)

    @property
    def passed(self) -> bool:
        return self.status == ValidationStatus.PASS

    @property
    def failed_attributes(self) -> List[str]:
        """Attributes with at least one error, in first-seen order."""
        seen: List[str] = []
        for failure in self.errors:
            if failure.attribute not in seen:
                seen.append(failure.attribute)
        return seen

    @property
    def error_messages(self) -> List[str]:
        return [f.message for f in self.errors]

    def errors_by_attribute(self) -> Dict[str, List[str]]:
        grouped: Dict[str, List[str]] = {}
        for failure in self.errors:
            grouped.setdefault(failure.attribute, []).append(failure.message)
        return grouped

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            'status': self.status.value,
            'errors': [f.to_dict() for f in self.errors],
            'validation_ts': self.validation_timestamp.isoformat(),
            'processing_time_ms': self.processing_time_ms,
            'metadata': self.metadata,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, default=str)

    def __str__(self) -> str:
        """Human-readable summary."""
        summary = f"ValidationResult(status={self.status.value})"
        if self.errors:
            summary += f"\n  Errors ({len(self.errors)}):"
            for failure in self.errors:
                summary += f"\n    - {failure}"
        return summary
