"""
Prometheus Metrics for Record Validation

Exposes validation metrics in Prometheus format for monitoring and alerting.

Metrics Exposed:
- conditional_validation_total: Total records validated
- conditional_validation_passed: Records without errors
- conditional_validation_failed: Records with at least one error
- conditional_validation_attribute_errors: Errors by attribute
- conditional_validation_duration_seconds: Validation processing time
"""

from typing import Dict, Any, Optional
from collections import defaultdict
import time

from ..models.validation_result import ValidationResult, ValidationStatus


class PrometheusMetrics:
    """
    Collects and formats validation metrics for Prometheus.

    Usage:
        metrics = PrometheusMetrics()
        metrics.record_validation(result)
        print(metrics.export_text())
    """

    def __init__(self):
        """Initialize metrics collectors."""
        # Counters (monotonically increasing)
        self.total_validations = 0
        self.passed_validations = 0
        self.failed_validations = 0

        self.errors_by_attribute: Dict[str, int] = defaultdict(int)

        # Processing time histogram (buckets in seconds)
        self.duration_buckets = [0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0]
        self.duration_counts = defaultdict(int)
        self.duration_sum = 0.0
        self.duration_count = 0

        self.start_time = time.time()

    def record_validation(self, result: ValidationResult) -> None:
        """
        Record a validation result and update metrics.

        Args:
            result: ValidationResult to record
        """
        self.total_validations += 1

        if result.status == ValidationStatus.PASS:
            self.passed_validations += 1
        else:
            self.failed_validations += 1

        for failure in result.errors:
            self.errors_by_attribute[failure.attribute] += 1

        if result.processing_time_ms is not None:
            duration_seconds = result.processing_time_ms / 1000.0
            self.duration_sum += duration_seconds
            self.duration_count += 1

            for bucket in self.duration_buckets:
                if duration_seconds <= bucket:
                    self.duration_counts[bucket] += 1

    def export_text(self) -> str:
        """
        Export metrics in Prometheus text format.

        Returns:
            Metrics formatted as Prometheus text exposition format
        """
        lines = []

        lines.append(
            "# HELP conditional_validation_total Total number of records validated")
        lines.append("# TYPE conditional_validation_total counter")
        lines.append(f"conditional_validation_total {self.total_validations}")
        lines.append("")

        lines.append(
            "# HELP conditional_validation_passed Records that passed validation")
        lines.append("# TYPE conditional_validation_passed counter")
        lines.append(f"conditional_validation_passed {self.passed_validations}")
        lines.append("")

        lines.append(
            "# HELP conditional_validation_failed Records that failed validation")
        lines.append("# TYPE conditional_validation_failed counter")
        lines.append(f"conditional_validation_failed {self.failed_validations}")
        lines.append("")

        lines.append(
            "# HELP conditional_validation_attribute_errors Validation errors by attribute")
        lines.append("# TYPE conditional_validation_attribute_errors counter")
        for attribute, count in sorted(self.errors_by_attribute.items()):
            lines.append(
                f'conditional_validation_attribute_errors{{attribute="{attribute}"}} {count}')
        lines.append("")

        # Histogram buckets are cumulative, so each bucket already counts smaller ones
        lines.append(
            "# HELP conditional_validation_duration_seconds Validation processing time distribution")
        lines.append("# TYPE conditional_validation_duration_seconds histogram")
        for bucket in sorted(self.duration_buckets):
            lines.append(
                f'conditional_validation_duration_seconds_bucket{{le="{bucket}"}} '
                f'{self.duration_counts[bucket]}')
        lines.append(
            f'conditional_validation_duration_seconds_bucket{{le="+Inf"}} {self.duration_count}')
        lines.append(
            f'conditional_validation_duration_seconds_sum {self.duration_sum:.6f}')
        lines.append(
            f'conditional_validation_duration_seconds_count {self.duration_count}')
        lines.append("")

        uptime = time.time() - self.start_time
        lines.append(
            "# HELP conditional_validation_uptime_seconds Time since metrics started")
        lines.append("# TYPE conditional_validation_uptime_seconds counter")
        lines.append(f"conditional_validation_uptime_seconds {uptime:.2f}")
        lines.append("")

        return "\n".join(lines)

    def export_json(self) -> Dict[str, Any]:
        """Export metrics as JSON (for logging/debugging)."""
        total = self.total_validations
        return {
            'total_validations': total,
            'passed_validations': self.passed_validations,
            'failed_validations': self.failed_validations,
            'pass_rate': self.passed_validations / total if total > 0 else 0,
            'fail_rate': self.failed_validations / total if total > 0 else 0,
            'avg_processing_time_seconds': (
                self.duration_sum / self.duration_count if self.duration_count > 0 else 0),
            'errors_by_attribute': dict(self.errors_by_attribute),
            'uptime_seconds': time.time() - self.start_time,
        }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        self.total_validations = 0
        self.passed_validations = 0
        self.failed_validations = 0
        self.errors_by_attribute.clear()
        self.duration_counts.clear()
        self.duration_sum = 0.0
        self.duration_count = 0
        self.start_time = time.time()


# Global metrics instance (singleton pattern)
_global_metrics: Optional[PrometheusMetrics] = None


def get_metrics() -> PrometheusMetrics:
    """Get global metrics instance (singleton)."""
    global _global_metrics
    if _global_metrics is None:
        _global_metrics = PrometheusMetrics()
    return _global_metrics


def reset_metrics() -> None:
    """Reset global metrics instance."""
    global _global_metrics
    if _global_metrics:
        _global_metrics.reset()


def metrics_endpoint() -> str:
    """
    HTTP endpoint handler for Prometheus scraping.

    Returns:
        Metrics in Prometheus text format
    """
    return get_metrics().export_text()
