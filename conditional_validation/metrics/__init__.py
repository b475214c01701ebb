"""
Metrics Package

Handles observability and monitoring.
"""

from .prometheus import (
    PrometheusMetrics,
    get_metrics,
    reset_metrics,
    metrics_endpoint
)

__all__ = [
    'PrometheusMetrics',
    'get_metrics',
    'reset_metrics',
    'metrics_endpoint'
]
