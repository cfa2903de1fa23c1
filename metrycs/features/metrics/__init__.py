"""Mock metrics synthesis feature module."""

from metrycs.features.metrics.router import router
from metrycs.features.metrics.schemas import EventMetrics, MetricCategory, MetricsUpdate
from metrycs.features.metrics.service import (
    MetricsSynthesizer,
    apply_metrics_update,
    generate_complete_metrics,
    generate_metrics_update,
)

__all__ = [
    "router",
    "EventMetrics",
    "MetricCategory",
    "MetricsUpdate",
    "MetricsSynthesizer",
    "apply_metrics_update",
    "generate_complete_metrics",
    "generate_metrics_update",
]
