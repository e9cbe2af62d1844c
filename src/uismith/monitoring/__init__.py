"""
Pipeline Monitoring
Prometheus metrics and structured tracing for pipeline runs
"""

from .metrics import MetricsCollector, metrics_collector
from .tracer import Span, trace_operation

__all__ = [
    "MetricsCollector",
    "metrics_collector",
    "Span",
    "trace_operation",
]
