"""
Metrics Collection
Prometheus metrics for pipeline runs, stages and the export cache
"""

import time
from typing import Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the pipeline.

    Pass a private CollectorRegistry to get an isolated set of metrics
    (tests do this); the global instance uses the default registry.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry if registry is not None else REGISTRY

        # Pipeline metrics
        self.pipeline_runs_total = Counter(
            "uismith_pipeline_runs_total",
            "Total number of pipeline runs",
            ["status"],
            registry=self.registry,
        )
        self.pipeline_duration = Histogram(
            "uismith_pipeline_duration_seconds",
            "Pipeline run duration in seconds",
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
            registry=self.registry,
        )

        # Stage metrics
        self.stage_duration = Histogram(
            "uismith_stage_duration_seconds",
            "Stage duration in seconds",
            ["stage"],
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
            registry=self.registry,
        )
        self.stage_failures_total = Counter(
            "uismith_stage_failures_total",
            "Total number of stage errors",
            ["stage", "code"],
            registry=self.registry,
        )

        # Cache metrics
        self.cache_hits = Counter(
            "uismith_cache_hits_total",
            "Total number of cache hits",
            ["cache_type"],
            registry=self.registry,
        )
        self.cache_misses = Counter(
            "uismith_cache_misses_total",
            "Total number of cache misses",
            ["cache_type"],
            registry=self.registry,
        )

        # System metrics
        self.uptime = Gauge(
            "uismith_uptime_seconds",
            "Process uptime in seconds",
            registry=self.registry,
        )
        self.start_time = time.time()

    def record_pipeline_run(self, status: str, duration: float) -> None:
        """Record a finished pipeline run."""
        self.pipeline_runs_total.labels(status=status).inc()
        self.pipeline_duration.observe(duration)

    def record_stage(self, stage: str, duration: float) -> None:
        """Record a stage duration."""
        self.stage_duration.labels(stage=stage).observe(duration)

    def record_stage_failure(self, stage: str, code: str) -> None:
        self.stage_failures_total.labels(stage=stage, code=code).inc()

    def record_cache_hit(self, cache_type: str) -> None:
        """Record a cache hit."""
        self.cache_hits.labels(cache_type=cache_type).inc()

    def record_cache_miss(self, cache_type: str) -> None:
        """Record a cache miss."""
        self.cache_misses.labels(cache_type=cache_type).inc()

    def update_uptime(self) -> None:
        self.uptime.set(time.time() - self.start_time)

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus text format."""
        self.update_uptime()
        return generate_latest(self.registry)


# Global metrics collector instance
metrics_collector = MetricsCollector()
