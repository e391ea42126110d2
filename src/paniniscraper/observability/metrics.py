"""
Defines Prometheus metrics for the extraction pipeline.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from prometheus_client import REGISTRY as _PROM_REGISTRY
from prometheus_client import Counter as _OrigCounter
from prometheus_client import Histogram as _OrigHistogram
from prometheus_client import generate_latest


def _reusing(metric_cls):
    """Wrap ``metric_cls`` so re-importing this module returns the registered collector."""

    def build(name: str, documentation: str, *args, **kwargs):
        collector = _PROM_REGISTRY._names_to_collectors.get(name)
        if collector is None:
            collector = metric_cls(name, documentation, *args, **kwargs)
        return collector

    return build


Counter = _reusing(_OrigCounter)
Histogram = _reusing(_OrigHistogram)


def _create_metrics() -> Dict[str, Any]:
    return {
        "extractions_total": Counter(
            "paniniscraper_extractions_total",
            "Single-URL extractions by outcome",
            ["outcome"],
        ),
        "fetch_seconds": Histogram(
            "paniniscraper_fetch_seconds",
            "Time spent fetching product pages",
        ),
        "batch_items_total": Counter(
            "paniniscraper_batch_items_total",
            "Batch items processed by status",
            ["status"],
        ),
    }


METRICS: Dict[str, Any] = _create_metrics()


def increment(name: str, value: float = 1.0, labels: Optional[Dict[str, Any]] = None) -> None:
    """Increment a counter metric."""
    if name in METRICS:
        metric = METRICS[name]
        if labels is not None:
            metric.labels(**labels).inc(value)
        else:
            metric.inc(value)


def observe(name: str, value: float, labels: Optional[Dict[str, Any]] = None) -> None:
    """Observe a histogram metric."""
    if name in METRICS:
        metric = METRICS[name]
        if labels is not None:
            metric.labels(**labels).observe(value)
        else:
            metric.observe(value)


def export_prometheus() -> bytes:
    """Export metrics in Prometheus text format."""
    return generate_latest()
