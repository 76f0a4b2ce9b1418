"""Monitoring and metrics instrumentation for the Feedback Analyzer.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from feedback_analyzer.monitoring.metrics import (
    analysis_duration_seconds,
    analysis_requests_total,
    classification_calls_total,
    issue_fallback_total,
    llm_latency_seconds,
    product_segments_dropped_total,
    sentiment_distribution_total,
)

__all__ = [
    "analysis_requests_total",
    "analysis_duration_seconds",
    "classification_calls_total",
    "sentiment_distribution_total",
    "product_segments_dropped_total",
    "issue_fallback_total",
    "llm_latency_seconds",
]
