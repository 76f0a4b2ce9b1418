"""Custom Prometheus metrics for the Feedback Analyzer.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules worth configuring:
- analysis_requests_total{status="error"} (backend or config outage)
- issue_fallback_total (model drifting off the taxonomy)
- product_segments_dropped_total (model inventing product names)
"""

from prometheus_client import Counter, Histogram

# === Request Metrics ===

analysis_requests_total = Counter(
    "analysis_requests_total",
    "Total analysis requests by outcome",
    ["status"],
)
"""
Analysis requests counter.

Labels:
- status: success, invalid (400), error (500)
"""

analysis_duration_seconds = Histogram(
    "analysis_duration_seconds",
    "End-to-end analysis duration in seconds (successful requests)",
    buckets=[0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)

# === Classification Metrics ===

classification_calls_total = Counter(
    "classification_calls_total",
    "Classification calls by axis and outcome",
    ["axis", "success"],
)
"""
Labels:
- axis: sentiment, products, issues
- success: true, false
"""

sentiment_distribution_total = Counter(
    "sentiment_distribution_total",
    "Normalized sentiment labels",
    ["label"],
)

product_segments_dropped_total = Counter(
    "product_segments_dropped_total",
    "Product segments returned by the model that matched no catalog entry",
)
"""
A rising rate means the model is naming products outside the catalog.
"""

issue_fallback_total = Counter(
    "issue_fallback_total",
    "Issue answers outside the taxonomy replaced by the fallback label",
)

# === LLM Performance Metrics ===

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "LLM completion latency in seconds",
    ["model", "success"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
)
"""
Labels:
- model: Model identifier (e.g., @cf/meta/llama-3.1-70b-instruct)
- success: true (completion returned), false (any LLMClientError)

Gateway cache hits land in the lowest buckets.
"""
