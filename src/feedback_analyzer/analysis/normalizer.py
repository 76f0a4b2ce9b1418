"""
Normalization of raw classifier completions.

One pure function per axis maps a completion string into its closed output
domain. No I/O beyond logging and counters.

Rules:
- Sentiment: exact word match (case-insensitive), otherwise NormalizationError
- Products: "none" -> []; else comma segments containing a catalog name
- Issues: exact taxonomy label, otherwise the fallback label
"""

from typing import Sequence

import structlog

from feedback_analyzer.analysis.exceptions import NormalizationError
from feedback_analyzer.models.catalogs import (
    FALLBACK_ISSUE_LABEL,
    ISSUE_TAXONOMY,
    NO_PRODUCTS_ANSWER,
    PRODUCT_CATALOG,
)
from feedback_analyzer.models.enums import ClassificationAxis, SentimentEnum
from feedback_analyzer.monitoring.metrics import (
    issue_fallback_total,
    product_segments_dropped_total,
    sentiment_distribution_total,
)

logger = structlog.get_logger(__name__)

_SENTIMENT_BY_WORD = {sentiment.value: sentiment for sentiment in SentimentEnum}


def normalize_sentiment(completion: str) -> SentimentEnum:
    """
    Map a sentiment completion onto SentimentEnum.

    Raises:
        NormalizationError: completion is not exactly positive/negative/neutral
    """
    sentiment = _SENTIMENT_BY_WORD.get(completion.strip().lower())
    if sentiment is None:
        raise NormalizationError(
            "Sentiment completion is not one of positive, negative, neutral",
            axis=ClassificationAxis.SENTIMENT,
            raw_completion=completion,
        )
    sentiment_distribution_total.labels(label=sentiment.label).inc()
    return sentiment


def normalize_products(
    completion: str, catalog: Sequence[str] = PRODUCT_CATALOG
) -> list[str]:
    """
    Keep the comma-separated segments that mention a catalog product.

    A segment survives when it contains (case-insensitive substring) at least
    one catalog name, so "Cloudflare Workers" passes on "Workers". Surviving
    segments keep the model's order and are not de-duplicated.
    """
    completion = completion.strip()
    if completion.lower() == NO_PRODUCTS_ANSWER:
        return []

    lowered_catalog = [name.lower() for name in catalog]
    products: list[str] = []
    dropped: list[str] = []

    for segment in (part.strip() for part in completion.split(",")):
        lowered = segment.lower()
        if segment and any(name in lowered for name in lowered_catalog):
            products.append(segment)
        elif segment:
            dropped.append(segment)

    if dropped:
        product_segments_dropped_total.inc(len(dropped))
        logger.info("Dropped product segments outside catalog", dropped=dropped)

    return products


def normalize_issues(
    completion: str, taxonomy: Sequence[str] = ISSUE_TAXONOMY
) -> list[str]:
    """
    Single-element issue list: the label if it is in the taxonomy
    (exact, case-sensitive), otherwise FALLBACK_ISSUE_LABEL.
    """
    issue = completion.strip()
    if issue in taxonomy:
        return [issue]

    issue_fallback_total.inc()
    logger.info("Issue completion outside taxonomy, using fallback", completion=issue[:100])
    return [FALLBACK_ISSUE_LABEL]
