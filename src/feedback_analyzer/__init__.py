"""
Feedback Analyzer.

Turns a short span of customer feedback into a structured assessment:
- Sentiment polarity (Positive / Negative / Neutral)
- Mentioned products (closed product catalog)
- Issue category (closed issue taxonomy)

Architecture: FastAPI endpoint + three concurrent Workers AI classifications
routed through Cloudflare AI Gateway + pure response normalization
"""

__version__ = "0.1.0"
