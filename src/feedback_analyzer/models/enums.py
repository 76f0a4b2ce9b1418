"""
Enumerations for Feedback Analyzer data models.

All enums are closed sets - no values outside these sets are permitted.
"""

from enum import Enum


class SentimentEnum(str, Enum):
    """
    Feedback sentiment polarity.
    
    Single-label: exactly one value per analyzed text. Values are the
    lower-case words the sentiment prompt asks the model to answer with.
    """
    
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    
    @property
    def label(self) -> str:
        """Display label ("Positive", "Negative", "Neutral")."""
        return self.value.capitalize()
    
    @property
    def color(self) -> str:
        """Presentation hint (utility classes) for rendering a badge."""
        return _SENTIMENT_COLORS[self]


_SENTIMENT_COLORS = {
    SentimentEnum.POSITIVE: "bg-green-500/10 text-green-500 hover:bg-green-500/20",
    SentimentEnum.NEGATIVE: "bg-red-500/10 text-red-500 hover:bg-red-500/20",
    SentimentEnum.NEUTRAL: "bg-blue-500/10 text-blue-500 hover:bg-blue-500/20",
}


class ClassificationAxis(str, Enum):
    """
    The three independent classifications run for every request.
    
    Each axis has its own system prompt and its own normalizer.
    """
    
    SENTIMENT = "sentiment"
    PRODUCTS = "products"
    ISSUES = "issues"
