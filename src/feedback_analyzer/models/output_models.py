"""
Output data models for the Feedback Analyzer.

These define the JSON contract of POST /api/analyze (success and error
bodies). Everything is frozen: a result never changes after assembly.
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from feedback_analyzer.models.enums import SentimentEnum


class SentimentResult(BaseModel):
    """Sentiment label plus its presentation hint."""
    
    model_config = ConfigDict(frozen=True, extra="forbid")
    
    label: str = Field(..., description="Positive, Negative or Neutral", examples=["Positive"])
    color: str = Field(..., description="Presentation styling hint for the label")
    
    @classmethod
    def from_enum(cls, sentiment: SentimentEnum) -> "SentimentResult":
        return cls(label=sentiment.label, color=sentiment.color)


class AnalysisResult(BaseModel):
    """
    Complete three-axis assessment of one text.
    
    products: segments accepted by the catalog filter, in model order,
    not de-duplicated. issues: exactly one label.
    """
    
    model_config = ConfigDict(frozen=True, extra="forbid")
    
    sentiment: SentimentResult = Field(..., description="Sentiment classification")
    products: list[str] = Field(
        default_factory=list,
        description="Mentioned products (catalog-filtered)",
        examples=[["WAF", "Workers"]]
    )
    issues: list[str] = Field(
        ...,
        min_length=1,
        max_length=1,
        description="Single issue category",
        examples=[["Bug Report"]]
    )


class ValidationErrorResponse(BaseModel):
    """400 body: the request itself was unusable."""
    
    error: str = Field(..., examples=["Text is required"])


class AnalysisErrorResponse(BaseModel):
    """500 body: configuration or inference failure."""
    
    error: str = Field(..., examples=["Failed to analyze text"])
    details: Optional[str] = Field(
        default=None,
        description="Underlying cause for operators (never a stack trace)"
    )
