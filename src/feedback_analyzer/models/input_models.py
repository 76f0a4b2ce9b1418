"""
Input data models for the Feedback Analyzer.
"""

from pydantic import BaseModel, Field, ConfigDict


class AnalysisRequest(BaseModel):
    """
    Validated analysis request.
    
    Only ever built by the input validator, so text is already trimmed,
    non-empty and within the configured length cap.
    """
    
    model_config = ConfigDict(frozen=True, extra="forbid")
    
    text: str = Field(..., min_length=1, description="Trimmed feedback text to classify")
    truncated: bool = Field(
        default=False,
        description="Whether text was cut to the configured length cap"
    )
