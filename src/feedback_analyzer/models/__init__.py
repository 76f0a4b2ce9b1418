"""
Pydantic data models for the Feedback Analyzer.

Includes:
- Enums (SentimentEnum, ClassificationAxis)
- Closed catalogs (PRODUCT_CATALOG, ISSUE_TAXONOMY, FALLBACK_ISSUE_LABEL)
- Input model (AnalysisRequest)
- Output models (SentimentResult, AnalysisResult, error bodies)
- LLM models (ChatMessage, GatewayOptions, LLMCompletionRequest, LLMCompletionResponse)
"""

from feedback_analyzer.models.enums import SentimentEnum, ClassificationAxis
from feedback_analyzer.models.catalogs import (
    PRODUCT_CATALOG,
    ISSUE_TAXONOMY,
    FALLBACK_ISSUE_LABEL,
    NO_PRODUCTS_ANSWER,
)
from feedback_analyzer.models.input_models import AnalysisRequest
from feedback_analyzer.models.output_models import (
    SentimentResult,
    AnalysisResult,
    ValidationErrorResponse,
    AnalysisErrorResponse,
)
from feedback_analyzer.models.llm_models import (
    ChatMessage,
    GatewayOptions,
    LLMCompletionRequest,
    LLMCompletionResponse,
)

__all__ = [
    # Enums
    "SentimentEnum",
    "ClassificationAxis",
    # Catalogs
    "PRODUCT_CATALOG",
    "ISSUE_TAXONOMY",
    "FALLBACK_ISSUE_LABEL",
    "NO_PRODUCTS_ANSWER",
    # Input model
    "AnalysisRequest",
    # Output models
    "SentimentResult",
    "AnalysisResult",
    "ValidationErrorResponse",
    "AnalysisErrorResponse",
    # LLM models
    "ChatMessage",
    "GatewayOptions",
    "LLMCompletionRequest",
    "LLMCompletionResponse",
]
