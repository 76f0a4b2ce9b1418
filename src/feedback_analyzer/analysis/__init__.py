"""
Analysis pipeline.

Components:
- validator: rejects unusable input before any inference call
- dispatcher: three concurrent classification calls (fan-out/fan-in)
- normalizer: maps raw completions into closed output domains
- assembler: builds the AnalysisResult or the error response
- service: AnalysisService wiring the four together
- exceptions: ValidationError, ConfigurationError, InferenceError, NormalizationError
"""

from feedback_analyzer.analysis.assembler import assemble_result, build_error_response
from feedback_analyzer.analysis.dispatcher import ClassificationDispatcher
from feedback_analyzer.analysis.exceptions import (
    AnalysisError,
    ConfigurationError,
    InferenceError,
    NormalizationError,
    ValidationError,
)
from feedback_analyzer.analysis.normalizer import (
    normalize_issues,
    normalize_products,
    normalize_sentiment,
)
from feedback_analyzer.analysis.service import AnalysisService
from feedback_analyzer.analysis.validator import validate_analysis_request

__all__ = [
    "AnalysisService",
    "ClassificationDispatcher",
    "validate_analysis_request",
    "normalize_sentiment",
    "normalize_products",
    "normalize_issues",
    "assemble_result",
    "build_error_response",
    "AnalysisError",
    "ValidationError",
    "ConfigurationError",
    "InferenceError",
    "NormalizationError",
]
