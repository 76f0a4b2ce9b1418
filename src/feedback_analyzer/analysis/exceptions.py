"""
Analysis-specific exceptions.

Every failure inside the analysis pipeline is an AnalysisError. Each kind
knows which side of the HTTP boundary is at fault (status_code) and the
terse, user-facing message the boundary may show; the constructor message
is the operator-facing diagnostic.
"""

from typing import Any, Optional

from feedback_analyzer.models.enums import ClassificationAxis


class AnalysisError(Exception):
    """
    Base exception for all analysis failures.
    """
    
    error_kind = "analysis_error"
    status_code = 500
    user_message = "Failed to analyze text"
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize analysis error.
        
        Args:
            message: Diagnostic description (safe for logs and the details field)
            details: Structured error data for logging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(AnalysisError):
    """
    Inbound request is unusable (no JSON object, missing or empty text).
    
    Client error: fixed by correcting the request. No inference call has been made.
    """
    
    error_kind = "validation_error"
    status_code = 400
    user_message = "Text is required"


class ConfigurationError(AnalysisError):
    """
    A required collaborator (inference credentials, gateway id) is not configured.
    """
    
    error_kind = "configuration_error"
    
    def __init__(self, message: str, missing: list[str] | None = None):
        details = {"missing": missing} if missing else {}
        super().__init__(message, details)


class InferenceError(AnalysisError):
    """
    A classification call failed: backend error, timeout, empty or
    unusable completion. Any one failure aborts the whole request.
    """
    
    error_kind = "inference_error"
    
    def __init__(
        self,
        message: str,
        axis: Optional[ClassificationAxis] = None,
        details: dict[str, Any] | None = None
    ):
        details = dict(details or {})
        if axis is not None:
            details["axis"] = axis.value
        super().__init__(message, details)
        self.axis = axis


class NormalizationError(InferenceError):
    """
    A completion could not be mapped into its closed output domain
    (e.g. a sentiment answer that is not positive/negative/neutral).
    """
    
    error_kind = "normalization_error"
    
    def __init__(self, message: str, axis: ClassificationAxis, raw_completion: str):
        super().__init__(
            message,
            axis=axis,
            # First 200 chars only, completions are short by construction
            details={"raw_completion": raw_completion[:200]},
        )
