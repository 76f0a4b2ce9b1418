"""
Input validation for analysis requests.

Rejects bodies that cannot be analyzed before anything else happens, so
an invalid request never costs an inference call.
"""

from typing import Any

import structlog

from feedback_analyzer.analysis.exceptions import ValidationError
from feedback_analyzer.models.input_models import AnalysisRequest

logger = structlog.get_logger(__name__)


def validate_analysis_request(body: Any, max_chars: int | None = None) -> AnalysisRequest:
    """
    Extract and validate the text to analyze.
    
    Args:
        body: Decoded JSON request body
        max_chars: Length cap applied after trimming (None = no cap)
    
    Returns:
        AnalysisRequest with trimmed (and possibly truncated) text
    
    Raises:
        ValidationError: body is not an object, or text is missing,
            not a string, or blank
    """
    if not isinstance(body, dict):
        raise ValidationError(
            "Request body must be a JSON object",
            details={"body_type": type(body).__name__},
        )
    
    if "text" not in body:
        raise ValidationError("Field 'text' is missing")
    
    text = body["text"]
    if not isinstance(text, str):
        raise ValidationError(
            "Field 'text' must be a string",
            details={"text_type": type(text).__name__},
        )
    
    text = text.strip()
    if not text:
        raise ValidationError("Field 'text' is empty")
    
    truncated = False
    if max_chars is not None and len(text) > max_chars:
        logger.info("Truncating input text", original_length=len(text), max_chars=max_chars)
        text = text[:max_chars].rstrip()
        truncated = True
    
    return AnalysisRequest(text=text, truncated=truncated)
