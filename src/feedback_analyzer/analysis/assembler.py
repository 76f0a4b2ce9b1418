"""
Result assembly and error mapping.

The success path merges three normalized values into one AnalysisResult.
The failure path turns an AnalysisError into an HTTP status plus the
public error body.
"""

from feedback_analyzer.analysis.exceptions import AnalysisError, ValidationError
from feedback_analyzer.models.enums import SentimentEnum
from feedback_analyzer.models.output_models import (
    AnalysisErrorResponse,
    AnalysisResult,
    SentimentResult,
    ValidationErrorResponse,
)


def assemble_result(
    sentiment: SentimentEnum,
    products: list[str],
    issues: list[str],
) -> AnalysisResult:
    """Combine the normalized axes. No cross-axis rules apply."""
    return AnalysisResult(
        sentiment=SentimentResult.from_enum(sentiment),
        products=list(products),
        issues=list(issues),
    )


def build_error_response(
    exc: AnalysisError,
) -> tuple[int, ValidationErrorResponse | AnalysisErrorResponse]:
    """
    Map an analysis failure onto (status_code, body).
    
    Validation failures only get the terse user message. Server-side
    failures also carry the diagnostic message in details.
    """
    if isinstance(exc, ValidationError):
        return exc.status_code, ValidationErrorResponse(error=exc.user_message)
    return exc.status_code, AnalysisErrorResponse(error=exc.user_message, details=exc.message)
