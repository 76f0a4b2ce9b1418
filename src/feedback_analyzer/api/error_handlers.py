"""
FastAPI exception handlers for structured error responses.

Maps analysis exceptions onto the two public error shapes:
- 400 {"error": "Text is required"}
- 500 {"error": "Failed to analyze text", "details": "..."}
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
import structlog

from feedback_analyzer.analysis.assembler import build_error_response
from feedback_analyzer.analysis.exceptions import (
    AnalysisError,
    ConfigurationError,
    InferenceError,
    ValidationError,
)
from feedback_analyzer.models.output_models import AnalysisErrorResponse
from feedback_analyzer.monitoring.metrics import analysis_requests_total

logger = structlog.get_logger(__name__)


def _render(exc: AnalysisError) -> JSONResponse:
    status_code, body = build_error_response(exc)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """
    Handle rejected input.
    
    Maps to 400 Bad Request with the terse user message only.
    """
    logger.warning(
        "Analysis request rejected",
        reason=exc.message,
        details=exc.details,
    )
    return _render(exc)


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    """
    Handle missing inference configuration.
    
    Raised while resolving dependencies, before the route body runs,
    so the request is counted here.
    """
    analysis_requests_total.labels(status="error").inc()
    logger.error(
        "Analysis service misconfigured",
        error=exc.message,
        missing=exc.details.get("missing"),
    )
    return _render(exc)


async def inference_error_handler(request: Request, exc: InferenceError) -> JSONResponse:
    """
    Handle classification failures (backend, timeout, normalization).
    
    Maps to 500 with the diagnostic message in details.
    """
    logger.error(
        "Analysis failed",
        error_kind=exc.error_kind,
        error=exc.message,
        details=exc.details,
    )
    return _render(exc)


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.
    
    Same public shape as inference failures; the traceback only goes to the log.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=AnalysisErrorResponse(
            error=AnalysisError.user_message,
            details=f"Unexpected error: {type(exc).__name__}",
        ).model_dump(),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    ValidationError: validation_error_handler,
    ConfigurationError: configuration_error_handler,
    InferenceError: inference_error_handler,
    AnalysisError: inference_error_handler,
    Exception: generic_error_handler,
}
