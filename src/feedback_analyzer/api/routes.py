"""
API routes: the analysis endpoint plus operational endpoints.

POST /api/analyze is the only analysis surface. The rest (/health,
/version, /taxonomy) exist for operators and clients that want to render
the closed vocabularies.
"""

import logging
import time
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from jinja2 import TemplateError

from feedback_analyzer import __version__
from feedback_analyzer.analysis.exceptions import AnalysisError, ValidationError
from feedback_analyzer.analysis.service import AnalysisService
from feedback_analyzer.api.dependencies import (
    get_analysis_service,
    get_settings,
    missing_inference_settings,
)
from feedback_analyzer.api.models import HealthResponse, TaxonomyResponse, VersionResponse
from feedback_analyzer.config import Settings
from feedback_analyzer.llm.prompt_builder import PromptBuilder
from feedback_analyzer.models.catalogs import FALLBACK_ISSUE_LABEL, ISSUE_TAXONOMY, PRODUCT_CATALOG
from feedback_analyzer.models.enums import SentimentEnum
from feedback_analyzer.models.output_models import (
    AnalysisErrorResponse,
    AnalysisResult,
    ValidationErrorResponse,
)
from feedback_analyzer.monitoring.metrics import analysis_duration_seconds, analysis_requests_total

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache()
def check_prompt_templates(templates_dir: Optional[str]) -> str:
    """
    Render the prompt templates once per directory.

    Returns "ok" or "error (<ExceptionType>)".
    """
    try:
        PromptBuilder(model="health-check", templates_dir=templates_dir)
    except (OSError, TemplateError) as e:
        return f"error ({type(e).__name__})"
    return "ok"


@router.post(
    "/api/analyze",
    response_model=AnalysisResult,
    status_code=status.HTTP_200_OK,
    summary="Analyze feedback text",
    description="""
    Classify a short text on three axes: sentiment, mentioned products
    (closed catalog) and issue category (closed taxonomy).

    Request body: {"text": "..."}. Text longer than MAX_TEXT_CHARS
    (default 300) is truncated before classification. The three
    classifications run concurrently; if any of them fails the whole
    request fails.
    """,
    responses={
        200: {"description": "Analysis completed"},
        400: {"model": ValidationErrorResponse, "description": "Missing or empty text"},
        500: {"model": AnalysisErrorResponse, "description": "Configuration or inference failure"},
    },
)
async def analyze_text(
    request: Request,
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisResult:
    """
    Analyze one text.

    The body is decoded by hand rather than through a pydantic body model
    so that every unusable body maps to the same 400 response.
    """
    start_time = time.perf_counter()

    try:
        try:
            body = await request.json()
        except ValueError as exc:
            raise ValidationError("Request body is not valid JSON") from exc

        result = await service.analyze(body)

    except ValidationError:
        analysis_requests_total.labels(status="invalid").inc()
        raise
    except AnalysisError:
        analysis_requests_total.labels(status="error").inc()
        raise
    except Exception:
        analysis_requests_total.labels(status="error").inc()
        logger.error("Analysis crashed", exc_info=True)
        raise

    duration = time.perf_counter() - start_time
    analysis_requests_total.labels(status="success").inc()
    analysis_duration_seconds.observe(duration)

    logger.info(
        "Analysis request served",
        extra={
            "duration_ms": int(duration * 1000),
            "sentiment": result.sentiment.label,
            "products_count": len(result.products),
        },
    )
    return result


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="""
    Reports whether the inference collaborator is configured and the
    prompt templates render. Does not call the model.
    """,
    responses={
        200: {"description": "Ready to analyze"},
        503: {"description": "Not configured or templates broken"},
    },
)
async def health_check(
    settings: Settings = Depends(get_settings),
):
    services = {}

    missing = missing_inference_settings(settings)
    services["inference"] = (
        "configured" if not missing else f"not_configured (missing {', '.join(missing)})"
    )

    services["prompts"] = check_prompt_templates(settings.PROMPT_TEMPLATES_DIR)

    healthy = not missing and services["prompts"] == "ok"
    response = HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=__version__,
        services=services,
    )

    log = logger.debug if healthy else logger.warning
    log("Health check", extra={"status": response.status, "services": services})

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )


@router.get(
    "/version",
    response_model=VersionResponse,
    summary="Get model and decoding configuration",
)
async def get_version(
    settings: Settings = Depends(get_settings),
) -> VersionResponse:
    return VersionResponse(
        version=__version__,
        model_name=settings.AI_MODEL,
        decoding={
            "temperature": str(settings.LLM_TEMPERATURE),
            "max_tokens": str(settings.LLM_MAX_TOKENS),
            "cache_ttl": str(settings.GATEWAY_CACHE_TTL),
            "skip_cache": str(settings.GATEWAY_SKIP_CACHE).lower(),
            "llm_timeout": str(settings.LLM_TIMEOUT),
            "request_timeout": str(settings.REQUEST_TIMEOUT),
        },
    )


@router.get(
    "/taxonomy",
    response_model=TaxonomyResponse,
    summary="Get the closed product catalog and issue taxonomy",
)
async def get_taxonomy() -> TaxonomyResponse:
    return TaxonomyResponse(
        products=list(PRODUCT_CATALOG),
        issues=list(ISSUE_TAXONOMY),
        fallback_issue=FALLBACK_ISSUE_LABEL,
        sentiments=[sentiment.label for sentiment in SentimentEnum],
    )
