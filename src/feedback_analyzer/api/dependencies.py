"""
FastAPI dependency injection for the Feedback Analyzer.

Provides singleton instances of expensive resources (LLM client, prompt
builder) and factories for the per-request pipeline objects.
"""

from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from feedback_analyzer.analysis.dispatcher import ClassificationDispatcher
from feedback_analyzer.analysis.exceptions import ConfigurationError
from feedback_analyzer.analysis.service import AnalysisService
from feedback_analyzer.config import Settings, settings
from feedback_analyzer.llm.base_client import BaseLLMClient
from feedback_analyzer.llm.prompt_builder import PromptBuilder
from feedback_analyzer.llm.workers_ai_client import WorkersAIClient
from feedback_analyzer.models.llm_models import GatewayOptions

REQUIRED_INFERENCE_SETTINGS = (
    "CLOUDFLARE_ACCOUNT_ID",
    "CLOUDFLARE_API_TOKEN",
    "CLOUDFLARE_GATEWAY_ID",
)


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.
    
    Returns:
        Settings instance
    """
    return settings


def missing_inference_settings(settings: Settings) -> list[str]:
    """Names of required inference settings that are unset or blank."""
    return [
        name for name in REQUIRED_INFERENCE_SETTINGS
        if not (getattr(settings, name) or "").strip()
    ]


def require_inference_config(settings: Settings) -> None:
    """
    Raises:
        ConfigurationError: if account id, API token or gateway id is missing
    """
    missing = missing_inference_settings(settings)
    if missing:
        raise ConfigurationError(
            "Required environment variables are not set: " + ", ".join(missing),
            missing=missing,
        )


@lru_cache()
def get_llm_client() -> BaseLLMClient:
    """
    Get singleton LLM client with connection pooling.
    
    Not cached when configuration is missing (the ConfigurationError
    propagates), so fixing the environment and restarting is enough.
    
    Returns:
        WorkersAIClient instance
    """
    settings = get_settings()
    require_inference_config(settings)
    return WorkersAIClient(
        account_id=settings.CLOUDFLARE_ACCOUNT_ID,
        api_token=settings.CLOUDFLARE_API_TOKEN,
        gateway_base_url=settings.AI_GATEWAY_BASE_URL,
        timeout=settings.LLM_TIMEOUT,
    )


@lru_cache()
def get_prompt_builder() -> PromptBuilder:
    """
    Get singleton prompt builder.
    
    Renders the three system prompts once and reuses them across requests.
    
    Returns:
        PromptBuilder instance
    """
    settings = get_settings()
    require_inference_config(settings)
    return PromptBuilder(
        model=settings.AI_MODEL,
        templates_dir=Path(settings.PROMPT_TEMPLATES_DIR) if settings.PROMPT_TEMPLATES_DIR else None,
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
        gateway=GatewayOptions(
            gateway_id=settings.CLOUDFLARE_GATEWAY_ID,
            skip_cache=settings.GATEWAY_SKIP_CACHE,
            cache_ttl=settings.GATEWAY_CACHE_TTL,
        ),
    )


def get_dispatcher(
    llm_client: BaseLLMClient = Depends(get_llm_client),
    prompt_builder: PromptBuilder = Depends(get_prompt_builder),
    settings: Settings = Depends(get_settings),
) -> ClassificationDispatcher:
    """
    Create classification dispatcher with injected dependencies.
    
    Note: not cached, it is lightweight and stateless. The client and
    prompt builder it wraps are singletons.
    """
    return ClassificationDispatcher(
        llm_client=llm_client,
        prompt_builder=prompt_builder,
        call_timeout=settings.LLM_TIMEOUT,
        request_timeout=settings.REQUEST_TIMEOUT,
    )


def get_analysis_service(
    dispatcher: ClassificationDispatcher = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
) -> AnalysisService:
    """Create the analysis service for one request."""
    return AnalysisService(dispatcher=dispatcher, max_text_chars=settings.MAX_TEXT_CHARS)
