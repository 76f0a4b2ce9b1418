"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

from typing import Dict, Optional
from unittest.mock import AsyncMock

import pytest

from feedback_analyzer.analysis.dispatcher import ClassificationDispatcher
from feedback_analyzer.analysis.service import AnalysisService
from feedback_analyzer.config import Settings
from feedback_analyzer.llm.base_client import BaseLLMClient
from feedback_analyzer.llm.prompt_builder import PromptBuilder
from feedback_analyzer.models.enums import ClassificationAxis
from feedback_analyzer.models.llm_models import GatewayOptions, LLMCompletionResponse

TEST_MODEL = "@cf/meta/llama-3.1-70b-instruct"

DEFAULT_COMPLETIONS: Dict[ClassificationAxis, str] = {
    ClassificationAxis.SENTIMENT: "positive",
    ClassificationAxis.PRODUCTS: "WAF, Workers",
    ClassificationAxis.ISSUES: "Bug Report",
}


@pytest.fixture
def test_settings() -> Settings:
    """Fully configured settings, isolated from any local .env file.
    
    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.MAX_TEXT_CHARS = 10
    """
    return Settings(
        _env_file=None,
        APP_NAME="Feedback Analyzer (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        CLOUDFLARE_ACCOUNT_ID="test-account",
        CLOUDFLARE_API_TOKEN="test-token",
        CLOUDFLARE_GATEWAY_ID="test-gateway",
        AI_MODEL=TEST_MODEL,
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    """Settings with no Cloudflare credentials at all."""
    return Settings(
        _env_file=None,
        CLOUDFLARE_ACCOUNT_ID=None,
        CLOUDFLARE_API_TOKEN=None,
        CLOUDFLARE_GATEWAY_ID=None,
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def prompt_builder() -> PromptBuilder:
    """PromptBuilder over the packaged templates, routed through a test gateway."""
    return PromptBuilder(
        model=TEST_MODEL,
        temperature=0.0,
        max_tokens=150,
        gateway=GatewayOptions(gateway_id="test-gateway", cache_ttl=3600),
    )


@pytest.fixture
def axis_of(prompt_builder: PromptBuilder):
    """Resolve which axis a completion request belongs to (by its system prompt)."""
    axis_by_prompt = {prompt: axis for axis, prompt in prompt_builder.system_prompts.items()}
    
    def _axis_of(request) -> ClassificationAxis:
        return axis_by_prompt[request.messages[0].content]
    
    return _axis_of


@pytest.fixture
def make_llm_client(axis_of):
    """Factory fixture for a mock BaseLLMClient answering per axis.
    
    Usage:
        client = make_llm_client(
            completions={ClassificationAxis.SENTIMENT: "negative"},
            errors={ClassificationAxis.PRODUCTS: LLMConnectionError("down")},
        )
    """
    def _create(
        completions: Optional[Dict[ClassificationAxis, str]] = None,
        errors: Optional[Dict[ClassificationAxis, Exception]] = None,
    ) -> AsyncMock:
        answers = {**DEFAULT_COMPLETIONS, **(completions or {})}
        failures = errors or {}
        
        async def _complete(request):
            axis = axis_of(request)
            if axis in failures:
                raise failures[axis]
            return LLMCompletionResponse(
                content=answers[axis],
                model=request.model,
                latency_ms=5,
            )
        
        client = AsyncMock(spec=BaseLLMClient)
        client.complete = AsyncMock(side_effect=_complete)
        return client
    
    return _create


@pytest.fixture
def mock_llm_client(make_llm_client) -> AsyncMock:
    """Mock client answering with DEFAULT_COMPLETIONS."""
    return make_llm_client()


@pytest.fixture
def dispatcher(mock_llm_client, prompt_builder) -> ClassificationDispatcher:
    return ClassificationDispatcher(llm_client=mock_llm_client, prompt_builder=prompt_builder)


@pytest.fixture
def analysis_service(dispatcher) -> AnalysisService:
    return AnalysisService(dispatcher=dispatcher, max_text_chars=300)
