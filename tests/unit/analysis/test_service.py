"""Unit tests for AnalysisService."""

import pytest

from feedback_analyzer.analysis.dispatcher import ClassificationDispatcher
from feedback_analyzer.analysis.exceptions import (
    InferenceError,
    NormalizationError,
    ValidationError,
)
from feedback_analyzer.analysis.service import AnalysisService
from feedback_analyzer.llm.exceptions import LLMTimeoutError
from feedback_analyzer.models.enums import ClassificationAxis
from feedback_analyzer.models.output_models import AnalysisResult


def _service(client, prompt_builder, max_text_chars=300) -> AnalysisService:
    return AnalysisService(
        dispatcher=ClassificationDispatcher(client, prompt_builder),
        max_text_chars=max_text_chars,
    )


@pytest.mark.asyncio
async def test_analyze_happy_path(analysis_service):
    result = await analysis_service.analyze(
        {"text": "The WAF keeps blocking my Workers deploys"}
    )
    
    assert isinstance(result, AnalysisResult)
    assert result.model_dump() == {
        "sentiment": {
            "label": "Positive",
            "color": "bg-green-500/10 text-green-500 hover:bg-green-500/20",
        },
        "products": ["WAF", "Workers"],
        "issues": ["Bug Report"],
    }


@pytest.mark.asyncio
async def test_analyze_negative_without_products(make_llm_client, prompt_builder):
    client = make_llm_client(completions={
        ClassificationAxis.SENTIMENT: "negative",
        ClassificationAxis.PRODUCTS: "none",
        ClassificationAxis.ISSUES: "Billing Question",
    })
    
    result = await _service(client, prompt_builder).analyze({"text": "Why was I charged twice?"})
    
    assert result.sentiment.label == "Negative"
    assert result.sentiment.color == "bg-red-500/10 text-red-500 hover:bg-red-500/20"
    assert result.products == []
    assert result.issues == ["Billing Question"]


@pytest.mark.asyncio
async def test_same_completions_give_same_result(analysis_service):
    first = await analysis_service.analyze({"text": "R2 is great"})
    second = await analysis_service.analyze({"text": "R2 is great"})
    
    assert first == second


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    {},
    {"text": ""},
    {"text": "   "},
    {"text": 12},
    [],
    None,
])
async def test_invalid_body_makes_no_inference_call(analysis_service, mock_llm_client, body):
    with pytest.raises(ValidationError):
        await analysis_service.analyze(body)
    
    assert mock_llm_client.complete.await_count == 0


@pytest.mark.asyncio
async def test_text_is_trimmed_before_dispatch(analysis_service, mock_llm_client):
    await analysis_service.analyze({"text": "  Pages build failed \n"})
    
    for call in mock_llm_client.complete.await_args_list:
        assert call.args[0].messages[1].content == "Pages build failed"


@pytest.mark.asyncio
async def test_long_text_is_truncated(make_llm_client, prompt_builder):
    client = make_llm_client()
    
    await _service(client, prompt_builder, max_text_chars=10).analyze({"text": "x" * 50})
    
    for call in client.complete.await_args_list:
        assert call.args[0].messages[1].content == "x" * 10


@pytest.mark.asyncio
async def test_unknown_sentiment_fails_the_request(make_llm_client, prompt_builder):
    client = make_llm_client(completions={ClassificationAxis.SENTIMENT: "happy"})
    
    with pytest.raises(NormalizationError) as exc_info:
        await _service(client, prompt_builder).analyze({"text": "I love D1"})
    
    assert exc_info.value.axis is ClassificationAxis.SENTIMENT


@pytest.mark.asyncio
async def test_unknown_issue_uses_fallback(make_llm_client, prompt_builder):
    client = make_llm_client(completions={ClassificationAxis.ISSUES: "Praise"})
    
    result = await _service(client, prompt_builder).analyze({"text": "I love D1"})
    
    assert result.issues == ["General Question"]


@pytest.mark.asyncio
async def test_products_outside_catalog_are_dropped(make_llm_client, prompt_builder):
    client = make_llm_client(completions={ClassificationAxis.PRODUCTS: "Foo, R2"})
    
    result = await _service(client, prompt_builder).analyze({"text": "Foo and R2"})
    
    assert result.products == ["R2"]


@pytest.mark.asyncio
async def test_backend_failure_propagates(make_llm_client, prompt_builder):
    client = make_llm_client(
        errors={ClassificationAxis.ISSUES: LLMTimeoutError("Request timeout after 30.0s")}
    )
    
    with pytest.raises(InferenceError, match="issues classification failed"):
        await _service(client, prompt_builder).analyze({"text": "hello"})
