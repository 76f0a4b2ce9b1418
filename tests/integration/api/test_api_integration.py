"""
Integration tests for the FastAPI application.

These tests use TestClient against the real app. The inference backend is
replaced through dependency overrides, so no network access is needed.
"""

import pytest
from fastapi.testclient import TestClient

from feedback_analyzer import __version__
from feedback_analyzer.analysis.dispatcher import ClassificationDispatcher
from feedback_analyzer.analysis.service import AnalysisService
from feedback_analyzer.api import dependencies, routes
from feedback_analyzer.api.dependencies import (
    get_analysis_service,
    get_llm_client,
    get_prompt_builder,
    get_settings,
)
from feedback_analyzer.config import settings
from feedback_analyzer.llm.exceptions import LLMConnectionError
from feedback_analyzer.llm.prompt_builder import PromptBuilder
from feedback_analyzer.main import app
from feedback_analyzer.models.catalogs import ISSUE_TAXONOMY, PRODUCT_CATALOG
from feedback_analyzer.models.enums import ClassificationAxis

client = TestClient(app)


@pytest.fixture(autouse=True)
def reset_overrides():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def use_service(prompt_builder):
    """Route /api/analyze through a service built on the given mock client."""
    def _use(llm_client):
        service = AnalysisService(
            dispatcher=ClassificationDispatcher(llm_client, prompt_builder),
            max_text_chars=300,
        )
        app.dependency_overrides[get_analysis_service] = lambda: service
        return service
    return _use


class TestAnalyzeEndpoint:
    
    def test_success(self, use_service, mock_llm_client):
        use_service(mock_llm_client)
        
        response = client.post("/api/analyze", json={"text": "The WAF blocks my Workers"})
        
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {
            "sentiment": {
                "label": "Positive",
                "color": "bg-green-500/10 text-green-500 hover:bg-green-500/20",
            },
            "products": ["WAF", "Workers"],
            "issues": ["Bug Report"],
        }
        assert mock_llm_client.complete.await_count == 3
    
    def test_neutral_no_products_fallback_issue(self, use_service, make_llm_client):
        use_service(make_llm_client(completions={
            ClassificationAxis.SENTIMENT: "Neutral",
            ClassificationAxis.PRODUCTS: "None",
            ClassificationAxis.ISSUES: "Something Else",
        }))
        
        response = client.post("/api/analyze", json={"text": "How do I sign up?"})
        
        assert response.status_code == 200
        data = response.json()
        assert data["sentiment"]["label"] == "Neutral"
        assert data["products"] == []
        assert data["issues"] == ["General Question"]
    
    @pytest.mark.parametrize("body", [
        {},
        {"text": ""},
        {"text": "   "},
        {"text": None},
        {"text": 5},
        [],
        "text",
    ])
    def test_invalid_body(self, use_service, mock_llm_client, body):
        use_service(mock_llm_client)
        
        response = client.post("/api/analyze", json=body)
        
        assert response.status_code == 400
        assert response.json() == {"error": "Text is required"}
        assert mock_llm_client.complete.await_count == 0
    
    def test_long_text_is_truncated_before_classification(self, use_service, mock_llm_client):
        use_service(mock_llm_client)
        
        response = client.post("/api/analyze", json={"text": "R2 " * 200})
        
        assert response.status_code == 200
        for call in mock_llm_client.complete.await_args_list:
            text = call.args[0].messages[1].content
            assert len(text) <= 300
            assert text.startswith("R2 R2")
    
    def test_malformed_json(self, use_service, mock_llm_client):
        use_service(mock_llm_client)
        
        response = client.post(
            "/api/analyze",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        
        assert response.status_code == 400
        assert response.json() == {"error": "Text is required"}
    
    def test_backend_failure(self, use_service, make_llm_client):
        use_service(make_llm_client(
            errors={ClassificationAxis.PRODUCTS: LLMConnectionError("Network error: refused")}
        ))
        
        response = client.post("/api/analyze", json={"text": "R2 is down"})
        
        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to analyze text"
        assert "products classification failed" in data["details"]
        assert set(data) == {"error", "details"}
    
    def test_unexpected_backend_exception_keeps_cause(self, use_service, make_llm_client):
        use_service(make_llm_client(
            errors={ClassificationAxis.PRODUCTS: ConnectionResetError("reset by peer")}
        ))
        
        response = client.post("/api/analyze", json={"text": "R2 is down"})
        
        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to analyze text",
            "details": "products classification failed: ConnectionResetError: reset by peer",
        }
    
    def test_unrecognized_sentiment(self, use_service, make_llm_client):
        use_service(make_llm_client(completions={ClassificationAxis.SENTIMENT: "ecstatic"}))
        
        response = client.post("/api/analyze", json={"text": "I love Pages"})
        
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to analyze text"
    
    def test_missing_configuration(self, monkeypatch, unconfigured_settings):
        monkeypatch.setattr(dependencies, "get_settings", lambda: unconfigured_settings)
        get_llm_client.cache_clear()
        get_prompt_builder.cache_clear()
        
        try:
            response = client.post("/api/analyze", json={"text": "hello"})
        finally:
            get_llm_client.cache_clear()
            get_prompt_builder.cache_clear()
        
        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Failed to analyze text"
        assert "CLOUDFLARE_ACCOUNT_ID" in data["details"]
    
    def test_unexpected_error(self):
        class ExplodingService:
            async def analyze(self, body):
                raise RuntimeError("kaboom")
        
        app.dependency_overrides[get_analysis_service] = ExplodingService
        crash_client = TestClient(app, raise_server_exceptions=False)
        
        response = crash_client.post("/api/analyze", json={"text": "hello"})
        
        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to analyze text",
            "details": "Unexpected error: RuntimeError",
        }
    
    def test_request_id_is_echoed(self, use_service, mock_llm_client):
        use_service(mock_llm_client)
        
        response = client.post(
            "/api/analyze",
            json={"text": "hello"},
            headers={"X-Request-ID": "req-123"},
        )
        
        assert response.headers["X-Request-ID"] == "req-123"
    
    def test_request_id_is_generated(self, use_service, mock_llm_client):
        use_service(mock_llm_client)
        
        response = client.post("/api/analyze", json={"text": "hello"})
        
        assert len(response.headers["X-Request-ID"]) == 36


def test_root_endpoint():
    response = client.get("/")
    
    assert response.status_code == 200
    data = response.json()
    assert data["version"] == __version__
    assert data["analyze"] == "/api/analyze"
    assert data["health"] == "/health"


def test_taxonomy_endpoint():
    response = client.get("/taxonomy")
    
    assert response.status_code == 200
    data = response.json()
    assert data["products"] == list(PRODUCT_CATALOG)
    assert data["issues"] == list(ISSUE_TAXONOMY)
    assert data["fallback_issue"] == "General Question"
    assert data["sentiments"] == ["Positive", "Negative", "Neutral"]


def test_version_endpoint(test_settings):
    app.dependency_overrides[get_settings] = lambda: test_settings
    
    response = client.get("/version")
    
    assert response.status_code == 200
    data = response.json()
    assert data["version"] == __version__
    assert data["model_name"] == test_settings.AI_MODEL
    assert data["decoding"]["temperature"] == "0.0"
    assert data["decoding"]["cache_ttl"] == str(test_settings.GATEWAY_CACHE_TTL)


def test_health_when_configured(test_settings):
    app.dependency_overrides[get_settings] = lambda: test_settings
    
    response = client.get("/health")
    
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["services"] == {"inference": "configured", "prompts": "ok"}
    assert "timestamp" in data


def test_health_when_unconfigured(unconfigured_settings):
    app.dependency_overrides[get_settings] = lambda: unconfigured_settings
    
    response = client.get("/health")
    
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["services"]["inference"].startswith("not_configured")


@pytest.mark.skipif(not settings.PROMETHEUS_ENABLED, reason="Prometheus disabled")
def test_metrics_endpoint(use_service, mock_llm_client):
    use_service(mock_llm_client)
    client.post("/api/analyze", json={"text": "hello"})
    
    response = client.get("/metrics")
    
    assert response.status_code == 200
    assert "analysis_requests_total" in response.text


def test_health_renders_templates_once(monkeypatch, test_settings):
    built = []
    
    class CountingPromptBuilder(PromptBuilder):
        def __init__(self, *args, **kwargs):
            built.append(kwargs.get("templates_dir"))
            super().__init__(*args, **kwargs)
    
    monkeypatch.setattr(routes, "PromptBuilder", CountingPromptBuilder)
    routes.check_prompt_templates.cache_clear()
    app.dependency_overrides[get_settings] = lambda: test_settings
    
    try:
        first = client.get("/health")
        second = client.get("/health")
    finally:
        routes.check_prompt_templates.cache_clear()
    
    assert first.status_code == second.status_code == 200
    assert built == [None]


def test_health_reports_broken_templates(tmp_path, test_settings):
    test_settings.PROMPT_TEMPLATES_DIR = str(tmp_path)
    app.dependency_overrides[get_settings] = lambda: test_settings
    
    response = client.get("/health")
    
    assert response.status_code == 503
    assert response.json()["services"]["prompts"] == "error (TemplateNotFound)"
