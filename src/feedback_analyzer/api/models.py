"""
API-specific response models for the operational endpoints.

The analysis contract itself (AnalysisResult and the error bodies) lives
in feedback_analyzer.models.output_models.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HealthResponse(BaseModel):
    """Response for health check endpoint."""
    
    status: str = Field(
        description="Overall health status",
        examples=["healthy", "unhealthy"]
    )
    version: str = Field(
        description="Service version",
        examples=["0.1.0"]
    )
    services: dict[str, str] = Field(
        description="Component-specific status",
        examples=[{"inference": "configured", "prompts": "ok"}]
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Health check timestamp (UTC)"
    )


class VersionResponse(BaseModel):
    """Response for version info endpoint."""
    
    model_config = ConfigDict(protected_namespaces=())
    
    version: str = Field(description="Service version")
    model_name: str = Field(description="Inference model identifier")
    decoding: dict[str, str] = Field(
        description="Decoding and gateway configuration",
        examples=[{"temperature": "0.0", "max_tokens": "150", "cache_ttl": "21600"}]
    )


class TaxonomyResponse(BaseModel):
    """The closed vocabularies the analyzer can answer with."""
    
    products: list[str] = Field(description="Product catalog, in prompt order")
    issues: list[str] = Field(description="Issue taxonomy, in prompt order")
    fallback_issue: str = Field(description="Issue label used for out-of-taxonomy answers")
    sentiments: list[str] = Field(description="Sentiment labels")
