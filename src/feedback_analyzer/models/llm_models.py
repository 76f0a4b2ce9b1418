"""
LLM-specific data models for the request/response cycle.

These models are internal to the LLM layer and describe the raw exchange
with the inference backend (Workers AI behind AI Gateway). They are kept
separate from the business models (AnalysisResult) so the backend can be
swapped without touching normalization.
"""

from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, Field, ConfigDict


class ChatMessage(BaseModel):
    """One role-tagged chat turn."""
    model_config = ConfigDict(frozen=True)
    
    role: Literal["system", "user", "assistant"]
    content: str


class GatewayOptions(BaseModel):
    """
    Routing and caching hints for Cloudflare AI Gateway.
    
    Caching itself is the gateway's job: identical (model, messages) pairs
    are served from cache for cache_ttl seconds unless skip_cache is set.
    """
    model_config = ConfigDict(frozen=True)
    
    gateway_id: str = Field(..., min_length=1, description="AI Gateway identifier")
    skip_cache: bool = Field(default=False, description="Bypass the gateway cache")
    cache_ttl: int = Field(default=21600, ge=0, description="Cache TTL in seconds")


class LLMCompletionRequest(BaseModel):
    """
    Standardized chat completion request sent to any BaseLLMClient.
    """
    model_config = ConfigDict(frozen=True)
    
    model: str = Field(..., description="Model identifier (e.g., '@cf/meta/llama-3.1-70b-instruct')")
    messages: list[ChatMessage] = Field(..., min_length=1, description="System + user turns")
    temperature: float = Field(default=0.0, ge=0.0, le=5.0, description="Sampling temperature")
    max_tokens: int = Field(default=150, ge=1, le=8192, description="Maximum tokens to generate")
    gateway: Optional[GatewayOptions] = Field(default=None, description="AI Gateway routing/caching")


class LLMCompletionResponse(BaseModel):
    """
    Completion returned by a BaseLLMClient.
    
    content is already stripped of surrounding whitespace.
    """
    model_config = ConfigDict(frozen=True)
    
    content: str = Field(..., description="Generated text, trimmed")
    model: str = Field(..., description="Model that produced the completion")
    latency_ms: int = Field(..., ge=0, description="Round-trip latency in milliseconds")
    cached: Optional[bool] = Field(default=None, description="Served from gateway cache, if reported")
    raw_metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Provider-specific metadata (for debugging)"
    )
