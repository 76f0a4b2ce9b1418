"""
LLM client abstraction and implementations.

Components:
- BaseLLMClient: Abstract base class for LLM clients
- WorkersAIClient: Cloudflare Workers AI (via AI Gateway) implementation
- PromptBuilder: Renders system prompts and builds per-axis requests
- exceptions: LLM-specific exceptions
"""

from feedback_analyzer.llm.base_client import BaseLLMClient
from feedback_analyzer.llm.workers_ai_client import WorkersAIClient
from feedback_analyzer.llm.prompt_builder import PromptBuilder
from feedback_analyzer.llm.exceptions import (
    LLMClientError,
    LLMConnectionError,
    LLMGenerationError,
    LLMModelNotAvailableError,
    LLMRateLimitError,
    LLMResponseFormatError,
    LLMTimeoutError,
)

__all__ = [
    "BaseLLMClient",
    "WorkersAIClient",
    "PromptBuilder",
    "LLMClientError",
    "LLMConnectionError",
    "LLMGenerationError",
    "LLMModelNotAvailableError",
    "LLMRateLimitError",
    "LLMResponseFormatError",
    "LLMTimeoutError",
]
