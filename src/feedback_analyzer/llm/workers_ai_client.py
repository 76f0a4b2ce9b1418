"""
Cloudflare Workers AI client, routed through AI Gateway.

Communicates with the Workers AI REST API using httpx AsyncClient. Supports:
- Chat-style messages (system + user turns)
- AI Gateway routing with per-request cache hints
- Direct Workers AI calls when no gateway is given
- Connection pooling via a persistent AsyncClient
"""

import time
from typing import Any, Dict, Optional
import httpx
import structlog

from feedback_analyzer.llm.base_client import BaseLLMClient
from feedback_analyzer.llm.exceptions import (
    LLMConnectionError,
    LLMGenerationError,
    LLMModelNotAvailableError,
    LLMRateLimitError,
    LLMResponseFormatError,
    LLMTimeoutError,
)
from feedback_analyzer.models.llm_models import LLMCompletionRequest, LLMCompletionResponse
from feedback_analyzer.monitoring.metrics import llm_latency_seconds


logger = structlog.get_logger(__name__)

DEFAULT_GATEWAY_BASE_URL = "https://gateway.ai.cloudflare.com/v1"
DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"


class WorkersAIClient(BaseLLMClient):
    """
    Workers AI client using httpx for async HTTP communication.

    API Endpoints:
    - POST {gateway}/{account_id}/{gateway_id}/workers-ai/{model}  (via AI Gateway)
    - POST {api}/accounts/{account_id}/ai/run/{model}              (direct)

    Gateway caching is requested per call with the cf-aig-cache-ttl and
    cf-aig-skip-cache headers; the gateway reports hits in cf-aig-cache-status.

    No retries: one HTTP attempt per completion.
    """

    def __init__(
        self,
        account_id: str,
        api_token: str,
        gateway_base_url: str = DEFAULT_GATEWAY_BASE_URL,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 30.0,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize Workers AI client.

        Args:
            account_id: Cloudflare account id
            api_token: API token with Workers AI permissions
            gateway_base_url: AI Gateway base URL
            api_base_url: Cloudflare REST API base URL (direct calls)
            timeout: Request timeout in seconds
            connection_limits: httpx connection pool limits (default: 20 max connections)
            transport: Custom httpx transport (tests pass httpx.MockTransport)
            **kwargs: Additional config
        """
        super().__init__(timeout, **kwargs)
        self.account_id = account_id
        self._api_token = api_token
        self.gateway_base_url = gateway_base_url.rstrip("/")
        self.api_base_url = api_base_url.rstrip("/")

        # Three concurrent calls per request, so keep a few warm connections
        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=10,
                max_connections=20,
                keepalive_expiry=30.0
            )

        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._transport = transport

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
                headers={"Authorization": f"Bearer {self._api_token}"},
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    def build_url(self, request: LLMCompletionRequest) -> str:
        """Endpoint for the request: gateway route if a gateway is set, else direct."""
        if request.gateway is not None:
            return (
                f"{self.gateway_base_url}/{self.account_id}/"
                f"{request.gateway.gateway_id}/workers-ai/{request.model}"
            )
        return f"{self.api_base_url}/accounts/{self.account_id}/ai/run/{request.model}"

    @staticmethod
    def build_headers(request: LLMCompletionRequest) -> Dict[str, str]:
        """Per-request gateway cache headers (empty for direct calls)."""
        if request.gateway is None:
            return {}
        return {
            "cf-aig-skip-cache": "true" if request.gateway.skip_cache else "false",
            "cf-aig-cache-ttl": str(request.gateway.cache_ttl),
        }

    @staticmethod
    def build_payload(request: LLMCompletionRequest) -> Dict[str, Any]:
        """
        Workers AI text-generation payload:
        {
            "messages": [{"role": "system", "content": "..."}, {"role": "user", "content": "..."}],
            "temperature": 0.0,
            "max_tokens": 150
        }
        """
        return {
            "messages": [message.model_dump() for message in request.messages],
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        }

    async def complete(self, request: LLMCompletionRequest) -> LLMCompletionResponse:
        """
        Run a chat completion on Workers AI.

        Response envelope:
        {
            "result": {"response": "positive"},
            "success": true,
            "errors": [],
            "messages": []
        }
        """
        start_time = time.perf_counter()
        url = self.build_url(request)

        logger.debug(
            "Sending completion request to Workers AI",
            model=request.model,
            via_gateway=request.gateway is not None,
            temperature=request.temperature,
            max_tokens=request.max_tokens,
        )

        try:
            client = await self._get_client()
            response = await client.post(
                url,
                json=self.build_payload(request),
                headers=self.build_headers(request),
            )
            response.raise_for_status()
            content = self._extract_completion(response)

        except httpx.TimeoutException as e:
            self._observe(request.model, start_time, success=False)
            logger.warning("Workers AI request timeout", model=request.model, timeout=self.timeout)
            raise LLMTimeoutError(
                f"Request timeout after {self.timeout}s",
                details={"timeout": self.timeout, "error": str(e)}
            ) from e

        except httpx.HTTPStatusError as e:
            self._observe(request.model, start_time, success=False)
            raise self._map_status_error(e, request.model) from e

        except httpx.HTTPError as e:
            self._observe(request.model, start_time, success=False)
            logger.warning("Workers AI network error", model=request.model, error=str(e))
            raise LLMConnectionError(
                f"Network error: {e}",
                details={"error_type": type(e).__name__}
            ) from e

        except (LLMGenerationError, LLMResponseFormatError):
            self._observe(request.model, start_time, success=False)
            raise

        latency_ms = self._observe(request.model, start_time, success=True)
        cache_status = response.headers.get("cf-aig-cache-status")

        logger.info(
            "Workers AI completion successful",
            model=request.model,
            latency_ms=latency_ms,
            cache_status=cache_status,
        )

        return LLMCompletionResponse(
            content=content,
            model=request.model,
            latency_ms=latency_ms,
            cached=(cache_status.upper() == "HIT") if cache_status else None,
            raw_metadata={
                "cache_status": cache_status,
                "log_id": response.headers.get("cf-aig-log-id"),
            },
        )

    def _extract_completion(self, response: httpx.Response) -> str:
        """Pull result.response out of the envelope and trim it."""
        try:
            data = response.json()
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            raise LLMResponseFormatError(
                "Invalid JSON response from Workers AI",
                details={"parse_error": str(e), "body": response.text[:200]}
            ) from e

        if not isinstance(data, dict):
            raise LLMResponseFormatError(
                "Unexpected response body from Workers AI",
                details={"body_type": type(data).__name__}
            )

        if data.get("success") is False:
            raise LLMGenerationError(
                "Workers AI reported failure",
                details={"errors": data.get("errors", [])}
            )

        result = data.get("result")
        completion = result.get("response") if isinstance(result, dict) else None
        if not isinstance(completion, str):
            raise LLMResponseFormatError(
                "Workers AI response has no text completion",
                details={"keys": sorted(data.keys())}
            )

        completion = completion.strip()
        if not completion:
            raise LLMGenerationError("Empty completion from Workers AI")
        return completion

    @staticmethod
    def _map_status_error(error: httpx.HTTPStatusError, model: str) -> Exception:
        status_code = error.response.status_code
        error_text = error.response.text[:500]

        logger.error(
            "Workers AI HTTP error",
            status_code=status_code,
            error_text=error_text,
            model=model,
        )

        details = {"status": status_code, "error": error_text, "model": model}
        if status_code == 404:
            return LLMModelNotAvailableError(f"Model not found: {model}", details=details)
        if status_code == 429:
            return LLMRateLimitError("Workers AI rate limit exceeded", details=details)
        return LLMGenerationError(f"Workers AI returned HTTP {status_code}", details=details)

    @staticmethod
    def _observe(model: str, start_time: float, success: bool) -> int:
        elapsed = time.perf_counter() - start_time
        llm_latency_seconds.labels(model=model, success=str(success).lower()).observe(elapsed)
        return int(elapsed * 1000)

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed Workers AI client connection")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
