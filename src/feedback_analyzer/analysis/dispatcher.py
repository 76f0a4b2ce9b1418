"""
Concurrent dispatch of the three classification calls.

Fan-out/fan-in: the sentiment, products and issues requests are started
together and joined; latency is that of the slowest call. All three
completions are required. The first failure aborts the request and the
calls still in flight are cancelled.

Usage:
    dispatcher = ClassificationDispatcher(llm_client, prompt_builder)
    completions = await dispatcher.dispatch("Workers deploys keep failing")
    completions[ClassificationAxis.PRODUCTS]  # "Workers"
"""

import asyncio
import time
from typing import Optional

import structlog

from feedback_analyzer.analysis.exceptions import InferenceError
from feedback_analyzer.llm.base_client import BaseLLMClient
from feedback_analyzer.llm.exceptions import LLMClientError
from feedback_analyzer.llm.prompt_builder import PromptBuilder
from feedback_analyzer.models.enums import ClassificationAxis
from feedback_analyzer.monitoring.metrics import classification_calls_total

logger = structlog.get_logger(__name__)


class ClassificationDispatcher:
    """
    Runs the three classifications for one text against an injected client.

    Holds no per-request state; one instance serves concurrent requests.

    Attributes:
        llm_client: Inference backend (any BaseLLMClient)
        prompt_builder: Builds the per-axis completion requests
        call_timeout: Deadline for each individual call (seconds, None = none)
        request_timeout: Deadline for the whole fan-out (seconds, None = none)
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        prompt_builder: PromptBuilder,
        call_timeout: Optional[float] = None,
        request_timeout: Optional[float] = None,
    ):
        self.llm_client = llm_client
        self.prompt_builder = prompt_builder
        self.call_timeout = call_timeout
        self.request_timeout = request_timeout

    async def dispatch(self, text: str) -> dict[ClassificationAxis, str]:
        """
        Classify text on all three axes concurrently.

        Args:
            text: Validated, trimmed text

        Returns:
            Trimmed raw completion per axis

        Raises:
            InferenceError: any call failed, timed out or returned nothing,
                or the overall deadline passed
        """
        start_time = time.perf_counter()
        tasks = {
            axis: asyncio.create_task(
                self._classify(axis, text), name=f"classify-{axis.value}"
            )
            for axis in ClassificationAxis
        }

        try:
            completions = await asyncio.wait_for(
                asyncio.gather(*tasks.values()),
                timeout=self.request_timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("Classification deadline exceeded", timeout=self.request_timeout)
            raise InferenceError(
                f"Analysis did not complete within {self.request_timeout}s"
            ) from e
        finally:
            for task in tasks.values():
                if not task.done():
                    task.cancel()

        logger.info(
            "Classification fan-out complete",
            duration_ms=int((time.perf_counter() - start_time) * 1000),
        )
        return dict(zip(tasks.keys(), completions))

    async def _classify(self, axis: ClassificationAxis, text: str) -> str:
        """One classification call with its own deadline, failures wrapped."""
        try:
            request = self.prompt_builder.build_request(axis, text)
            response = await asyncio.wait_for(
                self.llm_client.complete(request),
                timeout=self.call_timeout,
            )
            content = response.content.strip()
        except asyncio.TimeoutError as e:
            classification_calls_total.labels(axis=axis.value, success="false").inc()
            logger.warning("Classification call timed out", axis=axis.value, timeout=self.call_timeout)
            raise InferenceError(
                f"{axis.value} classification timed out after {self.call_timeout}s",
                axis=axis,
            ) from e
        except LLMClientError as e:
            classification_calls_total.labels(axis=axis.value, success="false").inc()
            logger.warning(
                "Classification call failed",
                axis=axis.value,
                error_type=type(e).__name__,
                error=e.message,
            )
            raise InferenceError(
                f"{axis.value} classification failed: {e.message}",
                axis=axis,
                details=e.details,
            ) from e
        except Exception as e:
            # CancelledError is a BaseException and is not caught here
            classification_calls_total.labels(axis=axis.value, success="false").inc()
            logger.error(
                "Classification call crashed",
                axis=axis.value,
                error_type=type(e).__name__,
                exc_info=True,
            )
            raise InferenceError(
                f"{axis.value} classification failed: {type(e).__name__}: {e}",
                axis=axis,
            ) from e

        if not content:
            classification_calls_total.labels(axis=axis.value, success="false").inc()
            raise InferenceError(f"{axis.value} classification returned an empty completion", axis=axis)

        classification_calls_total.labels(axis=axis.value, success="true").inc()
        logger.debug(
            "Classification call succeeded",
            axis=axis.value,
            latency_ms=response.latency_ms,
            cached=response.cached,
        )
        return content
