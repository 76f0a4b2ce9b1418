"""
Abstract base client for LLM inference.

Defines the one capability the classification dispatcher needs from an
inference backend: turn a chat completion request into a trimmed text
completion, or raise an LLMClientError. Test doubles only need complete().
"""

from abc import ABC, abstractmethod
import structlog

from feedback_analyzer.models.llm_models import LLMCompletionRequest, LLMCompletionResponse


logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Abstract base class for LLM inference clients.
    
    Responsibilities:
    - Send completion requests to the inference backend
    - Parse responses into LLMCompletionResponse
    - Map transport/backend failures onto LLMClientError subclasses
    
    Does NOT handle:
    - Prompt construction (that's PromptBuilder's job)
    - Normalizing the completion (that's the normalizer's job)
    - Retries (none are performed; the gateway may retry on its own)
    """
    
    def __init__(self, timeout: float = 30.0, **kwargs):
        """
        Initialize base client.
        
        Args:
            timeout: Request timeout in seconds
            **kwargs: Additional provider-specific config
        """
        self.timeout = timeout
        self.extra_config = kwargs
        
        logger.info(
            "Initialized LLM client",
            client_class=self.__class__.__name__,
            timeout=timeout,
        )
    
    @abstractmethod
    async def complete(self, request: LLMCompletionRequest) -> LLMCompletionResponse:
        """
        Run one chat completion.
        
        Implementations should:
        1. Format the request according to the provider's API
        2. Send it with the configured timeout (no retries)
        3. Return the trimmed completion text with metadata
        
        Args:
            request: Standardized completion request
            
        Returns:
            LLMCompletionResponse with non-empty, trimmed content
            
        Raises:
            LLMTimeoutError: Backend did not answer in time
            LLMConnectionError: Backend unreachable
            LLMGenerationError: Backend returned an error or empty completion
            LLMResponseFormatError: Backend answered with an unexpected body
        """
        pass
    
    async def close(self):
        """
        Close client connections and cleanup resources.
        
        Default implementation does nothing.
        """
        logger.debug("Closing LLM client", client_class=self.__class__.__name__)
    
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(timeout={self.timeout}s)"
