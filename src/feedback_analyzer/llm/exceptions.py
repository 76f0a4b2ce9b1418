"""
Custom exceptions for the LLM client layer.

Every failure talking to the inference backend surfaces as one of these,
so the classification dispatcher can catch LLMClientError once and turn
it into an InferenceError without knowing the backend.
"""


class LLMClientError(Exception):
    """
    Base exception for all LLM client errors.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class LLMConnectionError(LLMClientError):
    """
    Raised when the inference backend cannot be reached.
    
    Includes DNS failures, refused connections and dropped sockets.
    """
    pass


class LLMTimeoutError(LLMConnectionError):
    """
    Raised when the backend does not answer within the client timeout.
    """
    pass


class LLMGenerationError(LLMClientError):
    """
    Raised when the backend answers with an error instead of a completion.
    
    Examples:
    - HTTP 5xx from the gateway
    - success=false in the Workers AI envelope
    - Empty completion
    """
    pass


class LLMModelNotAvailableError(LLMGenerationError):
    """
    Raised when the requested model does not exist on the backend (HTTP 404).
    """
    pass


class LLMRateLimitError(LLMGenerationError):
    """
    Raised when the backend rate-limits the request (HTTP 429).
    
    Not retried here; the gateway's own retry settings apply.
    """
    pass


class LLMResponseFormatError(LLMClientError):
    """
    Raised when the backend answers 2xx but the body is not the expected shape
    (non-JSON, missing result.response, non-string completion).
    """
    pass
