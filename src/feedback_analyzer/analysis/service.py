"""
Analysis service: the single request-handling routine.

Validator -> Dispatcher (3 concurrent calls) -> Normalizer -> Assembler.
"""

from typing import Any, Optional

import structlog

from feedback_analyzer.analysis.assembler import assemble_result
from feedback_analyzer.analysis.dispatcher import ClassificationDispatcher
from feedback_analyzer.analysis.normalizer import (
    normalize_issues,
    normalize_products,
    normalize_sentiment,
)
from feedback_analyzer.analysis.validator import validate_analysis_request
from feedback_analyzer.models.enums import ClassificationAxis
from feedback_analyzer.models.output_models import AnalysisResult

logger = structlog.get_logger(__name__)


class AnalysisService:
    """
    Stateless orchestrator for one analysis request.
    
    Attributes:
        dispatcher: Runs the three classification calls
        max_text_chars: Input length cap applied by the validator
    """
    
    def __init__(self, dispatcher: ClassificationDispatcher, max_text_chars: Optional[int] = None):
        self.dispatcher = dispatcher
        self.max_text_chars = max_text_chars
    
    async def analyze(self, body: Any) -> AnalysisResult:
        """
        Analyze a decoded request body.
        
        Args:
            body: Decoded JSON body, expected to be {"text": str}
        
        Returns:
            AnalysisResult
        
        Raises:
            ValidationError: body unusable (no inference call is made)
            InferenceError: any classification failed or was not normalizable
        """
        request = validate_analysis_request(body, max_chars=self.max_text_chars)
        
        logger.info(
            "Analysis request accepted",
            text_length=len(request.text),
            truncated=request.truncated,
        )
        
        completions = await self.dispatcher.dispatch(request.text)
        
        result = assemble_result(
            sentiment=normalize_sentiment(completions[ClassificationAxis.SENTIMENT]),
            products=normalize_products(completions[ClassificationAxis.PRODUCTS]),
            issues=normalize_issues(completions[ClassificationAxis.ISSUES]),
        )
        
        logger.info(
            "Analysis completed",
            sentiment=result.sentiment.label,
            products_count=len(result.products),
            issue=result.issues[0],
        )
        return result
