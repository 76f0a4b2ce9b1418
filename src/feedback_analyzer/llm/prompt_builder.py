"""
Prompt builder for classification requests.

Responsible for:
- Loading and rendering the three Jinja2 system prompts
- Embedding the closed product catalog and issue taxonomy into them
- Constructing one LLMCompletionRequest per classification axis
"""

from pathlib import Path
from typing import Optional, Sequence
from jinja2 import Environment, FileSystemLoader, StrictUndefined
import structlog

from feedback_analyzer.models.catalogs import (
    FALLBACK_ISSUE_LABEL,
    ISSUE_TAXONOMY,
    NO_PRODUCTS_ANSWER,
    PRODUCT_CATALOG,
)
from feedback_analyzer.models.enums import ClassificationAxis
from feedback_analyzer.models.llm_models import (
    ChatMessage,
    GatewayOptions,
    LLMCompletionRequest,
)


logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"

TEMPLATE_NAMES = {
    ClassificationAxis.SENTIMENT: "sentiment.txt",
    ClassificationAxis.PRODUCTS: "products.txt",
    ClassificationAxis.ISSUES: "issues.txt",
}


class PromptBuilder:
    """
    Build classification requests from validated text.

    System prompts depend only on the catalogs, which never change, so
    they are rendered once here and reused for every request.
    """

    def __init__(
        self,
        model: str,
        templates_dir: Optional[Path] = None,
        temperature: float = 0.0,
        max_tokens: int = 150,
        gateway: Optional[GatewayOptions] = None,
        products: Sequence[str] = PRODUCT_CATALOG,
        issues: Sequence[str] = ISSUE_TAXONOMY,
    ):
        """
        Initialize prompt builder.

        Args:
            model: Model identifier sent with every request
            templates_dir: Directory with sentiment.txt, products.txt, issues.txt
                (defaults to the templates shipped with the package)
            temperature: Sampling temperature (0.0 = deterministic)
            max_tokens: Completion token budget
            gateway: AI Gateway routing/caching options attached to every request
            products: Product catalog rendered into the detection prompt
            issues: Issue taxonomy rendered into the categorization prompt
        """
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.gateway = gateway

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,  # Plain-text prompts
            undefined=StrictUndefined,
        )

        context = {
            "products": list(products),
            "issues": list(issues),
            "no_products_answer": NO_PRODUCTS_ANSWER,
            "fallback_issue": FALLBACK_ISSUE_LABEL,
        }

        try:
            self.system_prompts: dict[ClassificationAxis, str] = {
                axis: self.jinja_env.get_template(name).render(**context).strip()
                for axis, name in TEMPLATE_NAMES.items()
            }
        except Exception as e:
            logger.error(
                "Failed to load prompt templates",
                error=str(e),
                templates_dir=str(self.templates_dir)
            )
            raise

        logger.info(
            "PromptBuilder initialized",
            templates_dir=str(self.templates_dir),
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            via_gateway=gateway is not None,
            prompt_lengths={axis.value: len(p) for axis, p in self.system_prompts.items()},
        )

    def build_system_prompt(self, axis: ClassificationAxis) -> str:
        """Rendered system prompt for one axis."""
        return self.system_prompts[axis]

    def build_request(self, axis: ClassificationAxis, text: str) -> LLMCompletionRequest:
        """
        Build the completion request for one axis.

        The text goes in unchanged as the user turn.
        """
        return LLMCompletionRequest(
            model=self.model,
            messages=[
                ChatMessage(role="system", content=self.system_prompts[axis]),
                ChatMessage(role="user", content=text),
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            gateway=self.gateway,
        )
