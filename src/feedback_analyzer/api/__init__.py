"""
FastAPI API routes and endpoints.

- routes.py: POST /api/analyze, GET /health, GET /version, GET /taxonomy
- dependencies.py: Dependency injection for LLM client, prompt builder, service
- models.py: Operational response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request id tracing
"""

from feedback_analyzer.api import dependencies, error_handlers, models
from feedback_analyzer.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
