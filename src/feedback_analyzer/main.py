"""
FastAPI application entry point for the Feedback Analyzer.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from feedback_analyzer import __version__
from feedback_analyzer.api.dependencies import get_llm_client, missing_inference_settings
from feedback_analyzer.api.error_handlers import EXCEPTION_HANDLERS
from feedback_analyzer.api.middleware import RequestTracingMiddleware
from feedback_analyzer.api.routes import router
from feedback_analyzer.config import settings
from feedback_analyzer.logging_config import configure_logging

# Configure structured logging before anything logs
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration on startup, release the HTTP pool on shutdown."""
    missing = missing_inference_settings(settings)
    logger.info(
        "Application startup",
        version=__version__,
        environment=settings.ENVIRONMENT,
        model=settings.AI_MODEL,
        gateway_id=settings.CLOUDFLARE_GATEWAY_ID,
    )
    if missing:
        # Not fatal: /api/analyze answers 500 until the environment is fixed
        logger.error("Inference configuration incomplete", missing=missing)
    
    yield
    
    logger.info("Application shutdown")
    if not missing:
        await get_llm_client().close()
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    description="Sentiment, product and issue classification of customer feedback",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Request tracing middleware (must be first for request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router)

if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with links to the other endpoints."""
    return {
        "service": settings.APP_NAME,
        "version": __version__,
        "analyze": "/api/analyze",
        "docs": "/docs",
        "health": "/health",
        "taxonomy": "/taxonomy",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "feedback_analyzer.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
