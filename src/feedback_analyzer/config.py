"""
Configuration settings for the Feedback Analyzer.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development (see .env.example).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Feedback Analyzer"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    
    # === Cloudflare (required at request time) ===
    CLOUDFLARE_ACCOUNT_ID: Optional[str] = None
    CLOUDFLARE_API_TOKEN: Optional[str] = None
    CLOUDFLARE_GATEWAY_ID: Optional[str] = None  # AI Gateway routing/caching id
    AI_GATEWAY_BASE_URL: str = "https://gateway.ai.cloudflare.com/v1"
    
    # === Model & Decoding ===
    AI_MODEL: str = "@cf/meta/llama-3.1-70b-instruct"
    LLM_TEMPERATURE: float = 0.0  # Deterministic decoding
    LLM_MAX_TOKENS: int = 150  # Enough for a short comma-separated product list
    
    # === Gateway Caching ===
    GATEWAY_SKIP_CACHE: bool = False
    GATEWAY_CACHE_TTL: int = 21600  # seconds (6 hours)
    
    # === Deadlines ===
    LLM_TIMEOUT: float = 30.0  # per classification call, seconds
    REQUEST_TIMEOUT: float = 45.0  # whole fan-out, seconds
    
    # === Input Processing ===
    MAX_TEXT_CHARS: int = 300  # Matches the input cap of the web form
    
    # === Prompts ===
    PROMPT_TEMPLATES_DIR: Optional[str] = None  # None = templates shipped with the package
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True
    
    # === HTTP ===
    CORS_ALLOW_ORIGINS: list[str] = ["*"]


# Global settings instance
settings = Settings()
