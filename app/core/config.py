"""
Unified Configuration
All environment variables and settings in one place

The settings object is passed explicitly into create_app(); the module-level
instance below is only the default used by the entrypoint.
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """
    Unified application settings.
    Validates all environment variables at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================================================
    # SERVER
    # ============================================================================

    environment: str = Field(default="production", description="Environment: dev/staging/production")
    port: int = Field(default=8080, description="Server port")
    debug: bool = Field(default=False, description="Debug mode")

    # ============================================================================
    # UPSTREAM LLM (OpenAI)
    # ============================================================================

    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_model: str = Field(default="gpt-4o-mini", description="Chat completion model")
    openai_base_url: Optional[str] = Field(default=None, description="Override for the OpenAI API base URL")
    openai_timeout: float = Field(default=30.0, description="Upstream request timeout (seconds)")
    openai_temperature: float = Field(default=0.2, description="Decoding temperature (low = deterministic)")
    openai_max_tokens: int = Field(default=500, description="Completion token budget")

    # ============================================================================
    # RATE LIMITING (Redis)
    # ============================================================================

    redis_url: Optional[str] = Field(default=None, description="Redis URL for daily quota counters (unset = disabled)")
    daily_request_limit: int = Field(default=3, description="Requests allowed per client per UTC day")
    rate_limit_ttl_seconds: int = Field(default=86400, description="Expiry of a quota counter after its last write")

    # ============================================================================
    # INGRESS
    # ============================================================================

    app_identity_secret: str = Field(default="pezo_v1", description="Expected X-PEZO-APP header value")
    cors_max_age: int = Field(default=86400, description="Preflight cache lifetime (seconds)")

    # ============================================================================
    # PRODUCTION INFRASTRUCTURE
    # ============================================================================

    # Error tracking (Sentry)
    sentry_dsn: Optional[str] = Field(default=None, description="Sentry DSN for error tracking")


# Global settings instance
settings = Settings()
