"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (and a local .env file)
with validation.
"""

from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Fallback property for local development only; set GA4_PROPERTY_ID in production.
DEFAULT_GA4_PROPERTY_ID = "513053895"


class Settings(BaseSettings):
    """Application settings with environment variable loading."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: str = Field(default="development")
    LOG_LEVEL: str = Field(default="INFO")

    # Google Analytics 4
    GA4_PROPERTY_ID: str = Field(
        default=DEFAULT_GA4_PROPERTY_ID,
        description="GA4 property ID queried by the analytics endpoints"
    )
    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = Field(
        default=None,
        description="Path to the service account JSON key (required at first GA4 call)"
    )
    GA4_MOCK_MODE: bool = Field(
        default=False,
        description="Serve generated event counts instead of calling GA4"
    )

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=4000)

    # CORS
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(default=["*"])

    # Monitoring
    SENTRY_DSN: str = Field(default="")
    SENTRY_TRACES_SAMPLE_RATE: float = Field(default=0.1, ge=0.0, le=1.0)

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper()

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


# Global settings instance
settings = Settings()
