"""Configuration system for LeadMatch.

Uses pydantic-settings to load configuration from environment variables
and .env files with defaults suitable for local development.
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Environment variables are prefixed with LEADMATCH_ (e.g., LEADMATCH_GEMINI_MODEL).
    The Gemini key is also read from the plain GEMINI_API_KEY variable.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEADMATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # AI reasoning (Gemini)
    enable_ai_reasoning: bool = Field(
        default=True,
        description="Ask Gemini for a prose explanation of each match",
    )
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LEADMATCH_GEMINI_API_KEY", "GEMINI_API_KEY"),
        description="API key from Google AI Studio",
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash-lite",
        description="Gemini model used for match reasoning",
    )
    reasoning_timeout_s: float = Field(
        default=4.0,
        gt=0,
        description="Seconds to wait for one reasoning call before falling back",
    )
    reasoning_retry_backoff_s: float = Field(
        default=0.5,
        ge=0,
        description="Pause before retrying a failed reasoning call",
    )
    reasoning_max_retries: int = Field(
        default=1,
        ge=0,
        description="Retries after the first failed reasoning call",
    )
    max_concurrent_reasoning: int = Field(
        default=8,
        ge=1,
        description="Reasoning calls allowed in flight at once (free tier is 15 RPM)",
    )

    # Ranking
    default_match_limit: int = Field(
        default=10,
        ge=1,
        description="Number of ranked matches returned when no limit is given",
    )

    # Data paths
    listings_file: Path | None = Field(
        default=None,
        description="JSON file of listings used when a request names none",
    )


# Singleton instance for easy import
config = Settings()


def reload_config() -> Settings:
    """Re-read settings into the shared ``config`` instance.

    Scripts that call ``load_dotenv`` after the package is imported use this
    so modules holding a reference to ``config`` see the new values.
    """
    fresh = Settings()
    for name in Settings.model_fields:
        setattr(config, name, getattr(fresh, name))
    return config
