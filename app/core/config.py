"""Configuration management for the Readiness Scoring Engine."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Supabase configuration (optional: persistence is skipped when missing)
    SUPABASE_URL: str | None = Field(default=None, description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str | None = Field(
        default=None, description="Supabase service role key"
    )

    # Anthropic configuration (optional: keyword classifier is used when missing)
    ANTHROPIC_API_KEY: str | None = Field(default=None, description="Anthropic API key")

    # Environment
    READINESS_ENV: str = Field(default="dev", description="Environment: dev, staging, prod, test")
    ALGORITHM_DEBUG: bool = Field(
        default=False, description="Log full computed results at debug level"
    )

    # Scoring
    SCORING_MAX_WORKERS: int = Field(
        default=1, description="Worker threads for index computation (1 = sequential)"
    )

    # Document classification
    CLASSIFIER_MODEL: str = Field(
        default="claude-haiku-4-5-20251001", description="Model for semantic classification"
    )
    CLASSIFIER_MAX_CHARS: int = Field(
        default=8000, description="Max document chars sent for classification"
    )

    # Persistence tables
    ENTERPRISE_RESULTS_TABLE: str = Field(
        default="enterprise_algorithm_results", description="Table for enterprise suite results"
    )
    AI_READINESS_RESULTS_TABLE: str = Field(
        default="ai_readiness_results", description="Table for AI readiness suite results"
    )

    @property
    def supabase_configured(self) -> bool:
        """Whether both Supabase URL and service key are present."""
        return bool(self.SUPABASE_URL and self.SUPABASE_SERVICE_ROLE_KEY)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If environment variables have invalid values
    """
    return Settings()
