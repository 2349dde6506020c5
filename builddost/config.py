"""Service configuration with pydantic-settings.

Requires: LLM_API_KEY (or OPENAI_API_KEY / OPENROUTER_API_KEY)
Requires when STORAGE_BACKEND=sql: DATABASE_URL
Optional: GITHUB_TOKEN (GitHub export runs as a stub without it)

Usage:
    from builddost.config import get_settings

    settings = get_settings()  # fails fast on missing required vars
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Base settings: logging fields shared by every entrypoint."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    service_name: str = Field(
        default="builddost-api",
        description="Service name for structured logging",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v


def database_url_field(required: bool = True):
    """Database URL field definition."""
    if required:
        return Field(
            ...,
            description="SQLAlchemy async connection URL",
            examples=["postgresql+asyncpg://user:pass@db:5432/builddost"],
        )
    return Field(
        default=None,
        description="SQLAlchemy async connection URL (optional)",
        examples=["sqlite+aiosqlite:///./builddost.db"],
    )


class Settings(BaseSettings):
    """API service settings."""

    # === Required ===

    llm_api_key: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("llm_api_key", "openai_api_key", "openrouter_api_key"),
        description="API key for the text-generation service",
    )

    # === LLM ===

    llm_provider: Literal["openai", "openrouter"] = Field(
        default="openai",
        description="Provider used for generation calls",
    )
    llm_model: str = Field(
        default="gpt-4o",
        description="Model identifier passed to the provider",
    )
    llm_site_url: str | None = Field(
        default=None,
        description="HTTP-Referer sent to OpenRouter",
    )
    llm_app_name: str = Field(
        default="BuildDost AI Website Builder",
        description="X-Title sent to OpenRouter",
    )

    # === Generation call policy ===

    generation_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Seconds to wait for one generation call",
    )
    generation_max_retries: int = Field(
        default=2,
        ge=0,
        description="Retries after a transient generation failure",
    )
    generation_retry_backoff: float = Field(
        default=1.0,
        ge=0,
        description="Base delay in seconds, doubled on each retry",
    )

    # === Storage ===

    storage_backend: Literal["memory", "sql"] = Field(
        default="memory",
        description="Project store implementation",
    )
    database_url: str | None = database_url_field(required=False)

    # === Server ===

    api_host: str = Field(
        default="0.0.0.0",  # noqa: S104
        description="Bind address for the builddost-api entrypoint",
    )
    api_port: int = Field(
        default=8000,
        description="Port for the builddost-api entrypoint",
    )

    # === GitHub export ===

    github_token: str = Field(
        default="",
        description="Token for GitHub export (stubbed when empty)",
    )
    github_owner: str = Field(
        default="user",
        description="Account that owns exported repositories",
    )

    @model_validator(mode="after")
    def require_database_url_for_sql(self) -> "Settings":
        if self.storage_backend == "sql" and not self.database_url:
            raise ValueError("DATABASE_URL is required when STORAGE_BACKEND=sql")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Validates required env vars on first call.
    Raises ValidationError if LLM_API_KEY is missing.
    """
    return Settings()
