"""Configuration management for snykclient using Pydantic Settings.

Configuration is loaded from environment variables and/or .env files.
Environment variables take precedence over .env file values.
"""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://snyk.io/api/v1/"


class SnykSettings(BaseSettings):
    """Snyk API client settings.

    All settings can be configured via environment variables prefixed
    with ``SNYK_``, e.g. ``SNYK_API_KEY`` or ``SNYK_RETRIES``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SNYK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    api_key: SecretStr | None = Field(
        default=None,
        description="Snyk API token sent as 'Authorization: token <key>'",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Snyk v1 REST API base URL",
    )
    retries: int = Field(
        default=5,
        ge=1,
        description="Maximum attempts for retried operations",
    )
    retry_delay: float = Field(
        default=5.0,
        ge=0,
        description="Delay before the first retry (seconds)",
    )
    retry_factor: float = Field(
        default=1.2,
        ge=1,
        description="Growth factor applied to the delay after each attempt",
    )
    retry_server_errors: bool = Field(
        default=True,
        description="Retry 5xx responses as well as 429 (False retries 429 only)",
    )
    timeout: int = Field(
        default=30,
        ge=1,
        le=300,
        description="API request timeout in seconds",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("base_url", mode="after")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Ensure relative paths are joined under the base URL."""
        return v if v.endswith("/") else f"{v}/"

    @property
    def has_api_key(self) -> bool:
        """Check if a non-empty API key is configured."""
        return self.api_key is not None and bool(self.api_key.get_secret_value())


class RetryPolicy(BaseModel):
    """Backoff shape shared by every retried operation."""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=5, ge=1, description="Attempt budget")
    delay: float = Field(default=5.0, ge=0, description="First backoff wait (seconds)")
    factor: float = Field(default=1.2, ge=1, description="Backoff growth factor")
    retry_server_errors: bool = Field(
        default=True,
        description="Treat 5xx as retryable in addition to 429",
    )

    @classmethod
    def from_settings(cls, settings: SnykSettings) -> "RetryPolicy":
        """Build the retry policy described by client settings.

        Args:
            settings: Client settings.

        Returns:
            RetryPolicy instance.
        """
        return cls(
            max_attempts=settings.retries,
            delay=settings.retry_delay,
            factor=settings.retry_factor,
            retry_server_errors=settings.retry_server_errors,
        )


@lru_cache
def get_settings() -> SnykSettings:
    """Get cached client settings.

    Returns:
        Settings instance, cached for reuse.
    """
    return SnykSettings()
