"""Configuration loading for relicform.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Resolve API endpoints from the account's region
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

NERDGRAPH_URLS = {
    "US": "https://api.newrelic.com/graphql",
    "EU": "https://api.eu.newrelic.com/graphql",
}

REST_API_URLS = {
    "US": "https://api.newrelic.com/v2",
    "EU": "https://api.eu.newrelic.com/v2",
}


class Settings(BaseSettings):
    """Provider configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv. Field names map to the usual
    New Relic variables (NEW_RELIC_API_KEY, NEW_RELIC_ACCOUNT_ID, ...).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials
    new_relic_api_key: str = Field(
        default="",
        description="New Relic user API key",
    )
    new_relic_account_id: int | None = Field(
        default=None,
        description="Default account for resources that do not set account_id",
    )
    new_relic_region: Literal["US", "EU"] = Field(
        default="US",
        description="Region of the New Relic account",
    )

    # Endpoint overrides
    nerdgraph_api_url: str = Field(
        default="",
        description="NerdGraph endpoint URL (defaults to the region's endpoint)",
    )
    rest_api_url: str = Field(
        default="",
        description="REST API v2 base URL (defaults to the region's endpoint)",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for each API request in seconds",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("new_relic_region", mode="before")
    @classmethod
    def normalize_region(cls, v: object) -> object:
        """Accept the region in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("new_relic_account_id")
    @classmethod
    def validate_account_id(cls, v: int | None) -> int | None:
        """Ensure the account ID is positive when given."""
        if v is not None and v <= 0:
            raise ValueError("new_relic_account_id must be positive")
        return v

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensure request timeout is positive."""
        if v <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return v

    @property
    def resolved_nerdgraph_url(self) -> str:
        return self.nerdgraph_api_url or NERDGRAPH_URLS[self.new_relic_region]

    @property
    def resolved_rest_api_url(self) -> str:
        return self.rest_api_url or REST_API_URLS[self.new_relic_region]


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
