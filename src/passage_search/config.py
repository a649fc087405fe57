"""Centralized configuration for passage-search using Pydantic Settings."""

from functools import lru_cache
import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_CSS_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Every field can be overridden with a ``PASSAGE_SEARCH_`` prefixed
    environment variable or an entry in ``.env``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PASSAGE_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore extra env vars not defined in model
    )

    # Highlighting
    highlight_class: str = Field(default="highlight", description="CSS class applied to highlighted match spans")

    # Pattern limits
    max_pattern_length: int = Field(
        default=1000,
        ge=1,
        description="Longest raw search pattern accepted before compilation is refused",
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    # Tracing
    tracing_enabled: bool = Field(default=True, description="Wrap search and replace operations in spans")
    service_name: str = Field(default="passage-search", description="OpenTelemetry service name")

    @field_validator("highlight_class")
    @classmethod
    def _check_highlight_class(cls, value: str) -> str:
        if not _CSS_IDENTIFIER.match(value):
            raise ValueError(f"highlight_class must be a simple CSS identifier, got {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"debug", "info", "warning", "error", "critical"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return normalized


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
