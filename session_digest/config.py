"""Configuration management for Session Digest."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DigestSettings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SESSION_DIGEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Size limiting
    max_string_length: int = Field(200, ge=1, description="Longest string kept in summary details")
    max_container_size: int = Field(3, ge=1, description="Max list items / mapping keys kept per level")
    truncation_marker: str = Field("…", description="Appended to strings that were cut")

    # Summarization
    verbose_sources: bool = Field(
        False,
        description="Summarize low-level incremental sources (scroll, fonts, stylesheets...)"
    )

    # Logging
    log_level: str = Field("INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    log_json: bool = Field(False, description="Emit logs as JSON")

    # API
    max_events: int = Field(50000, ge=1, description="Max events accepted per upload")


def get_settings() -> DigestSettings:
    """Get application settings."""
    return DigestSettings()
