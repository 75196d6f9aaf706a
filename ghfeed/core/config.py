"""Application configuration."""

import logging
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "GitHub Activity Feed"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # GitHub REST API
    github_api_url: str = "https://api.github.com"
    github_request_timeout: float = 30.0
    github_events_per_page: int = Field(default=30, ge=1, le=100)

    # Feed
    feed_usernames: List[str] = Field(default_factory=list)
    skip_malformed_events: bool = True

    # Rate Limiting
    rate_limit_enabled: bool = True
    rate_limit_default: str = "100/minute"
    rate_limit_feed: str = "30/minute"

    # Security headers
    hsts_max_age: int = Field(default=31536000, ge=0)

    # API
    api_v1_prefix: str = "/api/v1"
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("github_api_url")
    @classmethod
    def validate_github_api_url(cls, v: str) -> str:
        """Validate GitHub API URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Invalid GitHub API URL format")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Initialize logger
logger = setup_logging(get_settings().log_level)
