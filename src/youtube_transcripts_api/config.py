"""Configuration management for the transcript HTTP API."""

import os
from dataclasses import dataclass
from typing import List
from functools import lru_cache


@dataclass
class APIConfig:
    """API configuration settings."""

    # Core API settings
    host: str = os.getenv("API_HOST", "0.0.0.0")
    port: int = int(os.getenv("API_PORT", "8000"))
    debug: bool = os.getenv("API_DEBUG", "false").lower() == "true"

    # CORS settings
    cors_origins: List[str] = None

    # Application metadata
    title: str = os.getenv("API_TITLE", "YouTube Transcripts API")
    description: str = "Transcript and metadata extraction for YouTube videos"
    version: str = os.getenv("APP_VERSION", "1.0.0")

    # Environment
    environment: str = os.getenv("ENVIRONMENT", "development")

    # Per-client rate limiting on transcript routes
    rate_limit_requests: int = int(os.getenv("API_RATE_LIMIT_REQUESTS", "10"))
    rate_limit_window: int = int(os.getenv("API_RATE_LIMIT_WINDOW", "60"))
    rate_limit_path_prefix: str = os.getenv("API_RATE_LIMIT_PATH_PREFIX", "/api/v1/transcript")

    # Process-wide ceiling shared by all clients
    service_rate_limit_requests: int = int(os.getenv("API_SERVICE_RATE_LIMIT_REQUESTS", "120"))

    # Logging
    log_level: str = os.getenv("API_LOG_LEVEL", "INFO")

    def __post_init__(self):
        """Post-initialization processing."""
        if self.cors_origins is None:
            origins_str = os.getenv("API_CORS_ORIGINS", "http://localhost:3000")
            self.cors_origins = [origin.strip() for origin in origins_str.split(",")]

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if self.port < 1 or self.port > 65535:
            errors.append("API_PORT must be between 1 and 65535")

        if self.rate_limit_requests < 1:
            errors.append("API_RATE_LIMIT_REQUESTS must be positive")

        if self.rate_limit_window < 1:
            errors.append("API_RATE_LIMIT_WINDOW must be positive")

        if self.service_rate_limit_requests < 1:
            errors.append("API_SERVICE_RATE_LIMIT_REQUESTS must be positive")

        return errors


@lru_cache()
def get_api_config() -> APIConfig:
    """Get validated API configuration."""
    config = APIConfig()

    errors = config.validate()
    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return config
