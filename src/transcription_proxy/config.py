"""Configuration management for the transcription proxy."""

import secrets
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable and .env support."""

    # Deepgram
    deepgram_api_key: str = ""
    deepgram_base_url: str = "https://api.deepgram.com"
    default_model: str = "nova-3"
    upstream_timeout_seconds: float = 60.0

    # Uploads
    max_upload_size: int = 10 * 1024 * 1024  # bytes

    # Session auth
    session_secret: str = Field(default_factory=lambda: secrets.token_hex(32))
    jwt_expiry_seconds: int = 3600

    # Metadata; relative paths resolve from the working directory, like .env
    metadata_path: str = "deepgram.toml"

    # Server
    host: str = "0.0.0.0"
    port: int = 8081
    log_level: str = "info"

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
