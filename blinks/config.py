"""
Configuration management for the Blink Actions server.
Handles environment variables and configuration validation.
"""
import os
from typing import Optional
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file if present
load_dotenv()

# Solana devnet genesis hash in CAIP-2 form
DEVNET_BLOCKCHAIN_ID = "solana:EtWTRABZaYq6iMfeYKouRu166VU2xqa1"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database Configuration
    db_path: str = Field("./data/blinks.db", description="SQLite file holding blink records")

    # Public base URL used to build action hrefs
    backend_url: str = Field("http://localhost:8000")

    # Solana RPC Configuration
    rpc_url: Optional[str] = Field(None, description="Solana JSON-RPC endpoint")
    rpc_timeout_seconds: float = Field(10.0)

    # Solana Actions response headers
    blockchain_ids: str = Field(DEVNET_BLOCKCHAIN_ID)
    action_version: str = Field("2.1.3")

    # Logging Configuration
    log_level: str = Field("INFO")

    # API Configuration
    api_host: str = Field("0.0.0.0")
    api_port: int = Field(8000)

    @field_validator("backend_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


def validate_backend_url(url: str) -> str:
    """Validate that the backend URL is an absolute http(s) URL."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid BACKEND_URL: {url!r}")
    return url


def validate_configuration(settings: Optional[Settings] = None) -> Settings:
    """Validate all configuration settings on startup."""
    settings = settings or get_settings()

    validate_backend_url(settings.backend_url)

    # Validate log level
    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if settings.log_level.upper() not in valid_log_levels:
        raise ValueError(f"Invalid log level: {settings.log_level}")

    # Ensure data directory exists
    data_dir = os.path.dirname(settings.db_path)
    if data_dir:
        os.makedirs(data_dir, exist_ok=True)

    return settings
