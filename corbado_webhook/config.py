"""Configuration loading for the example webhook application.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Basic-Auth credentials Corbado sends with every webhook call
    webhook_username: str = Field(
        default="",
        description="Username expected in the webhook Basic-Auth header",
    )
    webhook_password: str = Field(
        default="",
        description="Password expected in the webhook Basic-Auth header",
    )

    # Server configuration
    server_backend: Literal["standard", "aiohttp"] = Field(
        default="standard",
        description="HTTP server implementation to serve the webhook with",
    )
    webhook_host: str = Field(
        default="localhost",
        description="Host to listen on for webhook server",
    )
    webhook_port: int = Field(
        default=8000,
        description="Port to listen on for webhook server",
    )
    webhook_path: str = Field(
        default="/corbadoWebhook",
        description="URL path of the webhook endpoint",
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

    # Development
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging",
    )

    @field_validator("webhook_port")
    @classmethod
    def validate_webhook_port(cls, v: int) -> int:
        """Ensure webhook port is in valid range."""
        if v <= 0 or v > 65535:
            raise ValueError("webhook_port must be between 1 and 65535")
        return v

    @field_validator("webhook_path")
    @classmethod
    def validate_webhook_path(cls, v: str) -> str:
        """Ensure webhook path is absolute."""
        if not v.startswith("/"):
            raise ValueError("webhook_path must start with '/'")
        return v


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
