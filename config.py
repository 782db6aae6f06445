"""
Configuration management for the Recursive Learning backend.

Centralizes all configuration using Pydantic settings with environment variable support.
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=8000,
        description="API server port"
    )

    # LLM Configuration
    anthropic_api_key: str = Field(
        default="",
        description="Anthropic API key (required at runtime)"
    )
    llm_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Claude model used for curriculum generation and tutoring"
    )
    llm_max_tokens: int = Field(
        default=4096,
        description="Maximum tokens per completion"
    )
    llm_timeout: int = Field(
        default=60,
        description="Completion provider timeout in seconds"
    )

    # Storage
    storage_path: str = Field(
        default=".recursive_learning/store.json",
        description="Local file backing the session key-value store"
    )

    # Application Settings
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or create the global settings instance.

    Returns:
        Settings: Application settings
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings():
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None


def validate_required_settings():
    """
    Validate that all required settings are present at runtime.

    Should be called after settings are loaded but before application starts.
    Raises ValueError if required settings are missing.
    """
    settings = get_settings()

    if not settings.anthropic_api_key:
        raise ValueError(
            "ANTHROPIC_API_KEY environment variable is required but not set. "
            "Please add it to your environment or .env file."
        )

    if not settings.storage_path:
        raise ValueError("STORAGE_PATH is required but not set")

    return True
