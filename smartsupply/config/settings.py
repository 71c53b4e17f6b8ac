"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "smartsupply.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    # Compare-and-set retries for stock writes
    write_retries: int = 3

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class AuthSettings(BaseSettings):
    """Authentication configuration."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    jwt_secret: str = "change-me-in-production-0123456789abcdef"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 24 * 60
    bcrypt_rounds: int = 12


class LLMSettings(BaseSettings):
    """LLM provider configuration for the assistant chat."""

    model_config = SettingsConfigDict(env_prefix="LLM_")

    provider: Literal["gemini", "ollama"] = "gemini"
    model_name: str = "gemini-2.5-flash-lite"
    host: str = "https://generativelanguage.googleapis.com/v1beta"
    api_key: str = ""
    timeout: int = 60
    max_tokens: int = 2048
    temperature: float = 0.2

    # Upper bound for the serialized data snapshot sent with each question
    context_max_chars: int = 60000

    # Circuit breaker settings
    failure_threshold: int = 3
    cooldown_seconds: int = 60

    # Retry settings
    max_retries: int = 3
    retry_delay: float = 1.0
    retry_multiplier: float = 2.0


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Pagination
    default_page_size: int = 20
    max_page_size: int = 200


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "SmartSupply"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
