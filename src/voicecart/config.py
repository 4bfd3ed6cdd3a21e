"""Configuration management for voicecart."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from voicecart.errors import ApiKeyNotConfiguredError

DEFAULT_MODEL = "models/gemini-2.0-flash-exp"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="VOICECART_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Live session
    api_key: str | None = Field(default=None, description="API key for the live session provider")
    model: str = Field(default=DEFAULT_MODEL, description="Live model name")
    api_version: str = Field(default="v1alpha", description="Live API version")
    voice_name: str = Field(default="Aoede", description="Prebuilt voice used for spoken replies")
    response_modality: str = Field(default="AUDIO", description="Response modality requested from the model")

    # Storefront
    storefront_url: str = Field(default="http://localhost:3000", description="Base URL of the storefront")
    headless: bool = Field(default=False, description="Run the browser without a window")

    # Timing
    poll_interval_seconds: float = Field(default=1.0, gt=0, description="Login completion poll interval")
    settle_delay_seconds: float = Field(default=0.1, ge=0, description="Delay before dependent activations")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ApiKeyNotConfiguredError("VOICECART_API_KEY is not set")
        return self.api_key


def load_settings(workspace: Path | None = None, **overrides: object) -> Settings:
    """Load settings from the environment and an optional workspace .env file.

    Args:
        workspace: Directory whose ``.env`` file should be read instead of the cwd one
        **overrides: Explicit values that win over the environment

    Returns:
        Settings instance
    """
    updates = {key: value for key, value in overrides.items() if value is not None}
    if workspace is None:
        return Settings(**updates)  # type: ignore[arg-type]
    return Settings(_env_file=workspace / ".env", **updates)  # type: ignore[arg-type, call-arg]
