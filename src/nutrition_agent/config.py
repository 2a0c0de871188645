"""Application configuration."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    fdc_api_key: str
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    fdc_timeout_seconds: float = 15.0
    fdc_retry_attempts: int = 2
    fdc_retry_delay_seconds: float = 0.3
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    agent_max_tool_rounds: int = 5
    host: str = "127.0.0.1"
    port: int = 8000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("fdc_api_key")
    @classmethod
    def _require_api_key(cls, value: str) -> str:
        """Reject a blank FDC key so startup fails before any lookup."""
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("FDC_API_KEY must not be empty")
        return cleaned

    @field_validator("fdc_retry_attempts")
    @classmethod
    def _non_negative_retries(cls, value: int) -> int:
        if value < 0:
            raise ValueError("fdc_retry_attempts must be >= 0")
        return value

    @property
    def is_chat_configured(self) -> bool:
        """Return whether an LLM key is available for the chat endpoint."""
        return bool(self.openai_api_key)
