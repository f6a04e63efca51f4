"""Application settings and configuration management."""
from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    DB_PATH: str = Field(default="data/portfolio.db")
    APP_CONFIG_PATH: str = Field(default="app_config.json")

    OLLAMA_BASE_URL: str = "http://localhost:11434"
    OLLAMA_TIMEOUT_S: float = 120.0
    OLLAMA_FALLBACK_MODEL: str = "qwen2.5:0.5b"
    INTERVIEW_MODEL: str = "qwen2.5:0.5b"

    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])
    MIN_PASSWORD_LENGTH: int = 6

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True)


settings = Settings()
