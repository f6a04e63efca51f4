"""Route configuration for the local generation endpoint."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .settings import settings

DEFAULT_PREFERRED_MODELS: List[str] = [
    "llama3.2:3b",
    "llama3.2",
    "mistral:7b",
    "llama3.1:8b",
    "phi3.5",
    "gemma2:2b",
    "qwen2.5:1.5b",
    "qwen2.5:0.5b",
]


class SamplingOptions(BaseModel):
    """Ollama ``options`` block sent with every generation."""

    temperature: float = Field(default=0.0, ge=0.0)
    top_p: float = Field(default=0.3, gt=0.0, le=1.0)
    top_k: int = Field(default=5, ge=1)
    repeat_penalty: float = Field(default=1.1, ge=0.0)
    num_predict: int = Field(default=200, ge=1)


class OllamaRoute(BaseModel):
    """Endpoint, model preferences and sampling for one use of the model."""

    name: str
    base_url: str
    generate_endpoint: str = "/api/generate"
    tags_endpoint: str = "/api/tags"
    timeout_s: float = Field(default=120.0, ge=0.1)
    preferred_models: List[str] = Field(default_factory=lambda: list(DEFAULT_PREFERRED_MODELS))
    fallback_model: str = "qwen2.5:0.5b"
    model: Optional[str] = None
    sequential: bool = False
    options: SamplingOptions = Field(default_factory=SamplingOptions)

    @property
    def generate_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.generate_endpoint}"

    @property
    def tags_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.tags_endpoint}"


class AppConfig(BaseModel):
    """Application configuration root."""

    routes: Dict[str, OllamaRoute]


def load_config(path: Path) -> AppConfig:
    """Load configuration from disk."""

    data = path.read_text(encoding="utf-8")
    return AppConfig.model_validate_json(data)


def default_config() -> AppConfig:
    """Build the ``chat`` and ``interview`` routes from environment settings."""

    chat = OllamaRoute(
        name="chat",
        base_url=settings.OLLAMA_BASE_URL,
        timeout_s=settings.OLLAMA_TIMEOUT_S,
        fallback_model=settings.OLLAMA_FALLBACK_MODEL,
    )
    interview = OllamaRoute(
        name="interview",
        base_url=settings.OLLAMA_BASE_URL,
        timeout_s=settings.OLLAMA_TIMEOUT_S,
        model=settings.INTERVIEW_MODEL,
        fallback_model=settings.OLLAMA_FALLBACK_MODEL,
        options=SamplingOptions(temperature=0.7, top_p=0.9, top_k=40, repeat_penalty=1.1, num_predict=400),
    )
    return AppConfig(routes={"chat": chat, "interview": interview})


def load_route(name: str, path: Optional[Path] = None) -> OllamaRoute:
    """Return the named route from ``path`` or the settings-derived defaults.

    Raises:
        KeyError: If the configuration has no route called ``name``.
    """

    config_path = path if path is not None else Path(settings.APP_CONFIG_PATH)
    cfg = load_config(config_path) if config_path.exists() else default_config()
    if name not in cfg.routes:
        raise KeyError(f"Route '{name}' missing from configuration")
    return cfg.routes[name]
