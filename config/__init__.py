"""Configuration package for the portfolio assistant."""
from .routes import (
    DEFAULT_PREFERRED_MODELS,
    AppConfig,
    OllamaRoute,
    SamplingOptions,
    default_config,
    load_config,
    load_route,
)
from .settings import Settings, settings

__all__ = [
    "DEFAULT_PREFERRED_MODELS",
    "AppConfig",
    "OllamaRoute",
    "SamplingOptions",
    "default_config",
    "load_config",
    "load_route",
    "Settings",
    "settings",
]
