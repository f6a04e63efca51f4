from __future__ import annotations  # Re-export llm_gateway public API

from .llm_gateway import (
    GenerateRequest,
    GenerateResult,
    GenerationFailedError,
    GenerationUnavailableError,
    HttpClient,
    HttpResponse,
    LlmGatewayError,
    generate,
    list_models,
)
from .models import base_token, resolve_model, select_model

__all__ = [
    "GenerateRequest",
    "GenerateResult",
    "GenerationFailedError",
    "GenerationUnavailableError",
    "HttpClient",
    "HttpResponse",
    "LlmGatewayError",
    "base_token",
    "generate",
    "list_models",
    "resolve_model",
    "select_model",
]
