from __future__ import annotations  # Local model selection against the Ollama registry

import logging
from typing import Optional, Sequence

from config import OllamaRoute

from .llm_gateway import HttpClient, LlmGatewayError, list_models


logger = logging.getLogger(__name__)


def base_token(identifier: str) -> str:  # Family part of "family:tag"
    return identifier.split(":", 1)[0]


def select_model(installed: Sequence[str], preferences: Sequence[str], fallback: str) -> str:
    """Pick the first installed model matching the ranked ``preferences``.

    A preference matches an installed name when the preference's base token
    (text before ``:``) occurs in the installed name. Without a match the
    registry's first entry wins; with an empty registry ``fallback`` is used.
    """

    for preferred in preferences:
        token = base_token(preferred)
        if not token:
            continue
        for name in installed:
            if token in name:
                return name
    if installed:
        return installed[0]
    return fallback


def resolve_model(route: OllamaRoute, *, client: Optional[HttpClient] = None) -> str:  # Never raises
    if route.model:
        return route.model
    try:
        installed = list_models(route, client=client)
    except LlmGatewayError as exc:
        logger.warning("Model registry unavailable, using fallback %s: %s", route.fallback_model, exc)
        return route.fallback_model
    if not installed:
        logger.warning("Model registry is empty, using fallback %s", route.fallback_model)
        return route.fallback_model
    chosen = select_model(installed, route.preferred_models, route.fallback_model)
    logger.info("Selected model %s from %d installed", chosen, len(installed))
    return chosen
