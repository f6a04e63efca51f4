from __future__ import annotations  # Ollama request gateway module

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

import httpx
from pydantic import BaseModel, Field, ValidationError

from config import OllamaRoute, SamplingOptions


logger = logging.getLogger(__name__)  # Module logger setup


_MODEL_LOCKS: Dict[str, threading.Lock] = {}
_MODEL_LOCKS_GUARD = threading.Lock()


class HttpClient(Protocol):  # Minimal HTTP client protocol
    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> "HttpResponse": ...

    def get(self, url: str, *, headers: Dict[str, str], timeout: float) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


class LlmGatewayError(RuntimeError):  # Base gateway error
    pass


class GenerationUnavailableError(LlmGatewayError):  # Endpoint could not be reached
    pass


class GenerationFailedError(LlmGatewayError):  # Endpoint answered with a failure
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GenerateRequest(BaseModel):  # Body for POST /api/generate
    model: str
    prompt: str
    stream: bool = False
    system: Optional[str] = None
    options: SamplingOptions = Field(default_factory=SamplingOptions)


class GenerateResult(BaseModel):  # Body returned by POST /api/generate
    model: str = ""
    created_at: str = ""
    response: str
    done: bool = True


def _lock_for(route: OllamaRoute, model: str) -> threading.Lock:
    key = f"{route.generate_url}#{model}"
    with _MODEL_LOCKS_GUARD:
        lock = _MODEL_LOCKS.get(key)
        if lock is None:
            lock = threading.Lock()
            _MODEL_LOCKS[key] = lock
    return lock


def generate(
    request: GenerateRequest,
    *,
    route: OllamaRoute,
    client: Optional[HttpClient] = None,
) -> GenerateResult:  # Send one non-streaming generation and return the parsed reply
    def _execute() -> GenerateResult:
        payload = request.model_dump(exclude_none=True)
        preview = _preview(request.prompt)
        logger.info(
            "LLM request send route=%s model=%s preview=%s",
            route.name,
            request.model,
            preview,
        )
        try:
            response, close_cb = _post(route.generate_url, payload, route.timeout_s, client)
        except Exception as exc:  # noqa: BLE001
            logger.error("LLM transport failure: %s", exc)
            raise GenerationUnavailableError(
                f"Cannot reach generation endpoint at {route.base_url}"
            ) from exc
        try:
            if response.status_code < 200 or response.status_code >= 300:
                logger.error("LLM error status: %s", response.status_code)
                raise GenerationFailedError(
                    f"Generation request failed with status {response.status_code}",
                    status_code=response.status_code,
                )
            try:
                result = GenerateResult.model_validate(response.json())
            except (ValueError, ValidationError) as exc:
                logger.error("Invalid payload from LLM: %s", exc)
                raise GenerationFailedError("Generation response was not understood") from exc
        finally:
            _close_safely(close_cb)
        logger.info("LLM request done route=%s model=%s chars=%d", route.name, request.model, len(result.response))
        return result

    if route.sequential:
        with _lock_for(route, request.model):
            return _execute()
    return _execute()


def list_models(route: OllamaRoute, *, client: Optional[HttpClient] = None) -> List[str]:  # Names from GET /api/tags
    try:
        response, close_cb = _get(route.tags_url, route.timeout_s, client)
    except Exception as exc:  # noqa: BLE001
        raise GenerationUnavailableError(f"Cannot reach model registry at {route.base_url}") from exc
    try:
        if response.status_code < 200 or response.status_code >= 300:
            raise GenerationFailedError(
                f"Model registry returned status {response.status_code}",
                status_code=response.status_code,
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise GenerationFailedError("Model registry payload was not JSON") from exc
    finally:
        _close_safely(close_cb)
    models = data.get("models") if isinstance(data, dict) else None
    if not isinstance(models, list):
        return []
    names: List[str] = []
    for item in models:
        name = item.get("name") if isinstance(item, dict) else None
        if isinstance(name, str) and name:
            names.append(name)
    return names


def _post(url: str, payload: Dict[str, Any], timeout: float, client: Optional[HttpClient]) -> Tuple[HttpResponse, Optional[Callable[[], None]]]:  # Dispatch POST request
    headers = {"Content-Type": "application/json"}
    if client is not None:
        return client.post(url, json=payload, headers=headers, timeout=timeout), None
    http_client = httpx.Client(timeout=timeout)
    try:
        response = http_client.post(url, json=payload, headers=headers)
    except Exception:
        http_client.close()
        raise
    return response, http_client.close


def _get(url: str, timeout: float, client: Optional[HttpClient]) -> Tuple[HttpResponse, Optional[Callable[[], None]]]:  # Dispatch GET request
    headers = {"Accept": "application/json"}
    if client is not None:
        return client.get(url, headers=headers, timeout=timeout), None
    http_client = httpx.Client(timeout=timeout)
    try:
        response = http_client.get(url, headers=headers)
    except Exception:
        http_client.close()
        raise
    return response, http_client.close


def _close_safely(close_cb: Optional[Callable[[], None]]) -> None:  # Close HTTP client callback when provided
    if close_cb is not None:
        close_cb()


def _preview(prompt: str) -> str:  # Last non-empty prompt line, trimmed for logging
    for line in reversed(prompt.splitlines()):
        text = line.strip()
        if text and text != "Assistant:":
            return text if len(text) <= 120 else text[:117] + "..."
    return ""
