from __future__ import annotations  # One grounded chat turn about a portfolio

import logging
from datetime import date
from typing import Optional

from pydantic import BaseModel

from config import OllamaRoute
from llm_gateway import HttpClient, generate, resolve_model
from observability import span
from portfolio.models import PortfolioRecord
from prompt_compiler import build_generate_request, build_prompt


logger = logging.getLogger(__name__)


class ChatAnswer(BaseModel):
    message: str
    model: str


def answer_question(
    message: str,
    record: PortfolioRecord,
    *,
    route: OllamaRoute,
    client: Optional[HttpClient] = None,
    today: Optional[date] = None,
    subject: str = "anonymous",
) -> ChatAnswer:
    """Compile the grounded prompt, pick a model and run one generation.

    Gateway errors propagate to the caller unchanged.
    """

    model = resolve_model(route, client=client)
    prompt = build_prompt(record, message, today=today)
    logger.debug("Compiled chat prompt chars=%d model=%s", len(prompt), model)
    request = build_generate_request(model, prompt, options=route.options)
    with span("chat_turn", subject, route=route.name, model=model):
        result = generate(request, route=route, client=client)
    return ChatAnswer(message=result.response.strip(), model=model)


__all__ = ["ChatAnswer", "answer_question"]
