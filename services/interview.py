from __future__ import annotations  # Dashboard interview turn: prompt, generate, detect completion

import logging
from typing import Optional, Sequence

from config import OllamaRoute
from llm_gateway import HttpClient, generate, resolve_model
from observability import log_event, span
from portfolio.models import ConversationMessage
from prompt_compiler import InterviewReply, build_generate_request, build_interview_prompt, extract_completion

INTERVIEW_SYSTEM = "You are a friendly interviewer collecting portfolio details. Ask one question at a time."


logger = logging.getLogger(__name__)


def run_interview_turn(
    section: str,
    messages: Sequence[ConversationMessage],
    *,
    route: OllamaRoute,
    client: Optional[HttpClient] = None,
) -> InterviewReply:
    """Advance an interview by one model reply.

    Raises:
        UnknownSectionError: If ``section`` is not work, education or projects.
        LlmGatewayError: If the generation endpoint fails.
    """

    prompt = build_interview_prompt(section, messages)
    logger.debug("Compiled interview prompt section=%s turns=%d", section, len(messages))
    model = resolve_model(route, client=client)
    request = build_generate_request(model, prompt, options=route.options, system=INTERVIEW_SYSTEM)
    with span("interview_turn", section, route=route.name, model=model):
        result = generate(request, route=route, client=client)
    reply = extract_completion(result.response)
    if reply.completed:
        log_event("interview_completed", section, completed=True, model=model)
    return reply


__all__ = ["INTERVIEW_SYSTEM", "run_interview_turn"]
