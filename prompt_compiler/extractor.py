"""Completion detection in interview replies."""
from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional

from pydantic import BaseModel

CONFIRMATION_MESSAGE = (
    "Great! I've collected all the information. You can review and edit it before saving."
)

_BLOCK_RE = re.compile(r"\{[\s\S]*\}")


class InterviewReply(BaseModel):
    message: str
    completed: bool = False
    data: Optional[Dict[str, Any]] = None


def extract_completion(reply: str) -> InterviewReply:
    """Detect a finished record in ``reply``.

    Malformed JSON-looking text is not an error: the reply is passed through
    as an ordinary conversational turn.
    """

    text = (reply or "").strip()
    match = _BLOCK_RE.search(text)
    if match is None:
        return InterviewReply(message=text)
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError:
        return InterviewReply(message=text)
    if not isinstance(payload, dict):
        return InterviewReply(message=text)
    data = payload.get("data")
    if payload.get("completed") is True and isinstance(data, dict):
        return InterviewReply(message=CONFIRMATION_MESSAGE, completed=True, data=data)
    return InterviewReply(message=text)


__all__ = ["CONFIRMATION_MESSAGE", "InterviewReply", "extract_completion"]
