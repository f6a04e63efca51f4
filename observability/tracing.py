"""Timing span that reports elapsed milliseconds as an event."""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from .logger import log_event


@contextmanager
def span(name: str, subject: str, **fields: Any) -> Iterator[Dict[str, Any]]:
    """Time the block; callers may add fields to the yielded dict before exit."""

    extra: Dict[str, Any] = dict(fields)
    start = time.perf_counter()
    outcome = "ok"
    try:
        yield extra
    except Exception:
        outcome = "error"
        raise
    finally:
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        log_event(name, subject, ms=elapsed_ms, outcome=outcome, **extra)


__all__ = ["span"]
