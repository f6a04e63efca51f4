from __future__ import annotations  # Final prompt and generation payload assembly

from datetime import date
from textwrap import dedent
from typing import Optional

from config import SamplingOptions
from llm_gateway import GenerateRequest
from portfolio.models import PortfolioRecord

from .context_builder import build_context
from .cross_reference import build_cross_reference, render_cross_reference
from .gaps import detect_gaps
from .rehearsal import generate_rehearsal, render_rehearsal

SYSTEM_INSTRUCTION = (
    "You answer questions about one person's portfolio. Use only facts stated in the "
    "provided portfolio information. Do not add details that are not stated. Copy names, "
    "titles, dates and technologies exactly as written."
)

OFF_TOPIC_REPLY = (
    "Let's keep our discussion focused on the portfolio. I'd be happy to discuss their work "
    "experience, projects, skills, or education. What would you like to explore?"
)

MISSING_REPLY = "I don't have that information in this portfolio."

INSTRUCTIONS = dedent(
    f"""
    You are conducting a virtual portfolio interview. You can only discuss what is documented
    in the portfolio below.

    STRICT RULES:
    1. Copy facts exactly as written in the labeled fields (POSITION:, COMPANY:, START:, END:, ...).
    2. Never paraphrase, estimate or invent names, dates, numbers or technologies.
    3. A field marked "Not specified" is unknown. Say so instead of guessing.
    4. If the answer is not in the portfolio, reply exactly: "{MISSING_REPLY}"
    5. Do not answer general knowledge questions, give coding help or share opinions.
    6. For off-topic questions, reply: "{OFF_TOPIC_REPLY}"
    7. Keep answers short: two or three sentences.
    """
).strip()


def build_enrichment(record: PortfolioRecord, *, today: Optional[date] = None) -> str:
    gaps = detect_gaps(record.work_experience, today=today)
    gap_block = "EMPLOYMENT GAPS:\n" + ("\n".join(f"- {gap}" for gap in gaps) if gaps else "None detected")
    refs = render_cross_reference(build_cross_reference(record))
    rehearsal = render_rehearsal(generate_rehearsal(record, gaps))
    return "\n\n".join([gap_block, refs, rehearsal])


def build_prompt(record: PortfolioRecord, message: str, *, today: Optional[date] = None) -> str:
    """instructions + context + enrichment + ``User: ...\\nAssistant:``."""

    return (
        f"{INSTRUCTIONS}\n\n"
        f"{build_context(record)}\n\n"
        f"{build_enrichment(record, today=today)}\n\n"
        f"User: {message.strip()}\nAssistant:"
    )


def build_generate_request(
    model: str,
    prompt: str,
    *,
    options: Optional[SamplingOptions] = None,
    system: str = SYSTEM_INSTRUCTION,
) -> GenerateRequest:
    return GenerateRequest(
        model=model,
        prompt=prompt,
        stream=False,
        system=system,
        options=options if options is not None else SamplingOptions(),
    )


__all__ = [
    "INSTRUCTIONS",
    "MISSING_REPLY",
    "OFF_TOPIC_REPLY",
    "SYSTEM_INSTRUCTION",
    "build_enrichment",
    "build_generate_request",
    "build_prompt",
]
