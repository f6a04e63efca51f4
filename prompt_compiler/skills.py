"""Skill spec parsing: ``name[: proficiency%][ | years yrs][ | notes]``."""
from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel

_PROFICIENCY_RE = re.compile(r"^\s*(\d{1,3})\s*%?\s*$")
_YEARS_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(?:\+\s*)?(?:yrs?|years?)\.?\s*$", re.IGNORECASE)


class ParsedSkill(BaseModel):
    name: str
    proficiency: Optional[int] = None
    years: Optional[float] = None
    notes: Optional[str] = None


def parse_skill_spec(spec: str) -> ParsedSkill:
    """Parse a skill spec; unknown parts are left as ``None``."""

    parts = [part.strip() for part in (spec or "").split("|")]
    head = parts[0] if parts else ""
    name, _, level = head.partition(":")
    proficiency: Optional[int] = None
    level_match = _PROFICIENCY_RE.match(level) if level else None
    if level_match:
        proficiency = min(int(level_match.group(1)), 100)
    elif level.strip():
        # "C: the language" is a name, not a proficiency
        name = head

    years: Optional[float] = None
    notes: list[str] = []
    for part in parts[1:]:
        if not part:
            continue
        years_match = _YEARS_RE.match(part)
        if years is None and years_match:
            years = float(years_match.group(1))
        else:
            notes.append(part)

    return ParsedSkill(
        name=name.strip().lower() or (spec or "").strip().lower(),
        proficiency=proficiency,
        years=years,
        notes=" | ".join(notes) or None,
    )


def format_years(years: Optional[float]) -> str:
    if years is None:
        return "Not specified"
    return f"{int(years)}" if float(years).is_integer() else f"{years:g}"


__all__ = ["ParsedSkill", "format_years", "parse_skill_spec"]
