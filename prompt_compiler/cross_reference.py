"""Skill cross-reference: which jobs and projects used each listed skill."""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from portfolio.models import PortfolioRecord

from .skills import format_years, parse_skill_spec


class SkillReference(BaseModel):
    category: str
    proficiency: Optional[int] = None
    years: Optional[float] = None
    notes: Optional[str] = None
    jobs: List[str] = Field(default_factory=list)
    projects: List[str] = Field(default_factory=list)


def skill_matches(skill: str, tag: str) -> bool:
    """Case-insensitive match where either side may be a prefix of the other."""

    left = skill.strip().lower()
    right = tag.strip().lower()
    if not left or not right:
        return False
    return left.startswith(right) or right.startswith(left)


def build_cross_reference(record: PortfolioRecord) -> Dict[str, SkillReference]:
    refs: Dict[str, SkillReference] = {}
    for category, specs in record.skills.items():
        for spec in specs:
            parsed = parse_skill_spec(spec)
            if not parsed.name or parsed.name in refs:
                continue
            refs[parsed.name] = SkillReference(
                category=category,
                proficiency=parsed.proficiency,
                years=parsed.years,
                notes=parsed.notes,
            )

    for name, ref in refs.items():
        for job in record.work_experience:
            if any(skill_matches(name, tag) for tag in job.tags):
                ref.jobs.append(job.label)
        for project in record.projects:
            if any(skill_matches(name, tech) for tech in project.technologies):
                ref.projects.append(project.title or "Untitled project")
    return refs


def render_cross_reference(refs: Dict[str, SkillReference]) -> str:
    if not refs:
        return "SKILL CROSS-REFERENCE:\nNo skills listed"
    blocks: List[str] = ["SKILL CROSS-REFERENCE:"]
    for name, ref in refs.items():
        proficiency = f"{ref.proficiency}%" if ref.proficiency is not None else "Not specified"
        blocks.append(
            "\n".join(
                [
                    f"SKILL: {name}",
                    f"CATEGORY: {ref.category}",
                    f"PROFICIENCY: {proficiency}",
                    f"YEARS: {format_years(ref.years)}",
                    f"NOTES: {ref.notes or 'Not specified'}",
                    f"USED AT JOBS: {', '.join(ref.jobs) or 'None listed'}",
                    f"USED IN PROJECTS: {', '.join(ref.projects) or 'None listed'}",
                ]
            )
        )
    return "\n\n".join(blocks)


__all__ = ["SkillReference", "build_cross_reference", "render_cross_reference", "skill_matches"]
