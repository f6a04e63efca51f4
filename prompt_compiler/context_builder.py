"""Labeled grounding context built from a portfolio record."""
from __future__ import annotations

from typing import List, Optional, Sequence

from portfolio.models import (
    EducationEntry,
    PersonalInfo,
    PortfolioRecord,
    ProjectEntry,
    SocialLink,
    WorkExperienceEntry,
    description_lines,
)

from .dates import split_period
from .skills import format_years, parse_skill_spec

NOT_SPECIFIED = "Not specified"
RULE = "=" * 52


def _value(text: Optional[str]) -> str:
    if text is None:
        return NOT_SPECIFIED
    cleaned = str(text).strip()
    return cleaned or NOT_SPECIFIED


def _bullets(lines: Sequence[str]) -> str:
    if not lines:
        return NOT_SPECIFIED
    return "\n" + "\n".join(f"  - {line}" for line in lines)


def _joined(items: Sequence[str]) -> str:
    cleaned = [item.strip() for item in items if item and item.strip()]
    return ", ".join(cleaned) or NOT_SPECIFIED


def _personal_block(personal: PersonalInfo) -> str:
    return "\n".join(
        [
            "PERSONAL INFORMATION:",
            f"NAME: {_value(personal.name)}",
            f"TITLE: {_value(personal.title)}",
            f"LOCATION: {_value(personal.location)}",
            f"EMAIL: {_value(personal.email)}",
            f"BIO: {_value(personal.bio)}",
        ]
    )


def _work_block(index: int, job: WorkExperienceEntry) -> str:
    start, end = split_period(job.period)
    return "\n".join(
        [
            f"JOB {index}:",
            f"POSITION: {_value(job.position)}",
            f"COMPANY: {_value(job.company)}",
            f"LOCATION: {_value(job.location)}",
            f"START: {start}",
            f"END: {end}",
            f"PERIOD: {_value(job.period)}",
            f"RESPONSIBILITIES: {_bullets(description_lines(job.description))}",
            f"TECHNOLOGIES: {_joined(job.tags)}",
        ]
    )


def _education_block(index: int, edu: EducationEntry) -> str:
    start, end = split_period(edu.period)
    return "\n".join(
        [
            f"EDUCATION {index}:",
            f"DEGREE: {_value(edu.degree)}",
            f"INSTITUTION: {_value(edu.institution)}",
            f"LOCATION: {_value(edu.location)}",
            f"START: {start}",
            f"END: {end}",
            f"ACHIEVEMENTS: {_bullets(description_lines(edu.description))}",
        ]
    )


def _project_block(index: int, project: ProjectEntry) -> str:
    return "\n".join(
        [
            f"PROJECT {index}:",
            f"TITLE: {_value(project.title)}",
            f"DESCRIPTION: {_value(project.description)}",
            f"TECHNOLOGIES: {_joined(project.technologies)}",
            f"LIVE URL: {_value(project.live_url)}",
            f"GITHUB URL: {_value(project.github_url)}",
        ]
    )


def _skill_line(spec: str) -> str:
    parsed = parse_skill_spec(spec)
    details: List[str] = []
    if parsed.proficiency is not None:
        details.append(f"{parsed.proficiency}%")
    if parsed.years is not None:
        details.append(f"{format_years(parsed.years)} yrs")
    if parsed.notes:
        details.append(parsed.notes)
    suffix = f" ({'; '.join(details)})" if details else ""
    return f"  - {parsed.name}{suffix}"


def _skills_block(skills: dict) -> str:
    lines = ["SKILLS:"]
    listed = False
    for category, specs in skills.items():
        usable = [spec for spec in specs if spec and spec.strip()]
        if not usable:
            continue
        listed = True
        lines.append(f"CATEGORY: {category}")
        lines.extend(_skill_line(spec) for spec in usable)
    if not listed:
        lines.append("No skills listed")
    return "\n".join(lines)


def _social_block(links: Sequence[SocialLink]) -> str:
    lines = ["SOCIAL LINKS:"]
    if not links:
        lines.append("No social links listed")
    for link in links:
        lines.append(f"LINK: {_value(link.name)} -> {_value(link.url)}")
    return "\n".join(lines)


def _section(title: str, blocks: List[str], empty: str) -> str:
    if not blocks:
        return f"{title}:\n{empty}"
    return f"{title}:\n" + "\n\n".join(blocks)


def build_context(record: PortfolioRecord) -> str:
    """Render every field with an explicit label; absent values become sentinels."""

    sections = [
        _personal_block(record.personal),
        _section(
            "WORK EXPERIENCE",
            [_work_block(i, job) for i, job in enumerate(record.work_experience, start=1)],
            "No work experience listed",
        ),
        _section(
            "EDUCATION",
            [_education_block(i, edu) for i, edu in enumerate(record.education, start=1)],
            "No education listed",
        ),
        _section(
            "PROJECTS",
            [_project_block(i, project) for i, project in enumerate(record.projects, start=1)],
            "No projects listed",
        ),
        _skills_block(record.skills),
        _social_block(record.social_links),
    ]
    return "PORTFOLIO INFORMATION:\n" + RULE + "\n" + f"\n{RULE}\n".join(sections) + "\n" + RULE


__all__ = ["NOT_SPECIFIED", "build_context"]
