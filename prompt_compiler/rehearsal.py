"""Canned question/answer rehearsal pairs expanded from portfolio records."""
from __future__ import annotations

from typing import List, Sequence

from pydantic import BaseModel

from portfolio.models import PortfolioRecord, description_lines

from .skills import parse_skill_spec


class QAPair(BaseModel):
    question: str
    answer: str


def _or_unknown(value: str) -> str:
    return value.strip() or "Not specified"


def generate_rehearsal(record: PortfolioRecord, gaps: Sequence[str] = ()) -> List[QAPair]:
    pairs: List[QAPair] = []

    for job in record.work_experience:
        company = _or_unknown(job.company)
        position = _or_unknown(job.position)
        period = _or_unknown(job.period)
        pairs.append(
            QAPair(
                question=f"What did you do at {company}?",
                answer=f"I worked as {position} at {company} from {period}.",
            )
        )
        duties = description_lines(job.description)
        if duties:
            pairs.append(
                QAPair(
                    question=f"What were your responsibilities as {position} at {company}?",
                    answer="; ".join(line.rstrip(".") for line in duties) + ".",
                )
            )
        if job.tags:
            pairs.append(
                QAPair(
                    question=f"What technologies did you use at {company}?",
                    answer=f"At {company} I used {', '.join(job.tags)}.",
                )
            )

    for edu in record.education:
        institution = _or_unknown(edu.institution)
        pairs.append(
            QAPair(
                question=f"Where did you study {_or_unknown(edu.degree)}?",
                answer=f"I studied {_or_unknown(edu.degree)} at {institution} ({_or_unknown(edu.period)}).",
            )
        )
        highlights = description_lines(edu.description)
        if highlights:
            pairs.append(
                QAPair(
                    question=f"What did you achieve at {institution}?",
                    answer="; ".join(line.rstrip(".") for line in highlights) + ".",
                )
            )

    for project in record.projects:
        title = _or_unknown(project.title)
        tech = ", ".join(project.technologies) or "Not specified"
        pairs.append(
            QAPair(
                question=f"Tell me about {title}.",
                answer=f"{title}: {_or_unknown(project.description)} Built with {tech}.",
            )
        )

    for category, specs in record.skills.items():
        names = [parse_skill_spec(spec).name for spec in specs]
        names = [name for name in names if name]
        if not names:
            continue
        pairs.append(
            QAPair(
                question=f"What are your {category} skills?",
                answer=f"My {category} skills are {', '.join(names)}.",
            )
        )

    if gaps:
        pairs.append(
            QAPair(
                question="Are there gaps in your work history?",
                answer="The portfolio shows these gaps: "
                + "; ".join(gaps)
                + ". The portfolio does not explain them.",
            )
        )
    return pairs


def render_rehearsal(pairs: Sequence[QAPair]) -> str:
    if not pairs:
        return "PREPARED ANSWERS:\nNone available"
    lines = ["PREPARED ANSWERS:"]
    for pair in pairs:
        lines.append(f"Q: {pair.question}\nA: {pair.answer}")
    return "\n\n".join(lines)


__all__ = ["QAPair", "generate_rehearsal", "render_rehearsal"]
