from __future__ import annotations  # Conversational interviewer prompts for the dashboard editor

import json
from textwrap import dedent
from typing import Dict, List, Literal, Sequence

from portfolio.models import ConversationMessage

Section = Literal["work", "education", "projects"]


class UnknownSectionError(ValueError):  # Section is not one of work/education/projects
    pass


_RULES = dedent(
    """
    RULES:
    1. Ask exactly one question per reply.
    2. Keep questions short, friendly and conversational.
    3. Do not output JSON until every required detail has been collected.
    4. Use only the user's own words for the final record; do not invent details.
    """
).strip()

_SECTIONS: Dict[str, Dict[str, object]] = {
    "work": {
        "topic": "their work experience",
        "collect": "job title, company name, time period, location, responsibilities and technologies used",
        "opening": "What was your most recent job title?",
        "followups": [
            "Which company did you work for?",
            "When did you work there? (start and end dates)",
            "Where was the company located?",
            "What were your main responsibilities? (two or three key ones)",
            "Which technologies or tools did you use?",
        ],
        "example": {
            "position": "Software Engineer",
            "company": "Tech Corp",
            "period": "Jan 2020 - Dec 2022",
            "location": "San Francisco, CA",
            "description": ["Built scalable APIs", "Led a team of 3 developers"],
            "tags": ["React", "Node.js", "AWS"],
        },
    },
    "education": {
        "topic": "their education",
        "collect": "degree or program, institution name, time period, location and achievements",
        "opening": "What degree or program did you complete?",
        "followups": [
            "Which university or institution was it?",
            "When did you attend? (start and end years)",
            "Where is the institution located?",
            "What were your key achievements or activities? (honors, GPA, clubs)",
        ],
        "example": {
            "degree": "Bachelor of Science in Computer Science",
            "institution": "Stanford University",
            "period": "2016 - 2020",
            "location": "Stanford, CA",
            "description": ["Graduated with Honors (3.8 GPA)", "President of Coding Club"],
        },
    },
    "projects": {
        "topic": "their projects",
        "collect": "project name, description, technologies used and optional live or GitHub URLs",
        "opening": "What's the name of your project?",
        "followups": [
            "What does the project do? (a brief description)",
            "Which technologies or tools did you build it with?",
            "Is it deployed anywhere? What's the live URL? (optional)",
            "Is the code on GitHub? What's the repository URL? (optional)",
        ],
        "example": {
            "title": "Task Manager App",
            "description": "A full-stack todo application with user authentication",
            "technologies": ["React", "Node.js", "MongoDB"],
            "liveUrl": "https://taskmanager.example.com",
            "githubUrl": "https://github.com/user/task-manager",
            "image": "",
        },
    },
}

SECTIONS: Sequence[str] = tuple(_SECTIONS)


def section_prompt(section: str) -> str:
    """Interviewer instructions for ``section``.

    Raises:
        UnknownSectionError: If ``section`` is not a supported section.
    """

    spec = _SECTIONS.get(section)
    if spec is None:
        raise UnknownSectionError(f"Invalid section: {section!r}")
    followups = "\n".join(f"- {question}" for question in spec["followups"])  # type: ignore[union-attr]
    example = json.dumps({"completed": True, "data": spec["example"]}, indent=2)
    return (
        f"You are an AI interviewer helping someone document {spec['topic']} for their portfolio.\n\n"
        f"{_RULES}\n\n"
        f"You need to collect: {spec['collect']}.\n\n"
        f'Start the interview by asking: "{spec["opening"]}"\n\n'
        f"After each answer, ask the next relevant question:\n{followups}\n\n"
        "Only when you have collected ALL of this information, reply with a JSON object "
        f"in this exact format:\n{example}"
    )


def render_history(messages: Sequence[ConversationMessage]) -> str:
    if not messages:
        return ""
    lines: List[str] = ["Conversation so far:"]
    for message in messages:
        speaker = "User" if message.role == "user" else "Assistant"
        lines.append(f"{speaker}: {message.content}")
    return "\n".join(lines) + "\n"


def build_interview_prompt(section: str, messages: Sequence[ConversationMessage]) -> str:
    return f"{section_prompt(section)}\n\n{render_history(messages)}\nAssistant:"


__all__ = [
    "SECTIONS",
    "Section",
    "UnknownSectionError",
    "build_interview_prompt",
    "render_history",
    "section_prompt",
]
