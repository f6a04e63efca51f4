"""Pydantic models for portfolio records and conversation messages."""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Record(BaseModel):
    """Base for records exchanged with the UI in camelCase JSON."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


class PersonalInfo(_Record):
    name: str = ""
    title: str = ""
    location: str = ""
    bio: str = ""
    email: str = ""
    photo: str = ""
    resume_url: str = Field(default="", alias="resumeUrl")

    @field_validator("*", mode="before")
    @classmethod
    def _blank_none(cls, value: Any) -> Any:
        return _none_to_empty(value)


class WorkExperienceEntry(_Record):
    id: Optional[int] = None
    position: str = ""
    company: str = ""
    location: str = ""
    period: str = ""
    description: Union[str, List[str]] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)

    @field_validator("position", "company", "location", "period", "description", mode="before")
    @classmethod
    def _blank_none(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def label(self) -> str:
        return f"{self.position or 'Unknown position'} at {self.company or 'Unknown company'}"


class EducationEntry(_Record):
    id: Optional[int] = None
    degree: str = ""
    institution: str = ""
    location: str = ""
    period: str = ""
    description: Union[str, List[str]] = Field(default_factory=list)

    @field_validator("degree", "institution", "location", "period", "description", mode="before")
    @classmethod
    def _blank_none(cls, value: Any) -> Any:
        return _none_to_empty(value)


class ProjectEntry(_Record):
    id: Optional[int] = None
    title: str = ""
    description: str = ""
    technologies: List[str] = Field(default_factory=list)
    image: str = ""
    live_url: str = Field(default="", alias="liveUrl")
    github_url: str = Field(default="", alias="githubUrl")

    @field_validator("title", "description", "image", "live_url", "github_url", mode="before")
    @classmethod
    def _blank_none(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @field_validator("technologies", mode="before")
    @classmethod
    def _tech_list(cls, value: Any) -> Any:
        return [] if value is None else value


class SocialLink(_Record):
    name: str = ""
    icon: str = ""
    url: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _blank_none(cls, value: Any) -> Any:
        return _none_to_empty(value)


class PortfolioRecord(_Record):
    """Grounding fact base for one conversation turn."""

    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    work_experience: List[WorkExperienceEntry] = Field(default_factory=list, alias="workExperience")
    education: List[EducationEntry] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)
    skills: Dict[str, List[str]] = Field(default_factory=dict)
    social_links: List[SocialLink] = Field(default_factory=list, alias="socialLinks")

    @field_validator("personal", mode="before")
    @classmethod
    def _personal_default(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("work_experience", "education", "projects", "social_links", mode="before")
    @classmethod
    def _list_default(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("skills", mode="before")
    @classmethod
    def _skills_default(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {key: ([] if items is None else items) for key, items in value.items()}
        return value

    def to_api(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ConversationMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


def description_lines(description: Union[str, List[str], None]) -> List[str]:
    """Normalize a free-text or list description into non-empty lines."""

    if description is None:
        return []
    if isinstance(description, str):
        return [line.strip() for line in description.splitlines() if line.strip()]
    return [str(item).strip() for item in description if str(item).strip()]


__all__ = [
    "ConversationMessage",
    "EducationEntry",
    "PersonalInfo",
    "PortfolioRecord",
    "ProjectEntry",
    "SocialLink",
    "WorkExperienceEntry",
    "description_lines",
]
