from __future__ import annotations  # Portfolio data model and storage public API

from .auth import hash_password, verify_password
from .models import (
    ConversationMessage,
    EducationEntry,
    PersonalInfo,
    PortfolioRecord,
    ProjectEntry,
    SocialLink,
    WorkExperienceEntry,
    description_lines,
)
from .store import DuplicateUserError, PortfolioStore, UserRecord

__all__ = [
    "ConversationMessage",
    "DuplicateUserError",
    "EducationEntry",
    "PersonalInfo",
    "PortfolioRecord",
    "PortfolioStore",
    "ProjectEntry",
    "SocialLink",
    "UserRecord",
    "WorkExperienceEntry",
    "description_lines",
    "hash_password",
    "verify_password",
]
