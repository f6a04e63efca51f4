"""Pydantic schemas for the portfolio API."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from portfolio.models import ConversationMessage, PortfolioRecord


class ChatReq(BaseModel):
    message: str = Field(min_length=1)
    username: Optional[str] = None
    portfolio: Optional[PortfolioRecord] = None


class ChatResp(BaseModel):
    message: str
    model: str


class InterviewReq(BaseModel):
    section: str
    messages: List[ConversationMessage] = Field(default_factory=list)


class InterviewResp(BaseModel):
    message: str
    completed: bool
    data: Optional[Dict[str, Any]] = None


class PortfolioUpdateReq(PortfolioRecord):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: Optional[int] = Field(default=None, alias="userId")

    def record(self) -> PortfolioRecord:
        return PortfolioRecord.model_validate(self.model_dump(exclude={"user_id"}))


class RegisterReq(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""


class RegisterResp(BaseModel):
    message: str
    userId: int


class LoginReq(BaseModel):
    email: str
    password: str


class UserPayload(BaseModel):
    id: int
    username: str
    email: str


class LoginResp(BaseModel):
    user: UserPayload


class MessageResp(BaseModel):
    message: str


class OllamaStatusResp(BaseModel):
    available: bool
    models: List[str] = Field(default_factory=list)
