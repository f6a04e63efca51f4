"""FastAPI routes for portfolio chat, interviews, storage and accounts."""
from __future__ import annotations

import logging
import re

from fastapi import APIRouter, HTTPException, Response

from api.schemas import (
    ChatReq,
    ChatResp,
    InterviewReq,
    InterviewResp,
    LoginReq,
    LoginResp,
    MessageResp,
    OllamaStatusResp,
    PortfolioUpdateReq,
    RegisterReq,
    RegisterResp,
    UserPayload,
)
from config import OllamaRoute, load_route
from config.settings import settings
from llm_gateway import GenerationUnavailableError, LlmGatewayError, list_models
from observability import log_event
from portfolio import DuplicateUserError, PortfolioRecord, PortfolioStore, hash_password, verify_password
from prompt_compiler import UnknownSectionError
from services import answer_question, generate_portfolio_pdf, run_interview_turn


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

CHAT_UNAVAILABLE = "Ollama service is not available. Please make sure Ollama is running."
INTERVIEW_UNAVAILABLE = "The interview assistant is not available right now. Please try again later."


def _store() -> PortfolioStore:  # Construct portfolio store bound to settings.DB_PATH
    return PortfolioStore()


def _route(name: str) -> OllamaRoute:  # Resolve a generation route from app config
    return load_route(name)


def _safe_slug(value: str) -> str:
    return re.sub(r"[^A-Za-z0-9]+", "-", value).strip("-").lower()


@router.post("/chat", response_model=ChatResp)
def chat(req: ChatReq) -> ChatResp:
    record = req.portfolio
    subject = req.username or "anonymous"
    if record is None:
        if not req.username:
            raise HTTPException(status_code=400, detail="Either portfolio or username is required")
        record = _store().load_portfolio(req.username)
        if record is None:
            raise HTTPException(status_code=404, detail="Portfolio not found")
    try:
        answer = answer_question(req.message, record, route=_route("chat"), subject=subject)
    except GenerationUnavailableError as exc:
        logger.error("Chat generation unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=CHAT_UNAVAILABLE) from exc
    except LlmGatewayError as exc:
        logger.exception("LLM request failed")
        raise HTTPException(status_code=502, detail="Failed to generate response") from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error during chat")
        raise HTTPException(status_code=500, detail="Unable to answer question") from exc
    return ChatResp(message=answer.message, model=answer.model)


@router.post("/ollama-interview", response_model=InterviewResp)
def ollama_interview(req: InterviewReq) -> InterviewResp:
    try:
        reply = run_interview_turn(req.section, req.messages, route=_route("interview"))
    except UnknownSectionError as exc:
        raise HTTPException(status_code=400, detail="Invalid section") from exc
    except GenerationUnavailableError as exc:
        logger.error("Interview generation unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=INTERVIEW_UNAVAILABLE) from exc
    except LlmGatewayError as exc:
        logger.exception("Interview agent failed")
        raise HTTPException(status_code=502, detail="Failed to generate response") from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error during interview turn")
        raise HTTPException(status_code=500, detail="Unable to continue interview") from exc
    return InterviewResp(message=reply.message, completed=reply.completed, data=reply.data)


@router.get("/portfolio/{username}")
def get_portfolio(username: str) -> dict:
    record = _store().load_portfolio(username)
    if record is None:
        raise HTTPException(status_code=404, detail="Portfolio not found")
    return record.to_api()


@router.put("/portfolio", response_model=MessageResp)
def update_portfolio(req: PortfolioUpdateReq) -> MessageResp:
    if req.user_id is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    store = _store()
    if not store.user_exists(req.user_id):
        raise HTTPException(status_code=404, detail="User not found")
    record: PortfolioRecord = req.record()
    if not store.replace_portfolio(req.user_id, record):
        raise HTTPException(status_code=404, detail="Portfolio not found")
    log_event(
        "portfolio_updated",
        str(req.user_id),
        status="saved",
        jobs=len(record.work_experience),
        projects=len(record.projects),
    )
    return MessageResp(message="Portfolio updated successfully")


@router.get("/portfolio/{username}/pdf")
def portfolio_pdf(username: str) -> Response:
    record = _store().load_portfolio(username)
    if record is None:
        raise HTTPException(status_code=404, detail="Portfolio not found")
    payload = generate_portfolio_pdf(record)
    filename = f"{_safe_slug(record.personal.name) or _safe_slug(username) or 'portfolio'}-portfolio.pdf"
    headers = {"Content-Disposition": f"attachment; filename=\"{filename}\""}
    return Response(content=payload, media_type="application/pdf", headers=headers)


@router.post("/register", response_model=RegisterResp, status_code=201)
def register(req: RegisterReq) -> RegisterResp:
    username, email = req.username.strip(), req.email.strip()
    if not username or not email or not req.password:
        raise HTTPException(status_code=400, detail="All fields are required")
    if len(req.password) < settings.MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters",
        )
    try:
        user = _store().create_user(username=username, email=email, password_hash=hash_password(req.password))
    except DuplicateUserError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    log_event("user_registered", user.username, status="created")
    return RegisterResp(message="User created successfully", userId=user.id)


@router.post("/login", response_model=LoginResp)
def login(req: LoginReq) -> LoginResp:
    found = _store().find_credentials(req.email.strip())
    if found is None or not verify_password(req.password, found[1]):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    user = found[0]
    return LoginResp(user=UserPayload(id=user.id, username=user.username, email=user.email))


@router.get("/ollama/status", response_model=OllamaStatusResp)
def ollama_status() -> OllamaStatusResp:
    try:
        models = list_models(_route("chat"))
    except LlmGatewayError as exc:
        logger.warning("Ollama status check failed: %s", exc)
        return OllamaStatusResp(available=False)
    return OllamaStatusResp(available=True, models=models)
