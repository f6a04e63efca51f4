"""Request-scoped orchestration for chat, interviews and exports."""
from .chat import ChatAnswer, answer_question
from .interview import run_interview_turn
from .portfolio_pdf import generate_portfolio_pdf

__all__ = ["ChatAnswer", "answer_question", "generate_portfolio_pdf", "run_interview_turn"]
