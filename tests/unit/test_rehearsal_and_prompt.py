from datetime import date

from config import SamplingOptions
from portfolio.models import PortfolioRecord
from prompt_compiler import (
    SYSTEM_INSTRUCTION,
    build_enrichment,
    build_generate_request,
    build_prompt,
    generate_rehearsal,
    render_rehearsal,
)
from prompt_compiler.request_builder import MISSING_REPLY, OFF_TOPIC_REPLY

TODAY = date(2024, 6, 1)


def test_rehearsal_expands_jobs_projects_and_skills(sample_record) -> None:
    pairs = {pair.question: pair.answer for pair in generate_rehearsal(sample_record)}
    assert pairs["What did you do at Acme?"] == "I worked as Senior Engineer at Acme from Apr 2023 - Present."
    assert pairs["What were your responsibilities as Senior Engineer at Acme?"] == (
        "Led the billing rewrite; Mentored two engineers."
    )
    assert pairs["What technologies did you use at Globex?"] == "At Globex I used Go."
    assert pairs["Where did you study BSc Computer Science?"] == (
        "I studied BSc Computer Science at TU Berlin (2016 - 2019)."
    )
    assert pairs["Tell me about Ledger."] == "Ledger: Double-entry bookkeeping API. Built with Python, FastAPI."
    assert pairs["What are your backend skills?"] == "My backend skills are python, go."
    assert "Are there gaps in your work history?" not in pairs


def test_rehearsal_mentions_gaps_without_explaining_them(sample_record) -> None:
    pairs = generate_rehearsal(sample_record, ["Gap of ~13 months between A and B"])
    assert pairs[-1].question == "Are there gaps in your work history?"
    assert "Gap of ~13 months between A and B" in pairs[-1].answer
    assert pairs[-1].answer.endswith("The portfolio does not explain them.")


def test_render_rehearsal_for_empty_record() -> None:
    assert render_rehearsal(generate_rehearsal(PortfolioRecord())) == "PREPARED ANSWERS:\nNone available"


def test_enrichment_orders_gaps_cross_reference_and_answers(sample_record) -> None:
    text = build_enrichment(sample_record, today=TODAY)
    gaps_at = text.index("EMPLOYMENT GAPS:")
    refs_at = text.index("SKILL CROSS-REFERENCE:")
    answers_at = text.index("PREPARED ANSWERS:")
    assert gaps_at < refs_at < answers_at
    assert "- Gap of ~13 months between Engineer at Globex" in text


def test_enrichment_without_gaps() -> None:
    text = build_enrichment(PortfolioRecord(), today=TODAY)
    assert text.startswith("EMPLOYMENT GAPS:\nNone detected")


def test_prompt_layout(sample_record) -> None:
    prompt = build_prompt(sample_record, "  Where do you work now?  ", today=TODAY)
    assert prompt.startswith("You are conducting a virtual portfolio interview.")
    assert MISSING_REPLY in prompt
    assert OFF_TOPIC_REPLY in prompt
    assert prompt.index("PORTFOLIO INFORMATION:") < prompt.index("EMPLOYMENT GAPS:")
    assert prompt.endswith("User: Where do you work now?\nAssistant:")


def test_generate_request_payload_shape() -> None:
    request = build_generate_request("mistral:7b", "User: hi\nAssistant:")
    payload = request.model_dump(exclude_none=True)
    assert payload == {
        "model": "mistral:7b",
        "prompt": "User: hi\nAssistant:",
        "stream": False,
        "system": SYSTEM_INSTRUCTION,
        "options": {
            "temperature": 0.0,
            "top_p": 0.3,
            "top_k": 5,
            "repeat_penalty": 1.1,
            "num_predict": 200,
        },
    }


def test_generate_request_uses_route_options() -> None:
    options = SamplingOptions(temperature=0.7, top_p=0.9, top_k=40, num_predict=400)
    request = build_generate_request("qwen2.5:0.5b", "p", options=options, system="interviewer")
    assert request.options.temperature == 0.7
    assert request.system == "interviewer"
