import pytest

from portfolio.models import ConversationMessage
from prompt_compiler import (
    CONFIRMATION_MESSAGE,
    SECTIONS,
    UnknownSectionError,
    build_interview_prompt,
    extract_completion,
    section_prompt,
)


def test_completion_block_is_extracted() -> None:
    reply = extract_completion('Here you go: {"completed":true,"data":{"title":"X"}}')
    assert reply.completed is True
    assert reply.data == {"title": "X"}
    assert reply.message == CONFIRMATION_MESSAGE


def test_plain_reply_passes_through() -> None:
    reply = extract_completion("  Which company did you work for?  ")
    assert reply.completed is False
    assert reply.data is None
    assert reply.message == "Which company did you work for?"


def test_malformed_json_is_a_normal_turn() -> None:
    text = "Noted {completed: true, data: oops}"
    reply = extract_completion(text)
    assert reply.completed is False
    assert reply.data is None
    assert reply.message == text


def test_incomplete_block_is_not_completion() -> None:
    text = 'Almost there {"completed": false, "data": {"title": "X"}}'
    reply = extract_completion(text)
    assert reply.completed is False
    assert reply.message == text


def test_completion_requires_object_data() -> None:
    reply = extract_completion('{"completed": true, "data": ["X"]}')
    assert reply.completed is False


def test_section_prompts_cover_each_section() -> None:
    assert tuple(SECTIONS) == ("work", "education", "projects")
    work = section_prompt("work")
    assert 'Start the interview by asking: "What was your most recent job title?"' in work
    assert '"completed": true' in work
    assert '"tags": [' in work
    assert '"githubUrl"' in section_prompt("projects")


def test_unknown_section_raises() -> None:
    with pytest.raises(UnknownSectionError):
        section_prompt("hobbies")
    assert issubclass(UnknownSectionError, ValueError)


def test_interview_prompt_renders_history() -> None:
    messages = [
        ConversationMessage(role="assistant", content="What was your most recent job title?"),
        ConversationMessage(role="user", content="Data Engineer"),
    ]
    prompt = build_interview_prompt("work", messages)
    assert "Conversation so far:\nAssistant: What was your most recent job title?\nUser: Data Engineer\n" in prompt
    assert prompt.endswith("Assistant:")


def test_interview_prompt_without_history() -> None:
    prompt = build_interview_prompt("education", [])
    assert "Conversation so far:" not in prompt
    assert prompt.endswith("\n\nAssistant:")
