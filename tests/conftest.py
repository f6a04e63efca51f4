import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storage.migrate import migrate
from config.settings import settings
from config.routes import OllamaRoute
from portfolio.models import PortfolioRecord


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch):
    td = tempfile.TemporaryDirectory()
    db_path = os.path.join(td.name, "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    monkeypatch.setattr(settings, "APP_CONFIG_PATH", os.path.join(td.name, "missing.json"), raising=False)
    migrate(db_path)
    try:
        yield
    finally:
        td.cleanup()


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeOllama:
    """Records calls and answers like a local Ollama server."""

    def __init__(
        self,
        *,
        installed: Optional[List[str]] = None,
        reply: str = "Stub answer.",
        generate_status: int = 200,
        tags_error: Optional[Exception] = None,
        generate_error: Optional[Exception] = None,
    ) -> None:
        self.installed = ["mistral:7b", "qwen2.5:0.5b"] if installed is None else installed
        self.reply = reply
        self.generate_status = generate_status
        self.tags_error = tags_error
        self.generate_error = generate_error
        self.posts: List[Dict[str, Any]] = []
        self.gets: List[str] = []

    def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> FakeResponse:
        self.posts.append({"url": url, "json": json, "timeout": timeout})
        if self.generate_error is not None:
            raise self.generate_error
        payload = {"model": json.get("model", ""), "created_at": "2024-01-01T00:00:00Z", "response": self.reply, "done": True}
        return FakeResponse(self.generate_status, payload)

    def get(self, url: str, *, headers: Dict[str, str], timeout: float) -> FakeResponse:
        self.gets.append(url)
        if self.tags_error is not None:
            raise self.tags_error
        return FakeResponse(200, {"models": [{"name": name} for name in self.installed]})


@pytest.fixture
def chat_route() -> OllamaRoute:
    return OllamaRoute(name="chat", base_url="http://ollama.test:11434", timeout_s=5.0)


@pytest.fixture
def sample_record() -> PortfolioRecord:
    return PortfolioRecord.model_validate(
        {
            "personal": {
                "name": "Jane Doe",
                "title": "Backend Engineer",
                "location": "Berlin",
                "bio": "Builds data services.",
                "email": "jane@example.com",
            },
            "workExperience": [
                {
                    "position": "Senior Engineer",
                    "company": "Acme",
                    "location": "Berlin",
                    "period": "Apr 2023 - Present",
                    "description": ["Led the billing rewrite.", "Mentored two engineers."],
                    "tags": ["Python", "PostgreSQL"],
                },
                {
                    "position": "Engineer",
                    "company": "Globex",
                    "location": "Hamburg",
                    "period": "Jan 2020 - Mar 2022",
                    "description": "Built ingestion pipelines.",
                    "tags": ["Go"],
                },
            ],
            "education": [
                {
                    "degree": "BSc Computer Science",
                    "institution": "TU Berlin",
                    "period": "2016 - 2019",
                    "description": ["Thesis on stream processing"],
                }
            ],
            "projects": [
                {
                    "title": "Ledger",
                    "description": "Double-entry bookkeeping API.",
                    "technologies": ["Python", "FastAPI"],
                    "githubUrl": "https://github.com/jane/ledger",
                }
            ],
            "skills": {
                "backend": ["Python: 80% | 5yrs | led backend", "Go: 60%"],
                "data": ["PostgreSQL"],
            },
            "socialLinks": [{"name": "GitHub", "icon": "github", "url": "https://github.com/jane"}],
        }
    )


@pytest.fixture
def fake_ollama():
    return FakeOllama
