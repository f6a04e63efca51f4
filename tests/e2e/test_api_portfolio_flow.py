import pytest
from fastapi.testclient import TestClient

from api_server import app


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


def _register(client: TestClient) -> int:
    resp = client.post(
        "/api/register",
        json={"username": "jane", "email": "jane@example.com", "password": "secret1"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "User created successfully"
    return body["userId"]


def test_register_login_and_edit_portfolio(client, sample_record) -> None:
    user_id = _register(client)

    login = client.post("/api/login", json={"email": "jane@example.com", "password": "secret1"})
    assert login.status_code == 200
    assert login.json() == {"user": {"id": user_id, "username": "jane", "email": "jane@example.com"}}

    payload = sample_record.to_api()
    payload["userId"] = user_id
    saved = client.put("/api/portfolio", json=payload)
    assert saved.status_code == 200
    assert saved.json() == {"message": "Portfolio updated successfully"}

    fetched = client.get("/api/portfolio/jane")
    assert fetched.status_code == 200
    body = fetched.json()
    assert body["personal"]["name"] == "Jane Doe"
    assert [job["company"] for job in body["workExperience"]] == ["Acme", "Globex"]
    assert body["projects"][0]["githubUrl"] == "https://github.com/jane/ledger"
    assert body["skills"]["data"] == ["PostgreSQL"]

    pdf = client.get("/api/portfolio/jane/pdf")
    assert pdf.status_code == 200
    assert pdf.headers["content-type"] == "application/pdf"
    assert "jane-doe-portfolio.pdf" in pdf.headers["content-disposition"]
    assert pdf.content.startswith(b"%PDF")


def test_registration_validation(client) -> None:
    missing = client.post("/api/register", json={"username": "jane", "email": "", "password": "secret1"})
    assert missing.status_code == 400
    short = client.post("/api/register", json={"username": "jane", "email": "j@example.com", "password": "abc"})
    assert short.status_code == 400
    assert "at least 6" in short.json()["detail"]
    _register(client)
    duplicate = client.post(
        "/api/register", json={"username": "jane", "email": "jane@example.com", "password": "secret1"}
    )
    assert duplicate.status_code == 409


def test_bad_credentials(client) -> None:
    _register(client)
    wrong = client.post("/api/login", json={"email": "jane@example.com", "password": "nope-nope"})
    assert wrong.status_code == 401
    unknown = client.post("/api/login", json={"email": "ghost@example.com", "password": "secret1"})
    assert unknown.status_code == 401


def test_portfolio_update_guards(client) -> None:
    assert client.put("/api/portfolio", json={"personal": {"name": "X"}}).status_code == 401
    assert client.put("/api/portfolio", json={"userId": 404, "personal": {"name": "X"}}).status_code == 404
    assert client.get("/api/portfolio/ghost").status_code == 404
    assert client.get("/api/portfolio/ghost/pdf").status_code == 404


def test_portfolio_update_rejects_string_skills(client) -> None:
    user_id = _register(client)
    resp = client.put("/api/portfolio", json={"userId": user_id, "skills": {"backend": "Python"}})
    assert resp.status_code == 422
    assert client.get("/api/portfolio/jane").json()["skills"] == {}
