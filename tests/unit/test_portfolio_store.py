import sqlite3

import pytest

from config.settings import settings
from portfolio import DuplicateUserError, PortfolioRecord, PortfolioStore, hash_password, verify_password


def _register(store: PortfolioStore, username: str = "jane", email: str = "jane@example.com"):
    return store.create_user(username=username, email=email, password_hash=hash_password("secret1"))


def test_password_hash_round_trip() -> None:
    stored = hash_password("secret1")
    assert stored.startswith("pbkdf2_sha256$")
    assert verify_password("secret1", stored)
    assert not verify_password("secret2", stored)
    assert not verify_password("secret1", "garbage")
    assert hash_password("secret1") != stored


def test_new_user_gets_empty_portfolio() -> None:
    store = PortfolioStore()
    user = _register(store)
    record = store.load_portfolio("jane")
    assert record is not None
    assert record.personal.name == ""
    assert record.personal.email == user.email
    assert record.work_experience == []
    assert record.skills == {}


def test_duplicate_username_or_email_is_rejected() -> None:
    store = PortfolioStore()
    _register(store)
    with pytest.raises(DuplicateUserError):
        _register(store, username="jane", email="other@example.com")
    with pytest.raises(DuplicateUserError):
        _register(store, username="other", email="jane@example.com")


def test_find_credentials() -> None:
    store = PortfolioStore()
    user = _register(store)
    found = store.find_credentials("jane@example.com")
    assert found is not None
    assert found[0] == user
    assert verify_password("secret1", found[1])
    assert store.find_credentials("nobody@example.com") is None
    assert store.user_exists(user.id)
    assert not store.user_exists(user.id + 100)


def test_replace_portfolio_preserves_order_and_content(sample_record) -> None:
    store = PortfolioStore()
    user = _register(store)
    assert store.replace_portfolio(user.id, sample_record)
    loaded = store.load_portfolio("jane")
    assert loaded is not None
    assert loaded.personal.name == "Jane Doe"
    assert [job.company for job in loaded.work_experience] == ["Acme", "Globex"]
    assert loaded.work_experience[0].description == ["Led the billing rewrite.", "Mentored two engineers."]
    assert loaded.work_experience[1].description == ["Built ingestion pipelines."]
    assert loaded.work_experience[0].tags == ["Python", "PostgreSQL"]
    assert loaded.projects[0].github_url == "https://github.com/jane/ledger"
    assert loaded.skills == {
        "backend": ["Python: 80% | 5yrs | led backend", "Go: 60%"],
        "data": ["PostgreSQL"],
    }
    assert loaded.social_links[0].url == "https://github.com/jane"


def test_replace_portfolio_overwrites_collections(sample_record) -> None:
    store = PortfolioStore()
    user = _register(store)
    store.replace_portfolio(user.id, sample_record)
    trimmed = sample_record.model_copy(update={"work_experience": sample_record.work_experience[:1], "projects": []})
    store.replace_portfolio(user.id, trimmed)
    loaded = store.load_portfolio("jane")
    assert [job.company for job in loaded.work_experience] == ["Acme"]
    assert loaded.projects == []


def test_replace_portfolio_for_unknown_user() -> None:
    assert PortfolioStore().replace_portfolio(999, PortfolioRecord()) is False


def test_malformed_json_columns_are_tolerated(sample_record) -> None:
    store = PortfolioStore()
    user = _register(store)
    store.replace_portfolio(user.id, sample_record)
    conn = sqlite3.connect(settings.DB_PATH)
    try:
        conn.execute("UPDATE work_experience SET tags = 'not json'")
        conn.commit()
    finally:
        conn.close()
    loaded = store.load_portfolio("jane")
    assert all(job.tags == [] for job in loaded.work_experience)


def test_unknown_username_has_no_portfolio() -> None:
    assert PortfolioStore().load_portfolio("ghost") is None
