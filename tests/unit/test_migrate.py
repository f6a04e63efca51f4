import sqlite3

from config.settings import settings
from storage.migrate import migrate
from storage.sqlite import get_conn


def test_migrate_is_idempotent() -> None:
    migrate(settings.DB_PATH)
    conn = sqlite3.connect(settings.DB_PATH)
    try:
        names = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    finally:
        conn.close()
    assert {"users", "portfolios", "work_experience", "education", "projects", "skills", "social_links"} <= names


def test_get_conn_rolls_back_on_error() -> None:
    try:
        with get_conn() as conn:
            conn.execute("INSERT INTO users (username, email, password) VALUES ('a', 'a@x', 'h')")
            raise RuntimeError("abort")
    except RuntimeError:
        pass
    with get_conn() as conn:
        assert conn.execute("SELECT COUNT(*) FROM users").fetchone()[0] == 0
