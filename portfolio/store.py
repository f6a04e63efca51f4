from __future__ import annotations  # SQLite-backed users and portfolio storage

import json
import logging
import sqlite3
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from storage.sqlite import get_conn

from .models import (
    EducationEntry,
    PersonalInfo,
    PortfolioRecord,
    ProjectEntry,
    SocialLink,
    WorkExperienceEntry,
)


logger = logging.getLogger(__name__)


class UserRecord(BaseModel):  # Stored account without the password hash
    id: int
    username: str
    email: str


class DuplicateUserError(ValueError):  # Username or email already registered
    pass


def _json_list(raw: Optional[str]) -> List[Any]:  # Decode a JSON list column, tolerating junk
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Discarding malformed JSON list column: %.40s", raw)
        return []
    return value if isinstance(value, list) else [value]


def _description_json(description: Any) -> str:  # Lists stay lists; free text becomes one item
    if isinstance(description, list):
        return json.dumps(description)
    return json.dumps([description] if description else [])


class PortfolioStore:  # Users, portfolios and their collections
    def create_user(self, *, username: str, email: str, password_hash: str) -> UserRecord:
        """Insert a user plus an empty portfolio row.

        Raises:
            DuplicateUserError: If the username or email is taken.
        """

        with get_conn() as conn:
            existing = conn.execute(
                "SELECT id FROM users WHERE email = ? OR username = ?",
                (email, username),
            ).fetchone()
            if existing is not None:
                raise DuplicateUserError("User with this email or username already exists")
            try:
                cur = conn.execute(
                    "INSERT INTO users (username, email, password) VALUES (?, ?, ?)",
                    (username, email, password_hash),
                )
            except sqlite3.IntegrityError as exc:
                raise DuplicateUserError("User with this email or username already exists") from exc
            user_id = int(cur.lastrowid)
            conn.execute(
                "INSERT INTO portfolios (user_id, name, title, bio) VALUES (?, ?, ?, ?)",
                (user_id, "", "", ""),
            )
        return UserRecord(id=user_id, username=username, email=email)

    def find_credentials(self, email: str) -> Optional[tuple[UserRecord, str]]:  # User and stored hash
        with get_conn() as conn:
            row = conn.execute(
                "SELECT id, username, email, password FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        if row is None:
            return None
        return UserRecord(id=row["id"], username=row["username"], email=row["email"]), row["password"]

    def user_exists(self, user_id: int) -> bool:
        with get_conn() as conn:
            row = conn.execute("SELECT id FROM users WHERE id = ?", (user_id,)).fetchone()
        return row is not None

    def load_portfolio(self, username: str) -> Optional[PortfolioRecord]:
        """Assemble the full record for ``username``; ``None`` when absent."""

        with get_conn() as conn:
            user = conn.execute("SELECT id, email FROM users WHERE username = ?", (username,)).fetchone()
            if user is None:
                return None
            portfolio = conn.execute("SELECT * FROM portfolios WHERE user_id = ?", (user["id"],)).fetchone()
            if portfolio is None:
                return None
            pid = portfolio["id"]
            work_rows = conn.execute(
                "SELECT * FROM work_experience WHERE portfolio_id = ? ORDER BY sort_order DESC", (pid,)
            ).fetchall()
            edu_rows = conn.execute(
                "SELECT * FROM education WHERE portfolio_id = ? ORDER BY sort_order DESC", (pid,)
            ).fetchall()
            project_rows = conn.execute(
                "SELECT * FROM projects WHERE portfolio_id = ? ORDER BY sort_order DESC", (pid,)
            ).fetchall()
            skill_rows = conn.execute(
                "SELECT category, skill_name FROM skills WHERE portfolio_id = ? ORDER BY id", (pid,)
            ).fetchall()
            link_rows = conn.execute(
                "SELECT * FROM social_links WHERE portfolio_id = ? ORDER BY sort_order", (pid,)
            ).fetchall()

        skills: Dict[str, List[str]] = {}
        for row in skill_rows:
            skills.setdefault(row["category"] or "other", []).append(row["skill_name"] or "")

        return PortfolioRecord(
            personal=PersonalInfo(
                name=portfolio["name"],
                title=portfolio["title"],
                location=portfolio["location"],
                bio=portfolio["bio"],
                email=portfolio["email"] or user["email"],
                photo=portfolio["photo"],
                resume_url=portfolio["resume_url"],
            ),
            work_experience=[
                WorkExperienceEntry(
                    id=row["id"],
                    period=row["period"],
                    position=row["position"],
                    company=row["company"],
                    location=row["location"],
                    description=_json_list(row["description"]),
                    tags=_json_list(row["tags"]),
                )
                for row in work_rows
            ],
            education=[
                EducationEntry(
                    id=row["id"],
                    period=row["period"],
                    degree=row["degree"],
                    institution=row["institution"],
                    location=row["location"],
                    description=_json_list(row["description"]),
                )
                for row in edu_rows
            ],
            projects=[
                ProjectEntry(
                    id=row["id"],
                    title=row["title"],
                    description=row["description"],
                    technologies=_json_list(row["technologies"]),
                    image=row["image"],
                    live_url=row["live_url"],
                    github_url=row["github_url"],
                )
                for row in project_rows
            ],
            skills=skills,
            social_links=[SocialLink(name=row["name"], icon=row["icon"], url=row["url"]) for row in link_rows],
        )

    def replace_portfolio(self, user_id: int, record: PortfolioRecord) -> bool:
        """Overwrite every collection of the user's portfolio in one transaction.

        Returns ``False`` when the user has no portfolio row.
        """

        with get_conn() as conn:
            portfolio = conn.execute("SELECT id FROM portfolios WHERE user_id = ?", (user_id,)).fetchone()
            if portfolio is None:
                return False
            pid = portfolio["id"]
            personal = record.personal
            conn.execute(
                """
                UPDATE portfolios
                SET name = ?, title = ?, location = ?, bio = ?, email = ?, photo = ?, resume_url = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    personal.name,
                    personal.title,
                    personal.location,
                    personal.bio,
                    personal.email,
                    personal.photo,
                    personal.resume_url,
                    pid,
                ),
            )

            for table in ("work_experience", "education", "projects", "skills", "social_links"):
                conn.execute(f"DELETE FROM {table} WHERE portfolio_id = ?", (pid,))

            # sort_order is read back DESC, so reverse to keep the submitted order
            count = len(record.work_experience)
            conn.executemany(
                """
                INSERT INTO work_experience
                    (portfolio_id, period, position, company, location, description, tags, sort_order)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        pid,
                        job.period,
                        job.position,
                        job.company,
                        job.location,
                        _description_json(job.description),
                        json.dumps(job.tags),
                        count - index,
                    )
                    for index, job in enumerate(record.work_experience)
                ],
            )
            count = len(record.education)
            conn.executemany(
                """
                INSERT INTO education
                    (portfolio_id, period, degree, institution, location, description, sort_order)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        pid,
                        edu.period,
                        edu.degree,
                        edu.institution,
                        edu.location,
                        _description_json(edu.description),
                        count - index,
                    )
                    for index, edu in enumerate(record.education)
                ],
            )
            count = len(record.projects)
            conn.executemany(
                """
                INSERT INTO projects
                    (portfolio_id, title, description, technologies, image, live_url, github_url, sort_order)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        pid,
                        project.title,
                        project.description,
                        json.dumps(project.technologies),
                        project.image,
                        project.live_url,
                        project.github_url,
                        count - index,
                    )
                    for index, project in enumerate(record.projects)
                ],
            )
            conn.executemany(
                "INSERT INTO skills (portfolio_id, category, skill_name) VALUES (?, ?, ?)",
                [(pid, category, skill) for category, items in record.skills.items() for skill in items],
            )
            conn.executemany(
                "INSERT INTO social_links (portfolio_id, name, icon, url, sort_order) VALUES (?, ?, ?, ?, ?)",
                [(pid, link.name, link.icon, link.url, index) for index, link in enumerate(record.social_links)],
            )
        return True


__all__ = ["DuplicateUserError", "PortfolioStore", "UserRecord"]
