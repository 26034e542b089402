"""Seed dev data from scripts/seed-data.json into Postgres.

Creates the tables if missing (Base.metadata.create_all), then loads users,
meetings, attendance, posts, comments and search history. Skips seeding
when users already exist, so the script can be re-run safely.

Usage:
    uv run python -m scripts.seed_dev_data [path/to/seed-data.json]

Default path: scripts/seed-data.json (relative to project root).
Requires: DATABASE_URL (postgresql+asyncpg://...).
"""

from __future__ import annotations

import asyncio
import json
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.search_query import SearchQueryCreate
from app.core.config import get_settings
from app.domain.exceptions import SqlNotConfiguredException
from app.infrastructure.persistence import database
from app.infrastructure.persistence.models import (
    Attendance,
    Comment,
    Meeting,
    Post,
    User,
)
from app.infrastructure.persistence.repositories.search_query_repo import (
    SearchQueryRepository,
)
from app.shared.utils.datetime import ensure_utc, utc_now


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)
    get_settings.cache_clear()


def _parse_time(s: str) -> datetime:
    return ensure_utc(datetime.fromisoformat(s.replace("Z", "+00:00")))


async def _create_tables() -> None:
    database.get_session_factory()
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.create_all)


async def _seed(session: AsyncSession, data: dict[str, Any]) -> None:
    users: dict[str, str] = {}
    for u in data.get("users", []):
        user = User(
            first_name=u["first_name"],
            last_name=u["last_name"],
            email=u["email"],
            bio=u.get("bio"),
            is_active=u.get("is_active", True),
        )
        session.add(user)
        await session.flush()
        users[u["key"]] = user.id
        print(f"  User {user.first_name} {user.last_name} -> {user.id}")

    meetings: dict[str, str] = {}
    for m in data.get("meetings", []):
        start = _parse_time(m["start"])
        meeting = Meeting(
            title=m["title"],
            description=m.get("description", ""),
            location=m.get("location", ""),
            start_date_time=start,
            end_date_time=start + timedelta(hours=m.get("hours", 1)),
            organizer_id=users[m["organizer"]],
            is_active=m.get("is_active", True),
        )
        session.add(meeting)
        await session.flush()
        meetings[m["key"]] = meeting.id
        print(f"  Meeting {meeting.title} -> {meeting.id}")

    for a in data.get("attendance", []):
        session.add(
            Attendance(
                meeting_id=meetings[a["meeting"]],
                user_id=users[a["user"]],
                status=a.get("status", "Pending"),
            )
        )

    posts: dict[str, str] = {}
    for p in data.get("posts", []):
        post = Post(
            title=p["title"],
            content=p["content"],
            author_id=users[p["author"]],
            meeting_id=meetings[p["meeting"]],
        )
        session.add(post)
        await session.flush()
        posts[p["key"]] = post.id
        print(f"  Post {post.title} -> {post.id}")

    comments: dict[str, str] = {}
    for c in data.get("comments", []):
        comment = Comment(
            content=c["content"],
            author_id=users[c["author"]],
            post_id=posts[c["post"]],
            parent_comment_id=comments.get(c["parent"]) if c.get("parent") else None,
        )
        session.add(comment)
        await session.flush()
        comments[c["key"]] = comment.id

    history = SearchQueryRepository(session)
    now = utc_now()
    for q in data.get("search_queries", []):
        for i in range(q.get("times", 1)):
            await history.append(
                SearchQueryCreate(
                    query=q["query"],
                    search_type=q["search_type"],
                    result_count=q.get("result_count", 0),
                    search_duration=timedelta(milliseconds=15),
                    searched_at=now - timedelta(days=i),
                )
            )
        print(f"  Search history '{q['query']}' x{q.get('times', 1)}")


async def run(path: Path) -> None:
    _load_env()
    if not path.exists():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    with path.open() as f:
        data = json.load(f)

    try:
        await _create_tables()
    except SqlNotConfiguredException:
        print("DATABASE_URL not configured. Set it in .env or the environment.", file=sys.stderr)
        sys.exit(1)

    try:
        async with database.transactional_session() as session:
            existing = await session.scalar(select(func.count(User.id)))
            if existing:
                print(f"Database already has {existing} users, skip seeding.")
                return
            await _seed(session, data)
    finally:
        await database.dispose_engine()

    print("Seed completed.")


def main() -> None:
    root = _project_root()
    path_arg = sys.argv[1] if len(sys.argv) > 1 else None
    path = Path(path_arg) if path_arg else root / "scripts" / "seed-data.json"
    if not path.is_absolute():
        path = (root / path).resolve()
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
