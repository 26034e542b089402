"""Search API tests. The search service is overridden with in-memory gateways; no Postgres needed."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from app.api.v1.dependencies import get_search_service
from app.application.use_cases.search import SearchService
from app.core.config import get_settings
from app.core.limiter import limiter
from app.main import app
from tests.support import (
    NOW,
    FakeAnalytics,
    FakeGateway,
    make_comment,
    make_meeting,
    make_post,
    make_user,
)


def _install(
    *,
    meetings: FakeGateway | None = None,
    posts: FakeGateway | None = None,
    comments: FakeGateway | None = None,
    users: FakeGateway | None = None,
    analytics: FakeAnalytics | None = None,
    timeout_seconds: float = 5.0,
) -> SearchService:
    svc = SearchService(
        meeting_gateway=meetings or FakeGateway(),
        post_gateway=posts or FakeGateway(),
        comment_gateway=comments or FakeGateway(),
        user_gateway=users or FakeGateway(),
        analytics=analytics or FakeAnalytics(),
        timeout_seconds=timeout_seconds,
        clock=lambda: NOW,
    )
    app.dependency_overrides[get_search_service] = lambda: svc
    return svc


@pytest.fixture
def seeded() -> dict[str, FakeGateway]:
    gateways = {
        "meetings": FakeGateway(
            [
                make_meeting("Tech Discussion", "Monthly meeting on tooling", created_at=NOW - timedelta(days=3)),
                make_meeting("Team Standup", "Daily sync", created_at=NOW - timedelta(days=1)),
            ]
        ),
        "posts": FakeGateway([make_post("Meeting Agenda", "Topics", created_at=NOW - timedelta(days=2))]),
        "comments": FakeGateway([make_comment("Nice agenda", created_at=NOW - timedelta(days=1))]),
        "users": FakeGateway([make_user("Carol", "Team", "carol@example.com")]),
    }
    _install(**gateways)
    return gateways


async def test_global_search_returns_page(client: AsyncClient, seeded) -> None:
    response = await client.get("/api/v1/search/global", params={"query": "meeting"})

    assert response.status_code == 200
    data = response.json()
    assert data["total_count"] == 2
    assert data["type_counts"] == {"Meeting": 1, "Post": 1}
    assert data["query"] == "meeting"
    assert data["page"] == 1
    assert data["total_pages"] == 1
    assert data["has_next_page"] is False
    assert data["failed_types"] == []
    assert data["search_duration_ms"] >= 0
    first = data["results"][0]
    assert first["type"] == "Post"
    assert first["title"] == "Meeting Agenda"
    assert first["metadata"]["meeting_title"] == "Any Meeting"


async def test_global_search_filters_types_and_sorts(client: AsyncClient, seeded) -> None:
    response = await client.get(
        "/api/v1/search/global",
        params={
            "query": "team",
            "types": "meeting,user",
            "sort_by": "title",
            "sort_direction": "asc",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert [r["title"] for r in data["results"]] == ["Carol Team", "Team Standup"]
    assert not seeded["posts"].calls
    assert not seeded["comments"].calls


async def test_global_search_pagination(client: AsyncClient, seeded) -> None:
    response = await client.get(
        "/api/v1/search/global",
        params={"query": "meeting", "page": 2, "page_size": 1},
    )

    data = response.json()
    assert len(data["results"]) == 1
    assert data["total_count"] == 2
    assert data["has_previous_page"] is True
    assert data["has_next_page"] is False


@pytest.mark.parametrize(
    "params",
    [
        {"query": "a"},
        {"query": "x" * 201},
        {"query": "team", "page": 0},
        {"query": "team", "page_size": 101},
    ],
)
async def test_global_search_rejects_invalid_params(client: AsyncClient, seeded, params) -> None:
    response = await client.get("/api/v1/search/global", params=params)

    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.parametrize(
    ("params", "field"),
    [
        ({"query": "team", "types": "meeting,event"}, "types"),
        ({"query": "team", "sort_by": "popularity"}, "sort_by"),
        ({"query": "team", "sort_direction": "sideways"}, "sort_direction"),
        (
            {"query": "team", "from_date": "2026-05-01T00:00:00Z", "to_date": "2026-04-01T00:00:00Z"},
            "from_date",
        ),
    ],
)
async def test_global_search_bad_filters_are_400(
    client: AsyncClient, seeded, params, field: str
) -> None:
    response = await client.get("/api/v1/search/global", params=params)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["details"] == {"field": field}


async def test_global_search_partial_failure_still_200(client: AsyncClient) -> None:
    _install(
        meetings=FakeGateway([make_meeting("Team Standup")]),
        users=FakeGateway(error=ConnectionError("down")),
    )

    response = await client.get("/api/v1/search/global", params={"query": "team"})

    assert response.status_code == 200
    assert response.json()["failed_types"] == ["User"]


async def test_global_search_all_failed_is_503(client: AsyncClient) -> None:
    down = ConnectionError("down")
    _install(
        meetings=FakeGateway(error=down),
        posts=FakeGateway(error=down),
        comments=FakeGateway(error=down),
        users=FakeGateway(error=down),
    )

    response = await client.get("/api/v1/search/global", params={"query": "team"})

    assert response.status_code == 503
    assert response.json()["error"] == "SEARCH_FAILED"


async def test_global_search_timeout_is_504(client: AsyncClient) -> None:
    _install(meetings=FakeGateway([make_meeting("Team")], delay=5.0), timeout_seconds=0.05)

    response = await client.get("/api/v1/search/global", params={"query": "team"})

    assert response.status_code == 504
    assert response.json()["error"] == "SEARCH_TIMEOUT"


async def test_search_meetings(client: AsyncClient, seeded) -> None:
    response = await client.get("/api/v1/search/meetings", params={"query": "team"})

    assert response.status_code == 200
    items = response.json()
    assert [m["title"] for m in items] == ["Team Standup"]
    assert items[0]["organizer_name"] == "Alice Nakato"
    assert seeded["meetings"].calls[0].active_only is True


async def test_search_posts_with_authors(client: AsyncClient, seeded) -> None:
    response = await client.get(
        "/api/v1/search/posts", params={"query": "agenda", "authors": "u-brian, Brian Okello"}
    )

    assert response.status_code == 200
    assert [p["title"] for p in response.json()] == ["Meeting Agenda"]
    assert seeded["posts"].calls[0].authors == frozenset({"u-brian", "Brian Okello"})


async def test_search_comments(client: AsyncClient, seeded) -> None:
    response = await client.get("/api/v1/search/comments", params={"query": "agenda"})

    assert response.status_code == 200
    items = response.json()
    assert items[0]["content"] == "Nice agenda"
    assert items[0]["is_reply"] is False


async def test_search_users(client: AsyncClient, seeded) -> None:
    response = await client.get("/api/v1/search/users", params={"query": "carol"})

    assert response.status_code == 200
    items = response.json()
    assert items[0]["full_name"] == "Carol Team"
    assert items[0]["email"] == "carol@example.com"


async def test_typed_search_failure_is_503(client: AsyncClient) -> None:
    _install(posts=FakeGateway(error=ConnectionError("down")))

    response = await client.get("/api/v1/search/posts", params={"query": "agenda"})

    assert response.status_code == 503
    assert response.json()["message"].startswith("Post search failed")


async def test_suggestions(client: AsyncClient) -> None:
    _install(
        meetings=FakeGateway([make_meeting("Tech Discussion", location="Tech Hub")]),
        analytics=FakeAnalytics(frequencies=[("tech", 3)]),
    )

    response = await client.get(
        "/api/v1/search/suggestions", params={"query": "te", "max_suggestions": 2}
    )

    assert response.status_code == 200
    assert response.json() == [
        {"text": "tech", "type": "Query", "count": 3},
        {"text": "Tech Hub", "type": "Location", "count": 1},
    ]


async def test_suggestions_all_sources_failed_is_503(client: AsyncClient) -> None:
    down = ConnectionError("down")
    _install(
        meetings=FakeGateway(error=down),
        posts=FakeGateway(error=down),
        users=FakeGateway(error=down),
        analytics=FakeAnalytics(error=down),
    )

    response = await client.get("/api/v1/search/suggestions", params={"query": "te"})

    assert response.status_code == 503
    assert response.json()["error"] == "SUGGESTIONS_FAILED"


async def test_popular_terms(client: AsyncClient) -> None:
    _install(analytics=FakeAnalytics(popular=["tech", "team standup", "agenda"]))

    response = await client.get("/api/v1/search/popular-terms", params={"count": 2})

    assert response.status_code == 200
    assert response.json() == {"terms": ["tech", "team standup"]}


async def test_popular_terms_count_zero(client: AsyncClient) -> None:
    _install(analytics=FakeAnalytics(popular=["tech"]))

    response = await client.get("/api/v1/search/popular-terms", params={"count": 0})

    assert response.json() == {"terms": []}


async def test_search_rate_limit(client: AsyncClient, seeded, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEARCH_RATE_LIMIT", "2/minute")
    get_settings.cache_clear()
    limiter.enabled = True
    try:
        responses = [
            await client.get("/api/v1/search/posts", params={"query": "agenda"})
            for _ in range(3)
        ]
    finally:
        get_settings.cache_clear()

    assert [r.status_code for r in responses] == [200, 200, 429]
    assert responses[-1].json()["error"] == "RATE_LIMITED"
