"""HTTP flow tests against real repositories on in-memory SQLite."""

import time
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from content_desk.domain.identifiers import new_id
from content_desk.infrastructure.database import Base, StatsBase
from content_desk.infrastructure.database.models import CommentModel, UserModel
from content_desk.infrastructure.database.session import get_db_session, get_stats_session
from content_desk.main import app

ANA_ID = new_id()
ANA = {
    "X-User-Id": ANA_ID,
    "X-User-Author": "true",
    "X-User-Name": "Ana",
    "X-User-Email": "ana@example.com",
}
BIA = {"X-User-Id": new_id(), "X-User-Author": "true", "X-User-Name": "Bia"}


def _session_override(factory):
    async def _session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return _session


@pytest_asyncio.fixture
async def content_factory():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        session.add(UserModel(id=ANA_ID, name="Ana", email="ana@example.com", is_author=True))
        await session.commit()
    yield factory
    await engine.dispose()


@pytest_asyncio.fixture
async def client(content_factory):
    stats_engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with stats_engine.begin() as conn:
        await conn.run_sync(StatsBase.metadata.create_all)
    stats_factory = async_sessionmaker(stats_engine, class_=AsyncSession, expire_on_commit=False)

    app.dependency_overrides[get_db_session] = _session_override(content_factory)
    app.dependency_overrides[get_stats_session] = _session_override(stats_factory)
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as http:
            yield http
    finally:
        app.dependency_overrides.clear()
        await stats_engine.dispose()


async def _create_article(client, title: str = "Hello") -> dict:
    response = await client.post("/api/v1/articles", json={"title": title}, headers=ANA)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_missing_identity_is_401(client):
    response = await client.get("/api/v1/articles")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_article_lifecycle_over_http(client):
    article = await _create_article(client)
    assert article["state"] == "draft"
    assert article["author"]["id"] == ANA_ID

    published = await client.put(
        f"/api/v1/articles/{article['id']}/state", params={"state": "published"}, headers=ANA
    )
    assert published.status_code == 200
    assert published.json()["published_at"] is not None

    again = await client.put(
        f"/api/v1/articles/{article['id']}/state", params={"state": "published"}, headers=ANA
    )
    assert again.status_code == 409
    assert again.json()["code"] == 409
    assert again.json()["name"] == "state"

    listing = await client.get("/api/v1/articles", params={"limit": 6}, headers=ANA)
    assert listing.status_code == 200
    assert listing.json()["count"] == 1
    assert listing.json()["limit"] == 6
    assert listing.json()["articles"][0]["author"]["name"] == "Ana"


@pytest.mark.asyncio
async def test_article_lookup_errors_use_error_shape(client):
    bad = await client.get("/api/v1/articles/not-a-uuid", headers=ANA)
    assert bad.status_code == 400
    assert bad.json() == {"code": 400, "name": "id", "description": "Invalid identifier"}

    missing = await client.get(f"/api/v1/articles/{new_id()}", headers=ANA)
    assert missing.status_code == 404

    wrong_kind = await client.get("/api/v1/articles/x", params={"type": "slug"}, headers=ANA)
    assert wrong_kind.status_code == 400
    assert wrong_kind.json()["name"] == "type"


@pytest.mark.asyncio
async def test_bulk_change_and_title_lookup(client):
    first = await _create_article(client, "Bulk one")
    second = await _create_article(client, "Bulk two")

    response = await client.put(
        "/api/v1/articles/states",
        json={"state": "published", "articles_id": [first["id"], second["id"]]},
        headers=ANA,
    )
    assert response.status_code == 200
    assert response.json() == {"changed": 2}

    lookup = await client.post(
        "/api/v1/articles/exists-by-title", json={"title": "bulk"}, headers=ANA
    )
    assert lookup.json() == {"exist_articles": True, "quantity": 2}


@pytest.mark.asyncio
async def test_comment_flow_over_http(client, content_factory):
    article = await _create_article(client)
    root_id = new_id()
    async with content_factory() as session:
        session.add(
            CommentModel(
                id=root_id,
                article_id=article["id"],
                user_name="Reader",
                user_email="reader@example.com",
                message="Nice post",
                created_at=datetime.now(timezone.utc),
            )
        )
        await session.commit()

    inbox = await client.get("/api/v1/comments", params={"type": "not-readed"}, headers=ANA)
    assert inbox.status_code == 200
    assert inbox.json()["count"] == 1
    assert inbox.json()["comments"][0]["article"]["title"] == "Hello"

    answer = await client.post(
        f"/api/v1/comments/{root_id}/answers", json={"answer": "Thanks!"}, headers=ANA
    )
    assert answer.status_code == 201
    assert answer.json()["answer_of"] == root_id
    assert answer.json()["user_name"] == "Ana"

    thread = await client.get(f"/api/v1/comments/{root_id}", headers=ANA)
    assert [a["message"] for a in thread.json()["answers"]] == ["Thanks!"]

    assert (await client.patch(f"/api/v1/comments/{root_id}/read", headers=ANA)).status_code == 204
    repeat = await client.patch(f"/api/v1/comments/{root_id}/read", headers=ANA)
    assert repeat.status_code == 409

    orphan = await client.post(
        f"/api/v1/comments/{new_id()}/answers", json={"answer": "Hello?"}, headers=ANA
    )
    assert orphan.status_code == 404
    assert orphan.json()["name"] == "answer_of"


@pytest.mark.asyncio
async def test_comment_settings_over_http(client):
    missing = await client.get("/api/v1/comments/settings", headers=ANA)
    assert missing.status_code == 404

    saved = await client.put(
        "/api/v1/comments/settings", json={"order": "asc", "notify": True}, headers=ANA
    )
    assert saved.status_code == 200
    body = saved.json()
    assert body["order"] == "asc"
    assert body["notify"] is True
    assert body["ttl"] > int(time.time() * 1000)

    cached = await client.get(
        "/api/v1/comments/settings",
        headers={**ANA, "X-Comments-TTL": str(body["ttl"])},
    )
    assert cached.status_code == 304

    bad = await client.put("/api/v1/comments/settings", json={"type": "some"}, headers=ANA)
    assert bad.status_code == 400
    assert bad.json()["name"] == "type"


@pytest.mark.asyncio
async def test_comment_stats_without_rollups(client):
    response = await client.get("/api/v1/comments/stats", headers=ANA)
    assert response.status_code == 200
    assert response.json() == {"user": None, "platform": None}


@pytest.mark.asyncio
async def test_request_shape_errors_use_error_shape(client):
    response = await client.post("/api/v1/articles", json={"title": "A" * 101}, headers=ANA)
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == 400
    assert body["name"] == "title"
    assert "100" in body["description"]

    missing = await client.post("/api/v1/articles", json={}, headers=ANA)
    assert missing.status_code == 400
    assert missing.json()["name"] == "title"


@pytest.mark.asyncio
async def test_other_authors_cannot_touch_comments(client, content_factory):
    article = await _create_article(client)
    root_id = new_id()
    async with content_factory() as session:
        session.add(
            CommentModel(
                id=root_id,
                article_id=article["id"],
                user_name="Reader",
                user_email="reader@example.com",
                message="Nice post",
            )
        )
        await session.commit()

    answer = await client.post(
        f"/api/v1/comments/{root_id}/answers", json={"answer": "Hijack"}, headers=BIA
    )
    read = await client.patch(f"/api/v1/comments/{root_id}/read", headers=BIA)
    thread = await client.get(f"/api/v1/comments/{root_id}", headers=BIA)
    answers = await client.get(f"/api/v1/comments/{root_id}/answers", headers=BIA)

    assert [answer.status_code, read.status_code, thread.status_code, answers.status_code] == [
        403,
        403,
        403,
        403,
    ]
    assert "reader@example.com" not in thread.text

    own = await client.get(f"/api/v1/comments/{root_id}", headers=ANA)
    assert own.status_code == 200
    assert own.json()["answers"] == []
    assert own.json()["readed_at"] is None
