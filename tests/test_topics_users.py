"""
Topic and user endpoint tests.
"""
import pytest
from httpx import AsyncClient


# ---------------------------------------------------------------------------
# Topics
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_topics(async_client: AsyncClient):
    resp = await async_client.get("/api/topics")
    assert resp.status_code == 200
    topics = resp.json()["topics"]
    assert {t["slug"] for t in topics} == {"mitch", "cats", "paper"}
    for topic in topics:
        assert set(topic) == {"slug", "description"}


@pytest.mark.asyncio
async def test_create_topic(async_client: AsyncClient):
    resp = await async_client.post("/api/topics", json={"slug": "dogs", "description": "Not cats"})
    assert resp.status_code == 201
    assert resp.json() == {"topic": {"slug": "dogs", "description": "Not cats"}}

    listing = await async_client.get("/api/articles?topic=dogs")
    assert listing.status_code == 200
    assert listing.json()["total_count"] == "0"


@pytest.mark.asyncio
async def test_create_duplicate_topic_is_409(async_client: AsyncClient):
    resp = await async_client.post("/api/topics", json={"slug": "cats", "description": "Again"})
    assert resp.status_code == 409
    assert "msg" in resp.json()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"slug": "dogs"},
        {"description": "No slug"},
        {"slug": 1, "description": "Numeric slug"},
        {"slug": "d" * 101, "description": "Slug too long"},
        {"slug": "dogs", "description": "d" * 301},
    ],
)
async def test_create_topic_invalid_body_is_400(async_client: AsyncClient, body: dict):
    resp = await async_client.post("/api/topics", json=body)
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_users(async_client: AsyncClient):
    resp = await async_client.get("/api/users")
    assert resp.status_code == 200
    users = resp.json()["users"]
    assert len(users) == 4
    assert {u["username"] for u in users} == {"butter_bridge", "icellusedkars", "rogersbop", "lurker"}


@pytest.mark.asyncio
async def test_get_user(async_client: AsyncClient):
    resp = await async_client.get("/api/users/rogersbop")
    assert resp.status_code == 200
    assert resp.json()["user"] == {
        "username": "rogersbop",
        "name": "paul",
        "avatar_url": "https://avatars2.githubusercontent.com/u/24394918?s=400&v=4",
    }


@pytest.mark.asyncio
async def test_get_user_not_found(async_client: AsyncClient):
    resp = await async_client.get("/api/users/nobody")
    assert resp.status_code == 404
