"""User profile API tests: level, rank, activities."""

import pytest
from httpx import AsyncClient

from tests.conftest import auth_headers, register


@pytest.mark.asyncio
async def test_me(auth_client: AsyncClient) -> None:
    response = await auth_client.get("/api/v1/users/me")
    assert response.status_code == 200
    assert response.json()["username"] == "anna"


@pytest.mark.asyncio
async def test_level_details_for_new_user(auth_client: AsyncClient) -> None:
    response = await auth_client.get("/api/v1/users/me/level")
    assert response.status_code == 200
    assert response.json() == {
        "level": 1,
        "next_level": 2,
        "level_progress": 0,
        "level_cap": 500,
        "points_to_next_level": 500,
        "total_points": 0,
    }


@pytest.mark.asyncio
async def test_level_details_after_points(auth_client: AsyncClient) -> None:
    await auth_client.post("/api/v1/questions", json={"title": "t", "content": "c"})
    data = (await auth_client.get("/api/v1/users/me/level")).json()
    assert data["total_points"] == 10
    assert data["level_progress"] == 10
    assert data["points_to_next_level"] == 490


@pytest.mark.asyncio
async def test_rank(client: AsyncClient) -> None:
    anna = await register(client, "anna")
    ben = await register(client, "ben")
    await client.post(
        "/api/v1/questions", json={"title": "t", "content": "c"}, headers=auth_headers(ben["access_token"])
    )

    anna_rank = (await client.get("/api/v1/users/me/rank", headers=auth_headers(anna["access_token"]))).json()
    ben_rank = (await client.get("/api/v1/users/me/rank", headers=auth_headers(ben["access_token"]))).json()

    assert ben_rank == {"user_id": ben["user"]["id"], "rank": 1, "points": 10}
    assert anna_rank["rank"] == 2


@pytest.mark.asyncio
async def test_activities_newest_first(auth_client: AsyncClient) -> None:
    await auth_client.post("/api/v1/questions", json={"title": "t", "content": "c"})
    response = await auth_client.get("/api/v1/users/me/activities")
    assert response.status_code == 200
    data = response.json()
    assert [a["type"] for a in data["activities"]] == ["question_asked", "account_created"]
    assert data["activities"][0]["points_awarded"] == 10
    assert data["total"] == 2


@pytest.mark.asyncio
async def test_activities_limit(auth_client: AsyncClient) -> None:
    await auth_client.post("/api/v1/questions", json={"title": "t", "content": "c"})
    data = (await auth_client.get("/api/v1/users/me/activities", params={"limit": 1})).json()
    assert [a["type"] for a in data["activities"]] == ["question_asked"]


@pytest.mark.asyncio
async def test_activities_invalid_limit(auth_client: AsyncClient) -> None:
    response = await auth_client.get("/api/v1/users/me/activities", params={"limit": 0})
    assert response.status_code == 422
