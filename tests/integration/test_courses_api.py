"""Course API tests: catalogue, start, progress."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_courses(client: AsyncClient) -> None:
    data = (await client.get("/api/v1/courses")).json()
    assert [c["title"] for c in data["courses"]] == ["Aktien Grundlagen", "Altersvorsorge planen"]


@pytest.mark.asyncio
async def test_start_is_idempotent(auth_client: AsyncClient) -> None:
    first = await auth_client.post("/api/v1/courses/1/start")
    second = await auth_client.post("/api/v1/courses/1/start")
    assert first.status_code == 201
    assert second.json()["id"] == first.json()["id"]


@pytest.mark.asyncio
async def test_start_unknown_course(auth_client: AsyncClient) -> None:
    response = await auth_client.post("/api/v1/courses/99/start")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_completion_awards_points_once(auth_client: AsyncClient) -> None:
    await auth_client.post("/api/v1/courses/1/start")
    await auth_client.put("/api/v1/courses/1/progress", json={"lessons_completed": 4})
    done = await auth_client.put("/api/v1/courses/1/progress", json={"lessons_completed": 5})
    assert done.status_code == 200
    assert done.json()["completed_at"] is not None

    await auth_client.put("/api/v1/courses/1/progress", json={"lessons_completed": 5})
    me = (await auth_client.get("/api/v1/users/me")).json()
    assert me["points"] == 75

    activities = (await auth_client.get("/api/v1/users/me/activities")).json()["activities"]
    assert [a["type"] for a in activities].count("course_completed") == 1


@pytest.mark.asyncio
async def test_progress_not_started(auth_client: AsyncClient) -> None:
    response = await auth_client.put("/api/v1/courses/2/progress", json={"lessons_completed": 1})
    assert response.status_code == 404
    assert response.json()["detail"] == "Course 2 not found or not started"


@pytest.mark.asyncio
async def test_progress_negative(auth_client: AsyncClient) -> None:
    await auth_client.post("/api/v1/courses/1/start")
    response = await auth_client.put("/api/v1/courses/1/progress", json={"lessons_completed": -2})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_my_courses(auth_client: AsyncClient) -> None:
    await auth_client.post("/api/v1/courses/2/start")
    await auth_client.put("/api/v1/courses/2/progress", json={"lessons_completed": 2})
    data = (await auth_client.get("/api/v1/users/me/courses")).json()
    assert len(data["courses"]) == 1
    assert data["courses"][0]["course"]["title"] == "Altersvorsorge planen"
    assert data["courses"][0]["progress"]["lessons_completed"] == 2
