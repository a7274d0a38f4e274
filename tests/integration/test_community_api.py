"""Community API tests: questions, answers, votes."""

import pytest
from httpx import AsyncClient


async def _ask(client: AsyncClient, title: str = "ETF oder Aktien?") -> dict:
    response = await client.post(
        "/api/v1/questions",
        json={"title": title, "content": "Was lohnt sich mehr?", "tags": ["etf", "aktien"]},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_ask_question(auth_client: AsyncClient) -> None:
    question = await _ask(auth_client)
    assert question["tags"] == ["etf", "aktien"]
    assert question["votes"] == 0
    me = (await auth_client.get("/api/v1/users/me")).json()
    assert me["points"] == 10


@pytest.mark.asyncio
async def test_list_questions_newest_first(auth_client: AsyncClient) -> None:
    first = await _ask(auth_client, "erste")
    second = await _ask(auth_client, "zweite")
    data = (await auth_client.get("/api/v1/questions")).json()
    assert [q["id"] for q in data["questions"]] == [second["id"], first["id"]]
    assert data["total"] == 2
    limited = (await auth_client.get("/api/v1/questions", params={"limit": 1})).json()
    assert [q["id"] for q in limited["questions"]] == [second["id"]]


@pytest.mark.asyncio
async def test_answer_and_detail(auth_client: AsyncClient) -> None:
    question = await _ask(auth_client)
    response = await auth_client.post(
        f"/api/v1/questions/{question['id']}/answers", json={"content": "Breit streuen!"}
    )
    assert response.status_code == 201
    answer = response.json()

    detail = (await auth_client.get(f"/api/v1/questions/{question['id']}")).json()
    assert detail["question"]["id"] == question["id"]
    assert [a["id"] for a in detail["answers"]] == [answer["id"]]

    me = (await auth_client.get("/api/v1/users/me")).json()
    assert me["points"] == 30


@pytest.mark.asyncio
async def test_answer_missing_question(auth_client: AsyncClient) -> None:
    response = await auth_client.post("/api/v1/questions/999/answers", json={"content": "x"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Question with id 999 not found"


@pytest.mark.asyncio
async def test_question_detail_missing(auth_client: AsyncClient) -> None:
    response = await auth_client.get("/api/v1/questions/999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_vote_round_trip(auth_client: AsyncClient) -> None:
    question = await _ask(auth_client)
    url = f"/api/v1/questions/{question['id']}/vote"
    assert (await auth_client.post(url, json={"value": 1})).json()["votes"] == 1
    assert (await auth_client.post(url, json={"value": -1})).json()["votes"] == 0
    await auth_client.post(url, json={"value": -1})
    assert (await auth_client.post(url, json={"value": -1})).json()["votes"] == -2


@pytest.mark.asyncio
async def test_vote_invalid_value(auth_client: AsyncClient) -> None:
    question = await _ask(auth_client)
    response = await auth_client.post(f"/api/v1/questions/{question['id']}/vote", json={"value": 5})
    assert response.status_code == 422
    assert response.json()["detail"] == "Vote must be +1 or -1"


@pytest.mark.asyncio
async def test_vote_answer(auth_client: AsyncClient) -> None:
    question = await _ask(auth_client)
    answer = (
        await auth_client.post(f"/api/v1/questions/{question['id']}/answers", json={"content": "a"})
    ).json()
    response = await auth_client.post(f"/api/v1/answers/{answer['id']}/vote", json={"value": -1})
    assert response.status_code == 200
    assert response.json()["votes"] == -1


@pytest.mark.asyncio
async def test_vote_missing_answer(auth_client: AsyncClient) -> None:
    response = await auth_client.post("/api/v1/answers/42/vote", json={"value": 1})
    assert response.status_code == 404
