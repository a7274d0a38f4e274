"""Community Q&A router: questions, answers and votes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from finanzwissen.auth.dependencies import get_current_user
from finanzwissen.community.schemas import (
    AnswerCreateRequest,
    AnswerResponse,
    QuestionCreateRequest,
    QuestionDetailResponse,
    QuestionListResponse,
    QuestionResponse,
    VoteRequest,
)
from finanzwissen.community.service import (
    answer_question,
    ask_question,
    get_question_with_answers,
    list_questions,
    vote_answer,
    vote_question,
)
from finanzwissen.dependencies import get_store
from finanzwissen.store import Store
from finanzwissen.store.entities import User

router = APIRouter(prefix="/api/v1", tags=["Community"])


@router.get("/questions", response_model=QuestionListResponse)
async def get_questions(
    limit: int | None = Query(None, ge=1, le=100),
    store: Store = Depends(get_store),
) -> QuestionListResponse:
    """Questions, newest first."""
    questions = await list_questions(store, limit)
    return QuestionListResponse(
        questions=[QuestionResponse.model_validate(q) for q in questions],
        total=len(questions),
    )


@router.get("/questions/{question_id}", response_model=QuestionDetailResponse)
async def get_question(
    question_id: int,
    store: Store = Depends(get_store),
) -> QuestionDetailResponse:
    question, answers = await get_question_with_answers(store, question_id)
    return QuestionDetailResponse(
        question=QuestionResponse.model_validate(question),
        answers=[AnswerResponse.model_validate(a) for a in answers],
    )


@router.post("/questions", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
async def create_question(
    body: QuestionCreateRequest,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> QuestionResponse:
    """Ask a question (+10 points)."""
    question = await ask_question(store, user.id, body.title, body.content, body.tags)
    await store.commit()
    return QuestionResponse.model_validate(question)


@router.post(
    "/questions/{question_id}/answers",
    response_model=AnswerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_answer(
    question_id: int,
    body: AnswerCreateRequest,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> AnswerResponse:
    """Answer a question (+20 points)."""
    answer = await answer_question(store, user.id, question_id, body.content)
    await store.commit()
    return AnswerResponse.model_validate(answer)


@router.post("/questions/{question_id}/vote", response_model=QuestionResponse)
async def vote_on_question(
    question_id: int,
    body: VoteRequest,
    _user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> QuestionResponse:
    question = await vote_question(store, question_id, body.value)
    await store.commit()
    return QuestionResponse.model_validate(question)


@router.post("/answers/{answer_id}/vote", response_model=AnswerResponse)
async def vote_on_answer(
    answer_id: int,
    body: VoteRequest,
    _user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> AnswerResponse:
    answer = await vote_answer(store, answer_id, body.value)
    await store.commit()
    return AnswerResponse.model_validate(answer)
