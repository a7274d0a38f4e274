"""Request/response schemas for community Q&A endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class QuestionCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=10000)
    tags: list[str] = Field(default_factory=list, max_length=10)


class AnswerCreateRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=10000)


class VoteRequest(BaseModel):
    """Vote value; only +1 and -1 are accepted."""

    value: int


class QuestionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    content: str
    tags: list[str] = []
    created_at: datetime | None = None
    votes: int


class AnswerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    question_id: int
    user_id: int
    content: str
    created_at: datetime | None = None
    votes: int


class QuestionListResponse(BaseModel):
    questions: list[QuestionResponse]
    total: int


class QuestionDetailResponse(BaseModel):
    question: QuestionResponse
    answers: list[AnswerResponse]
