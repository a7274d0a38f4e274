"""Community Q&A: questions, answers and votes."""

from __future__ import annotations

import structlog

from finanzwissen.exceptions import NotFoundError, ValidationFailureError
from finanzwissen.gamification.points_service import grant_points, require_user
from finanzwissen.gamification.rules import (
    POINTS_ANSWER_GIVEN,
    POINTS_QUESTION_ASKED,
    answer_milestone_effects,
)
from finanzwissen.store import Store
from finanzwissen.store.entities import Answer, Question

logger = structlog.get_logger()

VALID_VOTES = frozenset({1, -1})


def _check_vote(value: int) -> None:
    if value not in VALID_VOTES:
        raise ValidationFailureError("Vote must be +1 or -1", field="value", value=value)


async def list_questions(store: Store, limit: int | None = None) -> list[Question]:
    """Questions, newest first."""
    if limit is not None and limit < 1:
        raise ValidationFailureError("limit must be a positive integer", field="limit", value=limit)
    return await store.list_questions(limit)


async def get_question_with_answers(store: Store, question_id: int) -> tuple[Question, list[Answer]]:
    """A question and its answers, highest voted first."""
    question = await store.get_question(question_id)
    if question is None:
        raise NotFoundError("Question", question_id)
    return question, await store.list_answers(question_id)


async def ask_question(
    store: Store,
    user_id: int,
    title: str,
    content: str,
    tags: list[str] | None = None,
) -> Question:
    """Create a question and grant the asker 10 points."""
    await require_user(store, user_id)
    question = await store.create_question(user_id, title, content, list(tags or []))
    await grant_points(
        store,
        user_id,
        POINTS_QUESTION_ASKED,
        "question_asked",
        "Du hast eine Frage gestellt",
        metadata={"question_id": question.id},
    )
    logger.info("question_asked", user_id=user_id, question_id=question.id)
    return question


async def answer_question(store: Store, user_id: int, question_id: int, content: str) -> Answer:
    """Answer a question and grant 20 points; the 10th answer ever earns a badge."""
    question = await store.get_question(question_id)
    if question is None:
        raise NotFoundError("Question", question_id)

    await require_user(store, user_id)
    answer = await store.create_answer(question.id, user_id, content)
    answer_count = await store.count_user_answers(user_id)
    await grant_points(
        store,
        user_id,
        POINTS_ANSWER_GIVEN,
        "answer_given",
        "Du hast eine Frage beantwortet",
        metadata={"question_id": question.id, "answer_id": answer.id},
        extra_effects=answer_milestone_effects(answer_count),
    )
    logger.info("answer_given", user_id=user_id, question_id=question.id, answer_id=answer.id)
    return answer


async def vote_question(store: Store, question_id: int, value: int) -> Question:
    """Add +1 or -1 to a question's votes. There is no floor."""
    _check_vote(value)
    question = await store.get_question(question_id)
    if question is None:
        raise NotFoundError("Question", question_id)
    updated = await store.update_question(question_id, votes=question.votes + value)
    if updated is None:
        raise NotFoundError("Question", question_id)
    return updated


async def vote_answer(store: Store, answer_id: int, value: int) -> Answer:
    """Add +1 or -1 to an answer's votes. There is no floor."""
    _check_vote(value)
    answer = await store.get_answer(answer_id)
    if answer is None:
        raise NotFoundError("Answer", answer_id)
    updated = await store.update_answer(answer_id, votes=answer.votes + value)
    if updated is None:
        raise NotFoundError("Answer", answer_id)
    return updated
