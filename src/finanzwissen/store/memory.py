"""In-process store backed by dicts."""

from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, TypeVar

from finanzwissen.exceptions import DuplicateUsernameError
from finanzwissen.store.entities import (
    Activity,
    Answer,
    Badge,
    Challenge,
    Course,
    Question,
    User,
    UserBadge,
    UserChallenge,
    UserCourse,
)

T = TypeVar("T")


def _newest_first(created_at: datetime | None, entity_id: int) -> tuple[float, int]:
    ts = created_at.timestamp() if created_at else 0.0
    return (-ts, -entity_id)


class MemoryStore:
    """Dict-per-entity store. Records are copied in and out so callers can only
    change state through the ``update_*`` methods."""

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._challenges: dict[int, Challenge] = {}
        self._user_challenges: dict[int, UserChallenge] = {}
        self._badges: dict[int, Badge] = {}
        self._user_badges: dict[int, UserBadge] = {}
        self._questions: dict[int, Question] = {}
        self._answers: dict[int, Answer] = {}
        self._courses: dict[int, Course] = {}
        self._user_courses: dict[int, UserCourse] = {}
        self._activities: dict[int, Activity] = {}
        self._ids: dict[str, itertools.count[int]] = {}

    def _next_id(self, kind: str) -> int:
        counter = self._ids.setdefault(kind, itertools.count(1))
        return next(counter)

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def _update(table: dict[int, T], entity_id: int, fields: dict[str, Any]) -> T | None:
        current = table.get(entity_id)
        if current is None:
            return None
        updated = replace(current, **fields)  # type: ignore[type-var]
        table[entity_id] = updated
        return replace(updated)  # type: ignore[type-var]

    @staticmethod
    def _copy(entity: T | None) -> T | None:
        return replace(entity) if entity is not None else None  # type: ignore[type-var]

    # --- Users ---

    async def get_user(self, user_id: int) -> User | None:
        return self._copy(self._users.get(user_id))

    async def get_user_by_username(self, username: str) -> User | None:
        for user in self._users.values():
            if user.username == username:
                return replace(user)
        return None

    async def create_user(self, username: str, password_hash: str) -> User:
        if await self.get_user_by_username(username) is not None:
            raise DuplicateUsernameError(username)
        user = User(
            id=self._next_id("users"),
            username=username,
            password_hash=password_hash,
            created_at=self._now(),
        )
        self._users[user.id] = user
        return replace(user)

    async def update_user(self, user_id: int, **fields: Any) -> User | None:
        return self._update(self._users, user_id, fields)

    async def list_users(self) -> list[User]:
        return [replace(u) for u in self._users.values()]

    # --- Challenges ---

    async def list_challenges(self) -> list[Challenge]:
        return [replace(c) for c in self._challenges.values()]

    async def get_challenge(self, challenge_id: int) -> Challenge | None:
        return self._copy(self._challenges.get(challenge_id))

    async def create_challenge(self, **fields: Any) -> Challenge:
        challenge = Challenge(id=self._next_id("challenges"), **fields)
        self._challenges[challenge.id] = challenge
        return replace(challenge)

    async def get_user_challenge(self, user_id: int, challenge_id: int) -> UserChallenge | None:
        for uc in self._user_challenges.values():
            if uc.user_id == user_id and uc.challenge_id == challenge_id:
                return replace(uc)
        return None

    async def create_user_challenge(self, user_id: int, challenge_id: int) -> tuple[UserChallenge, bool]:
        existing = await self.get_user_challenge(user_id, challenge_id)
        if existing is not None:
            return existing, False
        uc = UserChallenge(id=self._next_id("user_challenges"), user_id=user_id, challenge_id=challenge_id)
        self._user_challenges[uc.id] = uc
        return replace(uc), True

    async def update_user_challenge(self, user_challenge_id: int, **fields: Any) -> UserChallenge | None:
        return self._update(self._user_challenges, user_challenge_id, fields)

    async def list_user_challenges(self, user_id: int) -> list[UserChallenge]:
        return [replace(uc) for uc in self._user_challenges.values() if uc.user_id == user_id]

    # --- Badges ---

    async def list_badges(self) -> list[Badge]:
        return [replace(b) for b in self._badges.values()]

    async def get_badge(self, badge_id: int) -> Badge | None:
        return self._copy(self._badges.get(badge_id))

    async def find_badge(self, requirement: str, required_amount: int) -> Badge | None:
        for badge in self._badges.values():
            if badge.requirement == requirement and badge.required_amount == required_amount:
                return replace(badge)
        return None

    async def create_badge(self, **fields: Any) -> Badge:
        badge = Badge(id=self._next_id("badges"), **fields)
        self._badges[badge.id] = badge
        return replace(badge)

    async def create_user_badge(self, user_id: int, badge_id: int) -> tuple[UserBadge, bool]:
        for ub in self._user_badges.values():
            if ub.user_id == user_id and ub.badge_id == badge_id:
                return replace(ub), False
        ub = UserBadge(id=self._next_id("user_badges"), user_id=user_id, badge_id=badge_id, earned_at=self._now())
        self._user_badges[ub.id] = ub
        return replace(ub), True

    async def list_user_badges(self, user_id: int) -> list[UserBadge]:
        return [replace(ub) for ub in self._user_badges.values() if ub.user_id == user_id]

    # --- Questions & answers ---

    async def list_questions(self, limit: int | None = None) -> list[Question]:
        questions = sorted(self._questions.values(), key=lambda q: _newest_first(q.created_at, q.id))
        if limit is not None:
            questions = questions[:limit]
        return [replace(q) for q in questions]

    async def get_question(self, question_id: int) -> Question | None:
        return self._copy(self._questions.get(question_id))

    async def create_question(self, user_id: int, title: str, content: str, tags: list[str]) -> Question:
        question = Question(
            id=self._next_id("questions"),
            user_id=user_id,
            title=title,
            content=content,
            tags=list(tags),
            created_at=self._now(),
        )
        self._questions[question.id] = question
        return replace(question)

    async def update_question(self, question_id: int, **fields: Any) -> Question | None:
        return self._update(self._questions, question_id, fields)

    async def get_answer(self, answer_id: int) -> Answer | None:
        return self._copy(self._answers.get(answer_id))

    async def create_answer(self, question_id: int, user_id: int, content: str) -> Answer:
        answer = Answer(
            id=self._next_id("answers"),
            question_id=question_id,
            user_id=user_id,
            content=content,
            created_at=self._now(),
        )
        self._answers[answer.id] = answer
        return replace(answer)

    async def update_answer(self, answer_id: int, **fields: Any) -> Answer | None:
        return self._update(self._answers, answer_id, fields)

    async def list_answers(self, question_id: int) -> list[Answer]:
        answers = [a for a in self._answers.values() if a.question_id == question_id]
        answers.sort(key=lambda a: (-a.votes, a.id))
        return [replace(a) for a in answers]

    async def count_user_answers(self, user_id: int) -> int:
        return sum(1 for a in self._answers.values() if a.user_id == user_id)

    # --- Courses ---

    async def list_courses(self) -> list[Course]:
        return [replace(c) for c in self._courses.values()]

    async def get_course(self, course_id: int) -> Course | None:
        return self._copy(self._courses.get(course_id))

    async def create_course(self, **fields: Any) -> Course:
        course = Course(id=self._next_id("courses"), **fields)
        self._courses[course.id] = course
        return replace(course)

    async def get_user_course(self, user_id: int, course_id: int) -> UserCourse | None:
        for uc in self._user_courses.values():
            if uc.user_id == user_id and uc.course_id == course_id:
                return replace(uc)
        return None

    async def create_user_course(self, user_id: int, course_id: int) -> tuple[UserCourse, bool]:
        existing = await self.get_user_course(user_id, course_id)
        if existing is not None:
            return existing, False
        uc = UserCourse(
            id=self._next_id("user_courses"),
            user_id=user_id,
            course_id=course_id,
            started_at=self._now(),
        )
        self._user_courses[uc.id] = uc
        return replace(uc), True

    async def update_user_course(self, user_course_id: int, **fields: Any) -> UserCourse | None:
        return self._update(self._user_courses, user_course_id, fields)

    async def list_user_courses(self, user_id: int) -> list[UserCourse]:
        return [replace(uc) for uc in self._user_courses.values() if uc.user_id == user_id]

    async def count_completed_courses(self, user_id: int) -> int:
        return sum(
            1 for uc in self._user_courses.values() if uc.user_id == user_id and uc.completed_at is not None
        )

    # --- Activity log ---

    async def append_activity(
        self,
        user_id: int,
        activity_type: str,
        description: str,
        points_awarded: int = 0,
        metadata: dict[str, Any] | None = None,
    ) -> Activity:
        activity = Activity(
            id=self._next_id("activities"),
            user_id=user_id,
            type=activity_type,
            description=description,
            points_awarded=points_awarded,
            created_at=self._now(),
            metadata=dict(metadata or {}),
        )
        self._activities[activity.id] = activity
        return replace(activity)

    async def list_activities(self, user_id: int, limit: int | None = None) -> list[Activity]:
        activities = sorted(
            (a for a in self._activities.values() if a.user_id == user_id),
            key=lambda a: _newest_first(a.created_at, a.id),
        )
        if limit is not None:
            activities = activities[:limit]
        return [replace(a) for a in activities]

    async def commit(self) -> None:
        """Nothing to flush; writes are visible immediately."""
