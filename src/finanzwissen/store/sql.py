"""Store backed by an async SQLAlchemy session."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, TypeVar

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from finanzwissen.db import models
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

logger = structlog.get_logger()

M = TypeVar("M", bound=models.Base)


def _utc(dt: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Row -> entity mapping
# ---------------------------------------------------------------------------


def _user(row: models.User) -> User:
    return User(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        points=row.points,
        level=row.level,
        streak=row.streak,
        last_login_date=_utc(row.last_login_date),
        created_at=_utc(row.created_at),
    )


def _challenge(row: models.Challenge) -> Challenge:
    return Challenge(
        id=row.id,
        title=row.title,
        description=row.description,
        points_reward=row.points_reward,
        icon=row.icon,
        icon_bg_color=row.icon_bg_color,
        type=row.type,
    )


def _user_challenge(row: models.UserChallenge) -> UserChallenge:
    return UserChallenge(
        id=row.id,
        user_id=row.user_id,
        challenge_id=row.challenge_id,
        completed=row.completed,
        completed_at=_utc(row.completed_at),
        expires_at=_utc(row.expires_at),
    )


def _badge(row: models.Badge) -> Badge:
    return Badge(
        id=row.id,
        title=row.title,
        description=row.description,
        icon=row.icon,
        icon_bg_color=row.icon_bg_color,
        requirement=row.requirement,
        required_amount=row.required_amount,
    )


def _user_badge(row: models.UserBadge) -> UserBadge:
    return UserBadge(id=row.id, user_id=row.user_id, badge_id=row.badge_id, earned_at=_utc(row.earned_at))


def _question(row: models.Question) -> Question:
    return Question(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        content=row.content,
        tags=list(row.tags or []),
        created_at=_utc(row.created_at),
        votes=row.votes,
    )


def _answer(row: models.Answer) -> Answer:
    return Answer(
        id=row.id,
        question_id=row.question_id,
        user_id=row.user_id,
        content=row.content,
        created_at=_utc(row.created_at),
        votes=row.votes,
    )


def _course(row: models.Course) -> Course:
    return Course(id=row.id, title=row.title, description=row.description, total_lessons=row.total_lessons)


def _user_course(row: models.UserCourse) -> UserCourse:
    return UserCourse(
        id=row.id,
        user_id=row.user_id,
        course_id=row.course_id,
        lessons_completed=row.lessons_completed,
        started_at=_utc(row.started_at),
        completed_at=_utc(row.completed_at),
    )


def _activity(row: models.Activity) -> Activity:
    return Activity(
        id=row.id,
        user_id=row.user_id,
        type=row.type,
        description=row.description,
        points_awarded=row.points_awarded,
        created_at=_utc(row.created_at),  # type: ignore[arg-type]
        metadata=dict(row.activity_metadata or {}),
    )


class SqlStore:
    """Store implementation over one ``AsyncSession`` (one unit of work per request).

    Writes are flushed immediately so generated ids are available; nothing is
    durable until ``commit()``.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _add(self, row: M) -> M:
        self.db.add(row)
        await self.db.flush()
        return row

    async def _update(self, model: type[M], entity_id: int, fields: dict[str, Any]) -> M | None:
        row = await self.db.get(model, entity_id)
        if row is None:
            return None
        for name, value in fields.items():
            if not hasattr(row, name):
                msg = f"{model.__name__} has no field {name!r}"
                raise TypeError(msg)
            setattr(row, name, value)
        await self.db.flush()
        return row

    # --- Users ---

    async def get_user(self, user_id: int) -> User | None:
        row = await self.db.get(models.User, user_id)
        return _user(row) if row else None

    async def get_user_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(models.User).where(models.User.username == username))
        row = result.scalar_one_or_none()
        return _user(row) if row else None

    async def create_user(self, username: str, password_hash: str) -> User:
        if await self.get_user_by_username(username) is not None:
            raise DuplicateUsernameError(username)
        row = models.User(
            username=username,
            password_hash=password_hash,
            points=0,
            level=1,
            streak=0,
            created_at=_now(),
        )
        try:
            await self._add(row)
        except IntegrityError as e:
            raise DuplicateUsernameError(username) from e
        return _user(row)

    async def update_user(self, user_id: int, **fields: Any) -> User | None:
        row = await self._update(models.User, user_id, fields)
        return _user(row) if row else None

    async def list_users(self) -> list[User]:
        result = await self.db.execute(select(models.User).order_by(models.User.id))
        return [_user(row) for row in result.scalars()]

    # --- Challenges ---

    async def list_challenges(self) -> list[Challenge]:
        result = await self.db.execute(select(models.Challenge).order_by(models.Challenge.id))
        return [_challenge(row) for row in result.scalars()]

    async def get_challenge(self, challenge_id: int) -> Challenge | None:
        row = await self.db.get(models.Challenge, challenge_id)
        return _challenge(row) if row else None

    async def create_challenge(self, **fields: Any) -> Challenge:
        return _challenge(await self._add(models.Challenge(**fields)))

    async def _user_challenge_row(self, user_id: int, challenge_id: int) -> models.UserChallenge | None:
        result = await self.db.execute(
            select(models.UserChallenge).where(
                models.UserChallenge.user_id == user_id,
                models.UserChallenge.challenge_id == challenge_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_user_challenge(self, user_id: int, challenge_id: int) -> UserChallenge | None:
        row = await self._user_challenge_row(user_id, challenge_id)
        return _user_challenge(row) if row else None

    async def create_user_challenge(self, user_id: int, challenge_id: int) -> tuple[UserChallenge, bool]:
        existing = await self._user_challenge_row(user_id, challenge_id)
        if existing is not None:
            return _user_challenge(existing), False
        row = await self._add(models.UserChallenge(user_id=user_id, challenge_id=challenge_id, completed=False))
        return _user_challenge(row), True

    async def update_user_challenge(self, user_challenge_id: int, **fields: Any) -> UserChallenge | None:
        row = await self._update(models.UserChallenge, user_challenge_id, fields)
        return _user_challenge(row) if row else None

    async def list_user_challenges(self, user_id: int) -> list[UserChallenge]:
        result = await self.db.execute(
            select(models.UserChallenge)
            .where(models.UserChallenge.user_id == user_id)
            .order_by(models.UserChallenge.id)
        )
        return [_user_challenge(row) for row in result.scalars()]

    # --- Badges ---

    async def list_badges(self) -> list[Badge]:
        result = await self.db.execute(select(models.Badge).order_by(models.Badge.id))
        return [_badge(row) for row in result.scalars()]

    async def get_badge(self, badge_id: int) -> Badge | None:
        row = await self.db.get(models.Badge, badge_id)
        return _badge(row) if row else None

    async def find_badge(self, requirement: str, required_amount: int) -> Badge | None:
        result = await self.db.execute(
            select(models.Badge)
            .where(
                models.Badge.requirement == requirement,
                models.Badge.required_amount == required_amount,
            )
            .order_by(models.Badge.id)
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return _badge(row) if row else None

    async def create_badge(self, **fields: Any) -> Badge:
        return _badge(await self._add(models.Badge(**fields)))

    async def create_user_badge(self, user_id: int, badge_id: int) -> tuple[UserBadge, bool]:
        result = await self.db.execute(
            select(models.UserBadge).where(
                models.UserBadge.user_id == user_id,
                models.UserBadge.badge_id == badge_id,
            )
        )
        existing = result.scalar_one_or_none()
        if existing is not None:
            return _user_badge(existing), False
        row = await self._add(models.UserBadge(user_id=user_id, badge_id=badge_id, earned_at=_now()))
        return _user_badge(row), True

    async def list_user_badges(self, user_id: int) -> list[UserBadge]:
        result = await self.db.execute(
            select(models.UserBadge).where(models.UserBadge.user_id == user_id).order_by(models.UserBadge.id)
        )
        return [_user_badge(row) for row in result.scalars()]

    # --- Questions & answers ---

    async def list_questions(self, limit: int | None = None) -> list[Question]:
        stmt = select(models.Question).order_by(models.Question.created_at.desc(), models.Question.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return [_question(row) for row in result.scalars()]

    async def get_question(self, question_id: int) -> Question | None:
        row = await self.db.get(models.Question, question_id)
        return _question(row) if row else None

    async def create_question(self, user_id: int, title: str, content: str, tags: list[str]) -> Question:
        row = models.Question(
            user_id=user_id,
            title=title,
            content=content,
            tags=list(tags),
            created_at=_now(),
            votes=0,
        )
        return _question(await self._add(row))

    async def update_question(self, question_id: int, **fields: Any) -> Question | None:
        row = await self._update(models.Question, question_id, fields)
        return _question(row) if row else None

    async def get_answer(self, answer_id: int) -> Answer | None:
        row = await self.db.get(models.Answer, answer_id)
        return _answer(row) if row else None

    async def create_answer(self, question_id: int, user_id: int, content: str) -> Answer:
        row = models.Answer(question_id=question_id, user_id=user_id, content=content, created_at=_now(), votes=0)
        return _answer(await self._add(row))

    async def update_answer(self, answer_id: int, **fields: Any) -> Answer | None:
        row = await self._update(models.Answer, answer_id, fields)
        return _answer(row) if row else None

    async def list_answers(self, question_id: int) -> list[Answer]:
        result = await self.db.execute(
            select(models.Answer)
            .where(models.Answer.question_id == question_id)
            .order_by(models.Answer.votes.desc(), models.Answer.id)
        )
        return [_answer(row) for row in result.scalars()]

    async def count_user_answers(self, user_id: int) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(models.Answer).where(models.Answer.user_id == user_id)
        )
        return result.scalar_one()

    # --- Courses ---

    async def list_courses(self) -> list[Course]:
        result = await self.db.execute(select(models.Course).order_by(models.Course.id))
        return [_course(row) for row in result.scalars()]

    async def get_course(self, course_id: int) -> Course | None:
        row = await self.db.get(models.Course, course_id)
        return _course(row) if row else None

    async def create_course(self, **fields: Any) -> Course:
        return _course(await self._add(models.Course(**fields)))

    async def _user_course_row(self, user_id: int, course_id: int) -> models.UserCourse | None:
        result = await self.db.execute(
            select(models.UserCourse).where(
                models.UserCourse.user_id == user_id,
                models.UserCourse.course_id == course_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_user_course(self, user_id: int, course_id: int) -> UserCourse | None:
        row = await self._user_course_row(user_id, course_id)
        return _user_course(row) if row else None

    async def create_user_course(self, user_id: int, course_id: int) -> tuple[UserCourse, bool]:
        existing = await self._user_course_row(user_id, course_id)
        if existing is not None:
            return _user_course(existing), False
        row = await self._add(
            models.UserCourse(user_id=user_id, course_id=course_id, lessons_completed=0, started_at=_now())
        )
        return _user_course(row), True

    async def update_user_course(self, user_course_id: int, **fields: Any) -> UserCourse | None:
        row = await self._update(models.UserCourse, user_course_id, fields)
        return _user_course(row) if row else None

    async def list_user_courses(self, user_id: int) -> list[UserCourse]:
        result = await self.db.execute(
            select(models.UserCourse).where(models.UserCourse.user_id == user_id).order_by(models.UserCourse.id)
        )
        return [_user_course(row) for row in result.scalars()]

    async def count_completed_courses(self, user_id: int) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(models.UserCourse)
            .where(
                models.UserCourse.user_id == user_id,
                models.UserCourse.completed_at.is_not(None),
            )
        )
        return result.scalar_one()

    # --- Activity log ---

    async def append_activity(
        self,
        user_id: int,
        activity_type: str,
        description: str,
        points_awarded: int = 0,
        metadata: dict[str, Any] | None = None,
    ) -> Activity:
        row = models.Activity(
            user_id=user_id,
            type=activity_type,
            description=description,
            points_awarded=points_awarded,
            created_at=_now(),
            activity_metadata=dict(metadata or {}),
        )
        return _activity(await self._add(row))

    async def list_activities(self, user_id: int, limit: int | None = None) -> list[Activity]:
        stmt = (
            select(models.Activity)
            .where(models.Activity.user_id == user_id)
            .order_by(models.Activity.created_at.desc(), models.Activity.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return [_activity(row) for row in result.scalars()]

    async def commit(self) -> None:
        await self.db.commit()
        logger.debug("store_committed")
