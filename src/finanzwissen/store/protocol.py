"""Repository protocol the services and the progression engine depend on."""

from __future__ import annotations

from typing import Any, Protocol

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


class Store(Protocol):
    """Keyed storage for every entity type.

    Ids are assigned on create, increase monotonically and are never reused.
    ``update_*`` merges the given fields and returns ``None`` for a missing id.
    ``create_user_*`` join records are idempotent per (user, target) pair and
    return ``(record, created)``.
    """

    # --- Users ---
    async def get_user(self, user_id: int) -> User | None: ...

    async def get_user_by_username(self, username: str) -> User | None: ...

    async def create_user(self, username: str, password_hash: str) -> User: ...

    async def update_user(self, user_id: int, **fields: Any) -> User | None: ...

    async def list_users(self) -> list[User]: ...

    # --- Challenges ---
    async def list_challenges(self) -> list[Challenge]: ...

    async def get_challenge(self, challenge_id: int) -> Challenge | None: ...

    async def create_challenge(self, **fields: Any) -> Challenge: ...

    async def get_user_challenge(self, user_id: int, challenge_id: int) -> UserChallenge | None: ...

    async def create_user_challenge(self, user_id: int, challenge_id: int) -> tuple[UserChallenge, bool]: ...

    async def update_user_challenge(self, user_challenge_id: int, **fields: Any) -> UserChallenge | None: ...

    async def list_user_challenges(self, user_id: int) -> list[UserChallenge]: ...

    # --- Badges ---
    async def list_badges(self) -> list[Badge]: ...

    async def get_badge(self, badge_id: int) -> Badge | None: ...

    async def find_badge(self, requirement: str, required_amount: int) -> Badge | None: ...

    async def create_badge(self, **fields: Any) -> Badge: ...

    async def create_user_badge(self, user_id: int, badge_id: int) -> tuple[UserBadge, bool]: ...

    async def list_user_badges(self, user_id: int) -> list[UserBadge]: ...

    # --- Questions & answers ---
    async def list_questions(self, limit: int | None = None) -> list[Question]: ...

    async def get_question(self, question_id: int) -> Question | None: ...

    async def create_question(self, user_id: int, title: str, content: str, tags: list[str]) -> Question: ...

    async def update_question(self, question_id: int, **fields: Any) -> Question | None: ...

    async def get_answer(self, answer_id: int) -> Answer | None: ...

    async def create_answer(self, question_id: int, user_id: int, content: str) -> Answer: ...

    async def update_answer(self, answer_id: int, **fields: Any) -> Answer | None: ...

    async def list_answers(self, question_id: int) -> list[Answer]: ...

    async def count_user_answers(self, user_id: int) -> int: ...

    # --- Courses ---
    async def list_courses(self) -> list[Course]: ...

    async def get_course(self, course_id: int) -> Course | None: ...

    async def create_course(self, **fields: Any) -> Course: ...

    async def get_user_course(self, user_id: int, course_id: int) -> UserCourse | None: ...

    async def create_user_course(self, user_id: int, course_id: int) -> tuple[UserCourse, bool]: ...

    async def update_user_course(self, user_course_id: int, **fields: Any) -> UserCourse | None: ...

    async def list_user_courses(self, user_id: int) -> list[UserCourse]: ...

    async def count_completed_courses(self, user_id: int) -> int: ...

    # --- Activity log ---
    async def append_activity(
        self,
        user_id: int,
        activity_type: str,
        description: str,
        points_awarded: int = 0,
        metadata: dict[str, Any] | None = None,
    ) -> Activity: ...

    async def list_activities(self, user_id: int, limit: int | None = None) -> list[Activity]: ...

    # --- Unit of work ---
    async def commit(self) -> None: ...
