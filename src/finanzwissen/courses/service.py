"""Course enrollment and lesson progress."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from finanzwissen.exceptions import CourseNotStartedError, NotFoundError, ValidationFailureError
from finanzwissen.gamification.points_service import grant_points, require_user
from finanzwissen.gamification.rules import POINTS_COURSE_COMPLETED, course_milestone_effects
from finanzwissen.store import Store
from finanzwissen.store.entities import Course, UserCourse

logger = structlog.get_logger()


async def list_courses(store: Store) -> list[Course]:
    return await store.list_courses()


async def list_user_courses(store: Store, user_id: int) -> list[tuple[UserCourse, Course]]:
    """Started courses with their definitions."""
    items = []
    for user_course in await store.list_user_courses(user_id):
        course = await store.get_course(user_course.course_id)
        if course is None:
            raise NotFoundError("Course", user_course.course_id)
        items.append((user_course, course))
    return items


async def start_course(store: Store, user_id: int, course_id: int) -> UserCourse:
    """Enroll a user. Starting an already started course returns the existing record."""
    course = await store.get_course(course_id)
    if course is None:
        raise NotFoundError("Course", course_id)
    await require_user(store, user_id)
    user_course, created = await store.create_user_course(user_id, course.id)
    if created:
        logger.info("course_started", user_id=user_id, course_id=course.id)
    return user_course


async def update_course_progress(
    store: Store,
    user_id: int,
    course_id: int,
    lessons_completed: int,
) -> UserCourse:
    """
    Record lesson progress for a started course.

    ``lessons_completed`` never decreases and is capped at the course length.
    The first time it reaches ``total_lessons`` the course is completed:
    ``completed_at`` is set and 75 points are granted, exactly once. The
    user's 5th completed course also earns the courses badge.

    Raises:
        ValidationFailureError: Negative ``lessons_completed``.
        NotFoundError: Unknown course or user.
        CourseNotStartedError: The user never started the course.
    """
    if lessons_completed < 0:
        raise ValidationFailureError(
            "lessons_completed must not be negative", field="lessons_completed", value=lessons_completed
        )

    course = await store.get_course(course_id)
    if course is None:
        raise NotFoundError("Course", course_id)
    await require_user(store, user_id)
    user_course = await store.get_user_course(user_id, course_id)
    if user_course is None:
        raise CourseNotStartedError(course_id)

    new_count = max(user_course.lessons_completed, min(lessons_completed, course.total_lessons))
    just_completed = user_course.completed_at is None and new_count >= course.total_lessons

    fields: dict[str, object] = {"lessons_completed": new_count}
    if just_completed:
        fields["completed_at"] = datetime.now(timezone.utc)
    updated = await store.update_user_course(user_course.id, **fields)
    if updated is None:
        raise CourseNotStartedError(course_id)

    if just_completed:
        completed_count = await store.count_completed_courses(user_id)
        await grant_points(
            store,
            user_id,
            POINTS_COURSE_COMPLETED,
            "course_completed",
            f'Du hast den Kurs "{course.title}" abgeschlossen',
            metadata={"course_id": course.id},
            extra_effects=course_milestone_effects(completed_count),
        )
        logger.info("course_completed", user_id=user_id, course_id=course.id, completed_count=completed_count)

    return updated
