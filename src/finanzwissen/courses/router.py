"""Course router: catalogue, enrollment and progress."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from finanzwissen.auth.dependencies import get_current_user
from finanzwissen.courses.schemas import (
    CourseResponse,
    CoursesResponse,
    ProgressRequest,
    UserCourseDetail,
    UserCourseResponse,
    UserCoursesResponse,
)
from finanzwissen.courses.service import (
    list_courses,
    list_user_courses,
    start_course,
    update_course_progress,
)
from finanzwissen.dependencies import get_store
from finanzwissen.store import Store
from finanzwissen.store.entities import User

router = APIRouter(prefix="/api/v1", tags=["Courses"])


@router.get("/courses", response_model=CoursesResponse)
async def get_courses(store: Store = Depends(get_store)) -> CoursesResponse:
    courses = await list_courses(store)
    return CoursesResponse(courses=[CourseResponse.model_validate(c) for c in courses])


@router.get("/users/me/courses", response_model=UserCoursesResponse)
async def get_my_courses(
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> UserCoursesResponse:
    """Courses the current user has started, with progress."""
    items = await list_user_courses(store, user.id)
    return UserCoursesResponse(
        courses=[
            UserCourseDetail(
                progress=UserCourseResponse.model_validate(uc),
                course=CourseResponse.model_validate(course),
            )
            for uc, course in items
        ]
    )


@router.post(
    "/courses/{course_id}/start",
    response_model=UserCourseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start(
    course_id: int,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> UserCourseResponse:
    """Start a course. Idempotent."""
    user_course = await start_course(store, user.id, course_id)
    await store.commit()
    return UserCourseResponse.model_validate(user_course)


@router.put("/courses/{course_id}/progress", response_model=UserCourseResponse)
async def update_progress(
    course_id: int,
    body: ProgressRequest,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> UserCourseResponse:
    """Report completed lessons. Completing the course grants 75 points once."""
    user_course = await update_course_progress(store, user.id, course_id, body.lessons_completed)
    await store.commit()
    return UserCourseResponse.model_validate(user_course)
