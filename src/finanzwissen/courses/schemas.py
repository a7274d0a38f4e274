"""Request/response schemas for course endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    total_lessons: int


class CoursesResponse(BaseModel):
    courses: list[CourseResponse]


class ProgressRequest(BaseModel):
    """Absolute number of completed lessons."""

    lessons_completed: int


class UserCourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    course_id: int
    lessons_completed: int
    started_at: datetime | None = None
    completed_at: datetime | None = None


class UserCourseDetail(BaseModel):
    progress: UserCourseResponse
    course: CourseResponse


class UserCoursesResponse(BaseModel):
    courses: list[UserCourseDetail]
