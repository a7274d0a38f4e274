"""Plain entity records shared by every store backend.

Relationships are by id only; no entity embeds another. Both the in-memory
and the SQL store hand out these dataclasses, never ORM rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class User:
    id: int
    username: str
    password_hash: str
    points: int = 0
    level: int = 1
    streak: int = 0
    last_login_date: datetime | None = None
    created_at: datetime | None = None


@dataclass
class Challenge:
    id: int
    title: str
    description: str
    points_reward: int
    icon: str
    icon_bg_color: str
    type: str  # daily, weekly, one-time


@dataclass
class UserChallenge:
    id: int
    user_id: int
    challenge_id: int
    completed: bool = False
    completed_at: datetime | None = None
    expires_at: datetime | None = None


@dataclass
class Badge:
    id: int
    title: str
    description: str
    icon: str
    icon_bg_color: str
    requirement: str  # streak, level, answers_given, courses_completed, ...
    required_amount: int


@dataclass
class UserBadge:
    id: int
    user_id: int
    badge_id: int
    earned_at: datetime


@dataclass
class Question:
    id: int
    user_id: int
    title: str
    content: str
    tags: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    votes: int = 0


@dataclass
class Answer:
    id: int
    question_id: int
    user_id: int
    content: str
    created_at: datetime | None = None
    votes: int = 0


@dataclass
class Course:
    id: int
    title: str
    description: str
    total_lessons: int


@dataclass
class UserCourse:
    id: int
    user_id: int
    course_id: int
    lessons_completed: int = 0
    started_at: datetime | None = None
    completed_at: datetime | None = None


@dataclass(frozen=True)
class Activity:
    """Immutable audit entry for a progression-relevant event."""

    id: int
    user_id: int
    type: str
    description: str
    points_awarded: int
    created_at: datetime
    metadata: dict[str, Any] = field(default_factory=dict)
