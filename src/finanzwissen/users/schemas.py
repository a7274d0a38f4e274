"""Request/response schemas for user profile endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    """Public user profile. The credential hash is never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    points: int
    level: int
    streak: int
    last_login_date: datetime | None = None
    created_at: datetime | None = None


class LevelResponse(BaseModel):
    level: int
    next_level: int
    level_progress: int
    level_cap: int
    points_to_next_level: int
    total_points: int


class RankResponse(BaseModel):
    user_id: int
    rank: int | None
    points: int


class ActivityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    description: str
    points_awarded: int
    created_at: datetime
    metadata: dict = {}


class ActivitiesResponse(BaseModel):
    activities: list[ActivityResponse]
    total: int
