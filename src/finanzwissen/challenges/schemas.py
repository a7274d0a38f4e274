"""Request/response schemas for challenge endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ChallengeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    points_reward: int
    icon: str
    icon_bg_color: str
    type: str


class ChallengesResponse(BaseModel):
    challenges: list[ChallengeResponse]


class UserChallengeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    challenge_id: int
    completed: bool
    completed_at: datetime | None = None
    expires_at: datetime | None = None


class UserChallengeDetail(BaseModel):
    challenge: ChallengeResponse
    completed: bool
    completed_at: datetime | None = None


class UserChallengesResponse(BaseModel):
    challenges: list[UserChallengeDetail]
