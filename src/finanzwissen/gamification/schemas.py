"""Pydantic response models for badge endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BadgeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    icon: str
    icon_bg_color: str
    requirement: str
    required_amount: int


class AllBadgesResponse(BaseModel):
    badges: list[BadgeResponse]


class UserBadgeResponse(BaseModel):
    badge: BadgeResponse
    earned: bool
    earned_at: datetime | None = None
    progress: float


class UserBadgesResponse(BaseModel):
    badges: list[UserBadgeResponse]
    total_available: int
    total_earned: int
