"""User profile router: /api/v1/users/me endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from finanzwissen.activity.service import get_user_activities
from finanzwissen.auth.dependencies import get_current_user
from finanzwissen.dependencies import get_store
from finanzwissen.gamification.levels import level_details
from finanzwissen.leaderboard.service import get_user_rank
from finanzwissen.store import Store
from finanzwissen.store.entities import User
from finanzwissen.users.schemas import (
    ActivitiesResponse,
    ActivityResponse,
    LevelResponse,
    RankResponse,
    UserResponse,
)

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@router.get("/me", response_model=UserResponse)
async def get_profile(
    user: User = Depends(get_current_user),
) -> UserResponse:
    """Get own profile."""
    return UserResponse.model_validate(user)


@router.get("/me/level", response_model=LevelResponse)
async def get_my_level(
    user: User = Depends(get_current_user),
) -> LevelResponse:
    """Level, progress within the level and points to the next one."""
    return LevelResponse(**level_details(user.level, user.points))


@router.get("/me/rank", response_model=RankResponse)
async def get_my_rank(
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> RankResponse:
    rank = await get_user_rank(store, user.id)
    return RankResponse(user_id=user.id, rank=rank, points=user.points)


@router.get("/me/activities", response_model=ActivitiesResponse)
async def get_my_activities(
    limit: int | None = Query(None, ge=1, le=100),
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> ActivitiesResponse:
    """Activity timeline, newest first."""
    activities = await get_user_activities(store, user.id, limit)
    return ActivitiesResponse(
        activities=[ActivityResponse.model_validate(a) for a in activities],
        total=len(activities),
    )
