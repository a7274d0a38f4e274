"""Badge API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from finanzwissen.auth.dependencies import get_current_user
from finanzwissen.dependencies import get_store
from finanzwissen.gamification.badge_service import list_badges, list_badges_with_progress
from finanzwissen.gamification.schemas import (
    AllBadgesResponse,
    BadgeResponse,
    UserBadgeResponse,
    UserBadgesResponse,
)
from finanzwissen.store import Store
from finanzwissen.store.entities import User

router = APIRouter(prefix="/api/v1", tags=["Gamification"])


@router.get("/badges", response_model=AllBadgesResponse)
async def get_badges(store: Store = Depends(get_store)):
    """Get all badge definitions."""
    badges = await list_badges(store)
    return AllBadgesResponse(badges=[BadgeResponse.model_validate(b) for b in badges])


@router.get("/users/me/badges", response_model=UserBadgesResponse)
async def get_my_badges(
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    """Every badge with the current user's earned flag and live progress."""
    items = await list_badges_with_progress(store, user)
    badges = [
        UserBadgeResponse(
            badge=BadgeResponse.model_validate(item["badge"]),
            earned=item["earned"],
            earned_at=item["earned_at"],
            progress=item["progress"],
        )
        for item in items
    ]
    return UserBadgesResponse(
        badges=badges,
        total_available=len(badges),
        total_earned=sum(1 for b in badges if b.earned),
    )
