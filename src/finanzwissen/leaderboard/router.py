"""Leaderboard API endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from finanzwissen.config import get_settings
from finanzwissen.dependencies import get_store
from finanzwissen.leaderboard.schemas import LeaderboardEntry, LeaderboardResponse
from finanzwissen.leaderboard.service import top_users
from finanzwissen.store import Store

router = APIRouter(prefix="/api/v1", tags=["Leaderboard"])


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def leaderboard(
    limit: int | None = Query(None, ge=1, le=100),
    store: Store = Depends(get_store),
) -> LeaderboardResponse:
    """Top users by points."""
    n = limit or get_settings().leaderboard_default_limit
    users = await top_users(store, n)
    entries = [
        LeaderboardEntry(
            rank=position,
            user_id=u.id,
            username=u.username,
            points=u.points,
            level=u.level,
            streak=u.streak,
        )
        for position, u in enumerate(users, start=1)
    ]
    return LeaderboardResponse(entries=entries, total=len(entries))
