"""Challenge router: list and complete daily challenges."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from finanzwissen.auth.dependencies import get_current_user
from finanzwissen.challenges.schemas import (
    ChallengeResponse,
    ChallengesResponse,
    UserChallengeDetail,
    UserChallengeResponse,
    UserChallengesResponse,
)
from finanzwissen.challenges.service import complete_challenge, list_challenges, list_user_challenges
from finanzwissen.dependencies import get_store
from finanzwissen.store import Store
from finanzwissen.store.entities import User

router = APIRouter(prefix="/api/v1", tags=["Challenges"])


@router.get("/challenges", response_model=ChallengesResponse)
async def get_challenges(store: Store = Depends(get_store)) -> ChallengesResponse:
    challenges = await list_challenges(store)
    return ChallengesResponse(challenges=[ChallengeResponse.model_validate(c) for c in challenges])


@router.get("/users/me/challenges", response_model=UserChallengesResponse)
async def get_my_challenges(
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> UserChallengesResponse:
    """Every challenge with the current user's completion state."""
    items = await list_user_challenges(store, user.id)
    return UserChallengesResponse(
        challenges=[
            UserChallengeDetail(
                challenge=ChallengeResponse.model_validate(challenge),
                completed=uc.completed if uc else False,
                completed_at=uc.completed_at if uc else None,
            )
            for challenge, uc in items
        ]
    )


@router.post("/challenges/{challenge_id}/complete", response_model=UserChallengeResponse)
async def complete(
    challenge_id: int,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> UserChallengeResponse:
    """Complete a challenge and collect its reward."""
    user_challenge = await complete_challenge(store, user.id, challenge_id)
    await store.commit()
    return UserChallengeResponse.model_validate(user_challenge)
