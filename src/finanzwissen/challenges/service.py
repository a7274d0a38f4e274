"""Daily challenges and their completion."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from finanzwissen.exceptions import NotFoundError
from finanzwissen.gamification.points_service import grant_points, require_user
from finanzwissen.store import Store
from finanzwissen.store.entities import Challenge, UserChallenge

logger = structlog.get_logger()


async def list_challenges(store: Store) -> list[Challenge]:
    return await store.list_challenges()


async def list_user_challenges(store: Store, user_id: int) -> list[tuple[Challenge, UserChallenge | None]]:
    """Every challenge with the user's instance, or None if never started."""
    instances = {uc.challenge_id: uc for uc in await store.list_user_challenges(user_id)}
    return [(c, instances.get(c.id)) for c in await store.list_challenges()]


async def complete_challenge(store: Store, user_id: int, challenge_id: int) -> UserChallenge:
    """
    Mark a challenge completed and grant its reward.

    The user's instance is created on first use. Completion is one-way:
    completing an already completed challenge returns the record unchanged
    and grants nothing.

    Raises:
        NotFoundError: Unknown challenge or user.
    """
    challenge = await store.get_challenge(challenge_id)
    if challenge is None:
        raise NotFoundError("Challenge", challenge_id)
    await require_user(store, user_id)

    user_challenge, _ = await store.create_user_challenge(user_id, challenge.id)
    if user_challenge.completed:
        return user_challenge

    updated = await store.update_user_challenge(
        user_challenge.id, completed=True, completed_at=datetime.now(timezone.utc)
    )
    if updated is None:
        raise NotFoundError("UserChallenge", user_challenge.id)

    await grant_points(
        store,
        user_id,
        challenge.points_reward,
        "challenge_completed",
        f'Du hast die Herausforderung "{challenge.title}" abgeschlossen',
        metadata={"challenge_id": challenge.id},
    )
    logger.info("challenge_completed", user_id=user_id, challenge_id=challenge.id, points=challenge.points_reward)
    return updated
