"""Point grants for progression events."""

from __future__ import annotations

from typing import Any

import structlog

from finanzwissen.exceptions import NotFoundError
from finanzwissen.gamification.effects import Effect
from finanzwissen.gamification.engine import apply_effects
from finanzwissen.gamification.rules import points_effects
from finanzwissen.store import Store
from finanzwissen.store.entities import User

logger = structlog.get_logger()


async def require_user(store: Store, user_id: int) -> User:
    """Look up a user, raising NotFoundError before any write happens."""
    user = await store.get_user(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


async def grant_points(
    store: Store,
    user_id: int,
    amount: int,
    activity_type: str,
    description: str,
    metadata: dict[str, Any] | None = None,
    extra_effects: list[Effect] | None = None,
) -> User:
    """Grant points for an event.

    Adds the points, appends exactly one activity for the event, re-derives
    the level (level-up activity and level badge included), then applies any
    event-specific ``extra_effects`` such as milestone badges.
    """
    user = await require_user(store, user_id)

    effects = points_effects(user.level, user.points, amount, activity_type, description, metadata)
    effects.extend(extra_effects or [])
    updated = await apply_effects(store, user_id, effects)
    logger.info(
        "points_granted",
        user_id=user_id,
        amount=amount,
        source=activity_type,
        total=updated.points,
        level=updated.level,
    )
    return updated
