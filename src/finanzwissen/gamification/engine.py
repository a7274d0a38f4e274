"""Executes progression effects against the store."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from finanzwissen.activity.service import record_activity
from finanzwissen.exceptions import NotFoundError
from finanzwissen.gamification.badge_service import award_badge_for
from finanzwissen.gamification.effects import (
    AddPoints,
    AwardBadge,
    Effect,
    LogActivity,
    SetLevel,
    SetStreak,
)
from finanzwissen.store import Store
from finanzwissen.store.entities import User

logger = logging.getLogger(__name__)


async def apply_effects(store: Store, user_id: int, effects: Iterable[Effect]) -> User:
    """Apply effects in order and return the refreshed user."""
    user = await store.get_user(user_id)
    if user is None:
        raise NotFoundError("User", user_id)

    for effect in effects:
        if isinstance(effect, AddPoints):
            updated = await store.update_user(user_id, points=user.points + effect.amount)
        elif isinstance(effect, SetLevel):
            updated = await store.update_user(user_id, level=effect.level)
            logger.info("User %d leveled up: %d -> %d", user_id, user.level, effect.level)
        elif isinstance(effect, SetStreak):
            updated = await store.update_user(
                user_id, streak=effect.streak, last_login_date=effect.last_login_date
            )
        elif isinstance(effect, AwardBadge):
            await award_badge_for(store, user_id, effect.requirement, effect.required_amount)
            continue
        elif isinstance(effect, LogActivity):
            await record_activity(
                store,
                user_id,
                effect.type,
                effect.description,
                points_awarded=effect.points_awarded,
                metadata=effect.metadata,
            )
            continue
        else:
            msg = f"Unknown effect: {effect!r}"
            raise TypeError(msg)

        if updated is None:
            raise NotFoundError("User", user_id)
        user = updated

    return user
