"""Daily login streak tracking."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from finanzwissen.gamification.engine import apply_effects
from finanzwissen.gamification.rules import level_effects, streak_effects
from finanzwissen.store import Store
from finanzwissen.store.entities import User

logger = logging.getLogger(__name__)


async def record_login(store: Store, user: User, now: datetime | None = None) -> User:
    """Update the streak for a successful login, then re-check the level.

    Day boundaries are UTC calendar days.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    effects = streak_effects(user.streak, user.last_login_date, now)
    effects.extend(level_effects(user.level, user.points))
    updated = await apply_effects(store, user.id, effects)

    if updated.streak != user.streak:
        logger.info("User %d streak %d -> %d", user.id, user.streak, updated.streak)
    return updated
