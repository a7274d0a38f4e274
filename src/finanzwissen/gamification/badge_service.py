"""Badge awarding with duplicate prevention, plus live progress for display."""

from __future__ import annotations

import logging

from finanzwissen.activity.service import record_activity
from finanzwissen.exceptions import NotFoundError
from finanzwissen.gamification.rules import REQUIREMENT_LEVEL, REQUIREMENT_STREAK
from finanzwissen.store import Store
from finanzwissen.store.entities import Badge, User, UserBadge

logger = logging.getLogger(__name__)


async def award_badge(store: Store, user_id: int, badge_id: int) -> tuple[UserBadge, bool]:
    """Award a badge to a user.

    Idempotent: a second award returns the first ``UserBadge`` with
    ``created=False`` and logs nothing. A new award appends a zero-point
    ``badge_earned`` activity.
    """
    badge = await store.get_badge(badge_id)
    if badge is None:
        raise NotFoundError("Badge", badge_id)

    user_badge, created = await store.create_user_badge(user_id, badge.id)
    if not created:
        return user_badge, False

    await record_activity(
        store,
        user_id,
        "badge_earned",
        f'Du hast das Abzeichen "{badge.title}" freigeschaltet!',
        points_awarded=0,
        metadata={"badge_id": badge.id},
    )
    logger.info("Badge %r awarded to user %d", badge.title, user_id)
    return user_badge, True


async def award_badge_for(
    store: Store, user_id: int, requirement: str, required_amount: int
) -> UserBadge | None:
    """Award the badge matching (requirement, required_amount). Returns None if no such badge is defined."""
    badge = await store.find_badge(requirement, required_amount)
    if badge is None:
        logger.warning("Badge not found: requirement=%s amount=%d", requirement, required_amount)
        return None
    user_badge, _ = await award_badge(store, user_id, badge.id)
    return user_badge


def badge_progress(badge: Badge, user: User) -> float:
    """Live progress in [0, 1]. Only streak and level badges are tracked; others show 0."""
    if badge.required_amount <= 0:
        return 0.0
    if badge.requirement == REQUIREMENT_STREAK:
        return min(1.0, user.streak / badge.required_amount)
    if badge.requirement == REQUIREMENT_LEVEL:
        return min(1.0, user.level / badge.required_amount)
    return 0.0


async def list_badges(store: Store) -> list[Badge]:
    return await store.list_badges()


async def list_user_badges(store: Store, user_id: int) -> list[tuple[Badge, UserBadge]]:
    """Earned badges with their definitions, in award order."""
    earned = []
    for user_badge in await store.list_user_badges(user_id):
        badge = await store.get_badge(user_badge.badge_id)
        if badge is None:
            raise NotFoundError("Badge", user_badge.badge_id)
        earned.append((badge, user_badge))
    return earned


async def list_badges_with_progress(store: Store, user: User) -> list[dict]:
    """Every badge definition with the user's earned flag and progress.

    An earned badge always reports progress 1.0, including the kinds whose
    live progress is never tracked (``quizzes_completed``,
    ``leaderboard_rank``). Unearned badges report the live value.
    """
    earned = {ub.badge_id: ub for _, ub in await list_user_badges(store, user.id)}
    items = []
    for badge in await store.list_badges():
        user_badge = earned.get(badge.id)
        items.append({
            "badge": badge,
            "earned": user_badge is not None,
            "earned_at": user_badge.earned_at if user_badge else None,
            "progress": 1.0 if user_badge else badge_progress(badge, user),
        })
    return items
