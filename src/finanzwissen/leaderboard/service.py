"""Leaderboard ranking, recomputed from current point totals on every call.

Users are ordered by points descending. The sort is stable over the store's
registration order, so equal-point users keep that order across calls.
"""

from __future__ import annotations

import logging

from finanzwissen.exceptions import ValidationFailureError
from finanzwissen.store import Store
from finanzwissen.store.entities import User

logger = logging.getLogger(__name__)


def rank_users(users: list[User]) -> list[User]:
    """Total order by points descending; ties keep input order."""
    return sorted(users, key=lambda u: -u.points)


async def top_users(store: Store, n: int) -> list[User]:
    """The first ``n`` users of the ranking."""
    if n < 1:
        raise ValidationFailureError("limit must be a positive integer", field="limit", value=n)
    return rank_users(await store.list_users())[:n]


async def get_user_rank(store: Store, user_id: int) -> int | None:
    """1-based rank of a user, or None when the user is not ranked."""
    for position, user in enumerate(rank_users(await store.list_users()), start=1):
        if user.id == user_id:
            return position
    return None
