"""Append-only activity log for the profile timeline."""

from __future__ import annotations

import logging
from typing import Any

from finanzwissen.exceptions import ValidationFailureError
from finanzwissen.store import Store
from finanzwissen.store.entities import Activity

logger = logging.getLogger(__name__)


async def record_activity(
    store: Store,
    user_id: int,
    activity_type: str,
    description: str,
    points_awarded: int = 0,
    metadata: dict[str, Any] | None = None,
) -> Activity:
    """Append one entry. The store assigns id and timestamp."""
    activity = await store.append_activity(
        user_id=user_id,
        activity_type=activity_type,
        description=description,
        points_awarded=points_awarded,
        metadata=metadata,
    )
    logger.debug("Activity %s recorded for user %d (+%d)", activity_type, user_id, points_awarded)
    return activity


async def get_user_activities(store: Store, user_id: int, limit: int | None = None) -> list[Activity]:
    """Entries for a user, newest first. ``limit`` truncates; there is no paging."""
    if limit is not None and limit < 1:
        raise ValidationFailureError("limit must be a positive integer", field="limit", value=limit)
    return await store.list_activities(user_id, limit)
