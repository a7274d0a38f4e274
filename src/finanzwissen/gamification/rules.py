"""Progression rules.

Pure functions: given the current progression state they return the effects
to apply, in order. Nothing here touches the store; see ``engine`` for that.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from finanzwissen.gamification.effects import (
    AddPoints,
    AwardBadge,
    Effect,
    LogActivity,
    SetLevel,
    SetStreak,
)
from finanzwissen.gamification.levels import LEVEL_BADGE_THRESHOLD, compute_level

# --- Point rewards ---
POINTS_QUESTION_ASKED = 10
POINTS_ANSWER_GIVEN = 20
POINTS_COURSE_COMPLETED = 75

# --- Badge requirement kinds ---
REQUIREMENT_STREAK = "streak"
REQUIREMENT_LEVEL = "level"
REQUIREMENT_ANSWERS = "answers_given"
REQUIREMENT_COURSES = "courses_completed"

# --- Milestones ---
STREAK_MILESTONE = 7
ANSWERS_MILESTONE = 10
COURSES_MILESTONE = 5


def _utc_day(dt: datetime):
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).date()


def next_streak(streak: int, last_login_date: datetime | None, now: datetime) -> int:
    """Streak after a login at ``now``, comparing UTC calendar days.

    Yesterday continues the streak, today leaves it unchanged, anything else
    (a gap, a clock that moved backwards, or no previous login) starts over at 1.
    """
    if last_login_date is None:
        return 1
    days = (_utc_day(now) - _utc_day(last_login_date)).days
    if days == 1:
        return streak + 1
    if days == 0:
        return streak
    return 1


def streak_effects(streak: int, last_login_date: datetime | None, now: datetime) -> list[Effect]:
    """Effects of a successful login on the streak."""
    new_streak = next_streak(streak, last_login_date, now)
    effects: list[Effect] = [SetStreak(streak=new_streak, last_login_date=now)]
    if new_streak == STREAK_MILESTONE and streak != STREAK_MILESTONE:
        effects.append(AwardBadge(REQUIREMENT_STREAK, STREAK_MILESTONE))
        effects.append(
            LogActivity(
                type="streak_milestone",
                description=f"Du hast eine {STREAK_MILESTONE}-Tage Serie erreicht!",
                points_awarded=0,
                metadata={"streak_days": STREAK_MILESTONE},
            )
        )
    return effects


def level_effects(current_level: int, points: int) -> list[Effect]:
    """Level-up effects for a point total. Levels never go down."""
    new_level = compute_level(points)
    if new_level <= current_level:
        return []
    effects: list[Effect] = [
        SetLevel(new_level),
        LogActivity(
            type="level_up",
            description=f"Du bist auf Level {new_level} aufgestiegen!",
            points_awarded=0,
            metadata={"new_level": new_level, "old_level": current_level},
        ),
    ]
    if new_level >= LEVEL_BADGE_THRESHOLD:
        effects.append(AwardBadge(REQUIREMENT_LEVEL, LEVEL_BADGE_THRESHOLD))
    return effects


def points_effects(
    current_level: int,
    points: int,
    amount: int,
    activity_type: str,
    description: str,
    metadata: dict[str, Any] | None = None,
) -> list[Effect]:
    """Grant ``amount`` points: add them, log the event, then re-derive the level."""
    if amount < 0:
        msg = "Points are monotonic; amount must not be negative"
        raise ValueError(msg)
    return [
        AddPoints(amount),
        LogActivity(
            type=activity_type,
            description=description,
            points_awarded=amount,
            metadata=dict(metadata or {}),
        ),
        *level_effects(current_level, points + amount),
    ]


def answer_milestone_effects(answer_count: int) -> list[Effect]:
    """Badge for the user's 10th answer ever."""
    if answer_count == ANSWERS_MILESTONE:
        return [AwardBadge(REQUIREMENT_ANSWERS, ANSWERS_MILESTONE)]
    return []


def course_milestone_effects(completed_count: int) -> list[Effect]:
    """Badge for the user's 5th completed course."""
    if completed_count == COURSES_MILESTONE:
        return [AwardBadge(REQUIREMENT_COURSES, COURSES_MILESTONE)]
    return []
