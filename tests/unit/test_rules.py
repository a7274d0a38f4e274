"""Progression rule tests: pure effect derivation, no store involved."""

from datetime import datetime, timedelta, timezone

import pytest

from finanzwissen.gamification.effects import AddPoints, AwardBadge, LogActivity, SetLevel, SetStreak
from finanzwissen.gamification.rules import (
    answer_milestone_effects,
    course_milestone_effects,
    level_effects,
    next_streak,
    points_effects,
    streak_effects,
)

NOW = datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc)


class TestNextStreak:
    """Streak transition table over UTC calendar days."""

    def test_yesterday_increments(self):
        assert next_streak(4, NOW - timedelta(days=1), NOW) == 5

    def test_today_unchanged(self):
        assert next_streak(4, NOW - timedelta(hours=2), NOW) == 4

    def test_three_days_ago_resets(self):
        assert next_streak(4, NOW - timedelta(days=3), NOW) == 1

    def test_first_login_starts_at_one(self):
        assert next_streak(0, None, NOW) == 1

    def test_clock_moved_backwards_resets(self):
        assert next_streak(4, NOW + timedelta(days=1), NOW) == 1

    def test_day_boundary_not_24_hours(self):
        """23:59 yesterday to 00:01 today is one calendar day apart."""
        last = datetime(2026, 3, 9, 23, 59, tzinfo=timezone.utc)
        now = datetime(2026, 3, 10, 0, 1, tzinfo=timezone.utc)
        assert next_streak(2, last, now) == 3

    def test_same_day_almost_24_hours(self):
        last = datetime(2026, 3, 10, 0, 0, tzinfo=timezone.utc)
        now = datetime(2026, 3, 10, 23, 59, tzinfo=timezone.utc)
        assert next_streak(2, last, now) == 2

    def test_other_timezone_compared_in_utc(self):
        """01:00 at UTC+2 on the 10th is still the 9th in UTC."""
        last = datetime(2026, 3, 10, 1, 0, tzinfo=timezone(timedelta(hours=2)))
        assert next_streak(2, last, NOW) == 3

    def test_naive_datetime_treated_as_utc(self):
        assert next_streak(2, datetime(2026, 3, 9, 12, 0), NOW) == 3


class TestStreakEffects:
    def test_always_sets_streak_and_login_date(self):
        effects = streak_effects(1, NOW - timedelta(days=1), NOW)
        assert effects == [SetStreak(streak=2, last_login_date=NOW)]

    def test_seventh_day_awards_badge_and_logs_milestone(self):
        effects = streak_effects(6, NOW - timedelta(days=1), NOW)
        assert effects[0] == SetStreak(streak=7, last_login_date=NOW)
        assert AwardBadge("streak", 7) in effects
        milestone = [e for e in effects if isinstance(e, LogActivity)]
        assert len(milestone) == 1
        assert milestone[0].type == "streak_milestone"
        assert milestone[0].points_awarded == 0
        assert milestone[0].metadata == {"streak_days": 7}

    def test_same_day_login_at_seven_does_not_repeat_milestone(self):
        effects = streak_effects(7, NOW - timedelta(hours=1), NOW)
        assert effects == [SetStreak(streak=7, last_login_date=NOW)]

    def test_eighth_day_has_no_milestone(self):
        effects = streak_effects(7, NOW - timedelta(days=1), NOW)
        assert effects == [SetStreak(streak=8, last_login_date=NOW)]


class TestLevelEffects:
    def test_no_change_below_threshold(self):
        assert level_effects(1, 499) == []

    def test_level_up_logs_zero_point_activity(self):
        effects = level_effects(1, 500)
        assert effects[0] == SetLevel(2)
        assert isinstance(effects[1], LogActivity)
        assert effects[1].type == "level_up"
        assert effects[1].points_awarded == 0
        assert effects[1].metadata == {"new_level": 2, "old_level": 1}
        assert len(effects) == 2

    def test_never_decreases(self):
        assert level_effects(5, 0) == []

    def test_level_twenty_awards_badge(self):
        effects = level_effects(19, 9500)
        assert effects[0] == SetLevel(20)
        assert effects[-1] == AwardBadge("level", 20)


class TestPointsEffects:
    def test_order_is_points_event_then_level(self):
        effects = points_effects(1, 490, 20, "answer_given", "Du hast eine Frage beantwortet")
        assert effects[0] == AddPoints(20)
        assert isinstance(effects[1], LogActivity)
        assert effects[1].type == "answer_given"
        assert effects[1].points_awarded == 20
        assert effects[2] == SetLevel(2)

    def test_single_event_activity_without_level_up(self):
        effects = points_effects(1, 0, 10, "question_asked", "Du hast eine Frage gestellt", {"question_id": 3})
        assert len(effects) == 2
        assert effects[1].metadata == {"question_id": 3}

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError):
            points_effects(1, 100, -5, "x", "y")


class TestMilestones:
    @pytest.mark.parametrize("count", [1, 9, 11, 20])
    def test_answers_only_on_tenth(self, count):
        assert answer_milestone_effects(count) == []

    def test_tenth_answer(self):
        assert answer_milestone_effects(10) == [AwardBadge("answers_given", 10)]

    def test_fifth_course(self):
        assert course_milestone_effects(5) == [AwardBadge("courses_completed", 5)]
        assert course_milestone_effects(4) == []
        assert course_milestone_effects(6) == []
