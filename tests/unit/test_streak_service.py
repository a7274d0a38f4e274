"""Login streak tests against the store."""

from datetime import datetime, timedelta, timezone

import pytest

from finanzwissen.gamification.streak_service import record_login

pytestmark = pytest.mark.asyncio

NOW = datetime(2026, 3, 10, 8, 0, tzinfo=timezone.utc)


class TestRecordLogin:
    async def test_first_login(self, store):
        user = await store.create_user("anna", "hash")
        updated = await record_login(store, user, NOW)
        assert updated.streak == 1
        assert updated.last_login_date == NOW

    async def test_consecutive_days(self, store):
        user = await store.create_user("anna", "hash")
        for day in range(3):
            user = await record_login(store, user, NOW + timedelta(days=day))
        assert user.streak == 3

    async def test_same_day_is_idempotent_but_moves_login_date(self, store):
        user = await store.create_user("anna", "hash")
        user = await record_login(store, user, NOW)
        later = NOW + timedelta(hours=5)
        user = await record_login(store, user, later)
        assert user.streak == 1
        assert user.last_login_date == later

    async def test_gap_resets(self, store):
        user = await store.create_user("anna", "hash")
        user = await store.update_user(user.id, streak=5, last_login_date=NOW - timedelta(days=3))
        user = await record_login(store, user, NOW)
        assert user.streak == 1

    async def test_seventh_day_awards_streak_badge_once(self, store):
        user = await store.create_user("anna", "hash")
        user = await store.update_user(user.id, streak=6, last_login_date=NOW - timedelta(days=1))

        user = await record_login(store, user, NOW)
        assert user.streak == 7
        user = await record_login(store, user, NOW + timedelta(hours=1))
        assert user.streak == 7

        badge = await store.find_badge("streak", 7)
        assert [ub.badge_id for ub in await store.list_user_badges(user.id)] == [badge.id]
        types = [a.type for a in await store.list_activities(user.id)]
        assert types.count("streak_milestone") == 1
        assert types.count("badge_earned") == 1

    async def test_login_does_not_add_points(self, store):
        user = await store.create_user("anna", "hash")
        user = await record_login(store, user, NOW)
        assert user.points == 0
        assert user.level == 1
