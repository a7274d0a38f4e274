"""SqlStore tests against in-memory SQLite, plus a service flow over it."""

from datetime import datetime, timedelta, timezone

import pytest

from finanzwissen.community.service import answer_question, ask_question, vote_question
from finanzwissen.courses.service import start_course, update_course_progress
from finanzwissen.exceptions import DuplicateUsernameError
from finanzwissen.gamification.seed import seed_defaults
from finanzwissen.gamification.streak_service import record_login
from finanzwissen.leaderboard.service import get_user_rank, top_users

pytestmark = pytest.mark.asyncio


class TestUsers:
    async def test_create_and_fetch(self, sql_store):
        user = await sql_store.create_user("anna", "hash")
        assert user.id == 1
        assert (user.points, user.level, user.streak) == (0, 1, 0)
        assert user.last_login_date is None
        fetched = await sql_store.get_user_by_username("anna")
        assert fetched == await sql_store.get_user(user.id)

    async def test_duplicate_username(self, sql_store):
        await sql_store.create_user("anna", "hash")
        with pytest.raises(DuplicateUsernameError):
            await sql_store.create_user("anna", "hash")

    async def test_update_missing_returns_none(self, sql_store):
        assert await sql_store.update_user(42, points=1) is None

    async def test_update_unknown_field(self, sql_store):
        user = await sql_store.create_user("anna", "hash")
        with pytest.raises(TypeError):
            await sql_store.update_user(user.id, karma=3)

    async def test_datetimes_come_back_utc(self, sql_store):
        user = await sql_store.create_user("anna", "hash")
        when = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        await sql_store.update_user(user.id, last_login_date=when)
        fetched = await sql_store.get_user(user.id)
        assert fetched.last_login_date == when
        assert fetched.created_at.tzinfo is not None


class TestJoins:
    async def test_user_badge_idempotent(self, sql_store):
        await seed_defaults(sql_store)
        user = await sql_store.create_user("anna", "hash")
        badge = await sql_store.find_badge("streak", 7)
        first, created = await sql_store.create_user_badge(user.id, badge.id)
        again, created_again = await sql_store.create_user_badge(user.id, badge.id)
        assert created and not created_again
        assert again.id == first.id
        assert len(await sql_store.list_user_badges(user.id)) == 1

    async def test_user_course_idempotent(self, sql_store):
        await seed_defaults(sql_store)
        user = await sql_store.create_user("anna", "hash")
        first, _ = await sql_store.create_user_course(user.id, 1)
        again, created = await sql_store.create_user_course(user.id, 1)
        assert not created
        assert again.id == first.id


class TestOrdering:
    async def test_answers_by_votes_then_id(self, sql_store):
        user = await sql_store.create_user("anna", "hash")
        question = await sql_store.create_question(user.id, "t", "c", ["a"])
        a1 = await sql_store.create_answer(question.id, user.id, "1")
        a2 = await sql_store.create_answer(question.id, user.id, "2")
        await sql_store.update_answer(a2.id, votes=3)
        assert [a.id for a in await sql_store.list_answers(question.id)] == [a2.id, a1.id]

    async def test_activities_newest_first(self, sql_store):
        user = await sql_store.create_user("anna", "hash")
        for i in range(3):
            await sql_store.append_activity(user.id, f"t{i}", "d", metadata={"i": i})
        activities = await sql_store.list_activities(user.id, limit=2)
        assert [a.type for a in activities] == ["t2", "t1"]
        assert activities[0].metadata == {"i": 2}


class TestServiceFlow:
    async def test_seed_idempotent(self, sql_store):
        assert await seed_defaults(sql_store) == 11
        assert await seed_defaults(sql_store) == 0

    async def test_progression_over_sql(self, sql_store):
        """Points, votes, course bonus and streak behave the same on the SQL backend."""
        await seed_defaults(sql_store)
        anna = await sql_store.create_user("anna", "hash")
        ben = await sql_store.create_user("ben", "hash")

        question = await ask_question(sql_store, anna.id, "Sparplan?", "Wie starte ich?", ["etf"])
        await answer_question(sql_store, ben.id, question.id, "Monatlich in einen ETF.")
        await vote_question(sql_store, question.id, -1)
        assert (await vote_question(sql_store, question.id, -1)).votes == -2

        await start_course(sql_store, anna.id, 1)
        await update_course_progress(sql_store, anna.id, 1, 5)
        await update_course_progress(sql_store, anna.id, 1, 5)
        assert (await sql_store.get_user(anna.id)).points == 85
        assert await sql_store.count_completed_courses(anna.id) == 1

        now = datetime(2026, 3, 10, 8, 0, tzinfo=timezone.utc)
        user = await record_login(sql_store, await sql_store.get_user(ben.id), now - timedelta(days=1))
        user = await record_login(sql_store, user, now)
        assert user.streak == 2

        assert [u.id for u in await top_users(sql_store, 2)] == [anna.id, ben.id]
        assert await get_user_rank(sql_store, ben.id) == 2
        await sql_store.commit()
