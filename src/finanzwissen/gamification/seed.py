"""Default content: badges, daily challenges and starter courses."""

from __future__ import annotations

import logging

from finanzwissen.store import Store

logger = logging.getLogger(__name__)

BADGE_SEED_DATA: list[dict] = [
    {
        "title": "7 Tage Serie",
        "description": "Logge dich 7 Tage in Folge ein",
        "icon": "local_fire_department",
        "icon_bg_color": "accent",
        "requirement": "streak",
        "required_amount": 7,
    },
    {
        "title": "Quiz Meister",
        "description": "Schließe 5 Quizze erfolgreich ab",
        "icon": "psychology",
        "icon_bg_color": "secondary",
        "requirement": "quizzes_completed",
        "required_amount": 5,
    },
    {
        "title": "5 Kurse abgeschlossen",
        "description": "Schließe 5 Kurse vollständig ab",
        "icon": "school",
        "icon_bg_color": "primary",
        "requirement": "courses_completed",
        "required_amount": 5,
    },
    {
        "title": "10 Antworten",
        "description": "Beantworte 10 Fragen von der Community",
        "icon": "forum",
        "icon_bg_color": "neutral",
        "requirement": "answers_given",
        "required_amount": 10,
    },
    {
        "title": "Level 20 erreichen",
        "description": "Erreiche Level 20",
        "icon": "trending_up",
        "icon_bg_color": "neutral",
        "requirement": "level",
        "required_amount": 20,
    },
    {
        "title": "Top 10 Rangliste",
        "description": "Erreiche einen Platz in den Top 10 der Rangliste",
        "icon": "emoji_events",
        "icon_bg_color": "neutral",
        "requirement": "leaderboard_rank",
        "required_amount": 10,
    },
]

CHALLENGE_SEED_DATA: list[dict] = [
    {
        "title": "Tägliche Lektion abschließen",
        "description": "Schließe eine Lektion zu einem beliebigen Thema ab",
        "points_reward": 25,
        "icon": "check_circle",
        "icon_bg_color": "success",
        "type": "daily",
    },
    {
        "title": 'Quiz zum Thema "Aktien Grundlagen"',
        "description": "Beantworte 10 Fragen über Aktien und den Aktienmarkt",
        "points_reward": 50,
        "icon": "quiz",
        "icon_bg_color": "primary",
        "type": "daily",
    },
    {
        "title": "Beantworte eine Frage von der Community",
        "description": "Helfe anderen Nutzern, indem du eine Frage beantwortest",
        "points_reward": 40,
        "icon": "forum",
        "icon_bg_color": "accent",
        "type": "daily",
    },
]

COURSE_SEED_DATA: list[dict] = [
    {
        "title": "Aktien Grundlagen",
        "description": "Lerne die Grundlagen des Aktienhandels",
        "total_lessons": 5,
    },
    {
        "title": "Altersvorsorge planen",
        "description": "Plane deine finanzielle Zukunft",
        "total_lessons": 4,
    },
]


async def seed_defaults(store: Store) -> int:
    """Insert default badges, challenges and courses that are missing (idempotent).

    Returns the number of records created.
    """
    created = 0

    for data in BADGE_SEED_DATA:
        if await store.find_badge(data["requirement"], data["required_amount"]) is None:
            await store.create_badge(**data)
            created += 1

    challenge_titles = {c.title for c in await store.list_challenges()}
    for data in CHALLENGE_SEED_DATA:
        if data["title"] not in challenge_titles:
            await store.create_challenge(**data)
            created += 1

    course_titles = {c.title for c in await store.list_courses()}
    for data in COURSE_SEED_DATA:
        if data["title"] not in course_titles:
            await store.create_course(**data)
            created += 1

    await store.commit()
    if created:
        logger.info("Seeded %d default records", created)
    return created
