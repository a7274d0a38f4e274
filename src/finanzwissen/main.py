"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from finanzwissen.auth.router import router as auth_router
from finanzwissen.challenges.router import router as challenges_router
from finanzwissen.community.router import router as community_router
from finanzwissen.config import get_settings
from finanzwissen.courses.router import router as courses_router
from finanzwissen.database import close_db, get_session, init_db
from finanzwissen.dependencies import get_memory_store
from finanzwissen.gamification.router import router as gamification_router
from finanzwissen.gamification.seed import seed_defaults
from finanzwissen.health.router import router as health_router
from finanzwissen.leaderboard.router import router as leaderboard_router
from finanzwissen.middleware import setup_middleware
from finanzwissen.redis_client import close_redis, init_redis
from finanzwissen.store import SqlStore
from finanzwissen.users.router import router as users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    use_database = settings.storage_backend == "database"
    if use_database:
        await init_db(settings.database_url)
    if settings.redis_url:
        await init_redis(settings.redis_url)

    # Default badges, challenges and courses (idempotent)
    if settings.seed_defaults:
        if use_database:
            try:
                async for db in get_session():
                    await seed_defaults(SqlStore(db))
                    break
            except Exception:
                logger.warning("Default seeding failed (tables may not exist yet)", exc_info=True)
        else:
            await seed_defaults(get_memory_store())

    yield

    if use_database:
        await close_db()
    if settings.redis_url:
        await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="FinanzWissen API",
        description="Backend API for FinanzWissen, a gamified personal-finance learning platform",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(gamification_router)
    app.include_router(leaderboard_router)
    app.include_router(challenges_router)
    app.include_router(community_router)
    app.include_router(courses_router)

    return app


app = create_app()
