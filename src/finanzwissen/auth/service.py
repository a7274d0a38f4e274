"""Authentication business logic: registration, login, user lookup."""

from __future__ import annotations

from datetime import datetime

import structlog

from finanzwissen.activity.service import record_activity
from finanzwissen.auth.password import (
    check_needs_rehash,
    hash_password,
    validate_password_strength,
    verify_password,
)
from finanzwissen.exceptions import InvalidCredentialsError
from finanzwissen.gamification.streak_service import record_login
from finanzwissen.store import Store
from finanzwissen.store.entities import User

logger = structlog.get_logger()

WELCOME_MESSAGE = "Willkommen bei FinanzWissen! Dein Konto wurde erstellt."


async def get_user_by_id(store: Store, user_id: int) -> User | None:
    """Fetch a user by ID."""
    return await store.get_user(user_id)


async def register_user(store: Store, username: str, password: str) -> User:
    """
    Register a new user with username + password.

    Starts at 0 points, level 1, streak 0 and no login yet. Appends an
    ``account_created`` activity.

    Raises:
        PasswordStrengthError: If the password is outside the length bounds.
        DuplicateUsernameError: If the username is taken.
    """
    validate_password_strength(password)
    user = await store.create_user(username, hash_password(password))
    await record_activity(store, user.id, "account_created", WELCOME_MESSAGE)
    logger.info("user_registered", user_id=user.id, username=user.username)
    return user


async def authenticate_user(
    store: Store,
    username: str,
    password: str,
    now: datetime | None = None,
) -> User:
    """
    Authenticate a user and record the login.

    The streak and level rules run as side effects; the refreshed user is
    returned. A hash made with outdated argon2 parameters is replaced.

    Raises:
        InvalidCredentialsError: Unknown username or wrong password.
    """
    user = await store.get_user_by_username(username)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("login_failed", username=username)
        raise InvalidCredentialsError

    # Check if password needs rehash
    if check_needs_rehash(user.password_hash):
        await store.update_user(user.id, password_hash=hash_password(password))
        logger.info("password_rehashed", user_id=user.id)

    user = await record_login(store, user, now)
    logger.info("login_succeeded", user_id=user.id, streak=user.streak)
    return user
