"""FastAPI authentication dependencies."""

from __future__ import annotations

import jwt
from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from finanzwissen.auth.jwt import verify_token
from finanzwissen.auth.service import get_user_by_id
from finanzwissen.dependencies import get_store
from finanzwissen.exceptions import UnauthorizedError
from finanzwissen.store import Store
from finanzwissen.store.entities import User

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
    store: Store = Depends(get_store),
) -> User:
    """Extract and verify the bearer JWT, return the User. Raises 401 on failure."""
    if credentials is None:
        raise UnauthorizedError
    try:
        payload = verify_token(credentials.credentials, expected_type="access")
        user_id = int(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError) as e:
        raise UnauthorizedError(str(e) or "Invalid token") from e

    user = await get_user_by_id(store, user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user
