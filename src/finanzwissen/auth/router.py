"""Authentication router: /api/v1/auth/* endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from finanzwissen.auth.jwt import create_access_token
from finanzwissen.auth.schemas import LoginRequest, RegisterRequest, TokenResponse
from finanzwissen.auth.service import authenticate_user, register_user
from finanzwissen.config import get_settings
from finanzwissen.dependencies import get_store
from finanzwissen.store import Store
from finanzwissen.store.entities import User
from finanzwissen.users.schemas import UserResponse

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


def _issue_token(user: User) -> TokenResponse:
    settings = get_settings()
    return TokenResponse(
        access_token=create_access_token(user.id, user.username),
        token_type="bearer",
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    store: Store = Depends(get_store),
) -> TokenResponse:
    """Register with username + password."""
    user = await register_user(store, body.username, body.password)
    await store.commit()
    return _issue_token(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    store: Store = Depends(get_store),
) -> TokenResponse:
    """Login with username + password. Updates the daily streak."""
    user = await authenticate_user(store, body.username, body.password)
    await store.commit()
    return _issue_token(user)
