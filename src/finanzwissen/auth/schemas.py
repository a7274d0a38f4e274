"""Request/response schemas for authentication endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from finanzwissen.users.schemas import UserResponse


class RegisterRequest(BaseModel):
    """Username + password registration."""

    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        """Usernames are compared exactly; only surrounding whitespace is dropped."""
        v = v.strip()
        if len(v) < 3:
            msg = "Username must be at least 3 characters"
            raise ValueError(msg)
        return v


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return v.strip()


class TokenResponse(BaseModel):
    """Access token plus the (refreshed) user."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse
