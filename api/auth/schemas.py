"""
Identity API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from core.schemas import CamelModel


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=128)


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., min_length=20)


class LogoutRequest(CamelModel):
    # Omitted: revoke every session of the authenticated caller.
    refresh_token: str | None = Field(default=None, min_length=20)


class UserResponse(CamelModel):
    id: int
    name: str | None = None
    email: str
    is_active: bool
    created_at: datetime


class TokenPairResponse(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AuthResponse(CamelModel):
    user: UserResponse
    tokens: TokenPairResponse
