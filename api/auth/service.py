"""
Identity and authorization rules.

`require_admin` / `require_super_admin` are the single authorization guard
every privileged operation goes through: an `admin_users` row for the caller
is the only signal that grants admin rights.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, status

from . import repository, schemas, security

logger = logging.getLogger(__name__)

AUTHENTICATION_REQUIRED = "Authentication required."
ADMIN_REQUIRED = "Admin role required."
SUPER_ADMIN_REQUIRED = "Super admin role required."


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        name=user_row.get("name"),
        email=str(user_row["email"]),
        is_active=bool(user_row["is_active"]),
        created_at=user_row["created_at"],
    )


async def _issue_token_pair(
    user_row: dict,
    *,
    user_agent: str | None = None,
    ip_address: str | None = None,
    replaces_token_id: int | None = None,
) -> schemas.TokenPairResponse:
    user_id = int(user_row["id"])
    raw_refresh_token = security.build_refresh_token()
    refresh_row = await repository.insert_refresh_token(
        user_id=user_id,
        token_hash=security.hash_refresh_token(raw_refresh_token),
        expires_at=_utc_now() + timedelta(days=security.refresh_token_expire_days()),
        user_agent=user_agent,
        ip_address=ip_address,
    )
    if replaces_token_id is not None:
        await repository.rotate_refresh_token(
            old_token_id=replaces_token_id,
            new_token_id=int(refresh_row["id"]),
        )

    return schemas.TokenPairResponse(
        access_token=security.build_access_token(user_id=user_id, email=str(user_row["email"])),
        refresh_token=raw_refresh_token,
    )


async def register(
    payload: schemas.RegisterRequest,
    *,
    user_agent: str | None = None,
    ip_address: str | None = None,
) -> schemas.AuthResponse:
    if await repository.get_user_by_email(payload.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered.",
        )

    user_row = await repository.create_user(
        name=payload.name,
        email=payload.email,
        password_hash=security.hash_password(payload.password),
    )
    logger.info("user_registered user_id=%s", user_row["id"])
    tokens = await _issue_token_pair(user_row, user_agent=user_agent, ip_address=ip_address)
    return schemas.AuthResponse(user=to_user_response(user_row), tokens=tokens)


async def login(
    payload: schemas.LoginRequest,
    *,
    user_agent: str | None = None,
    ip_address: str | None = None,
) -> schemas.AuthResponse:
    user_row = await repository.get_user_by_email(payload.email)
    password_hash = str((user_row or {}).get("password_hash") or "")
    if user_row is None or not security.verify_password(payload.password, password_hash):
        raise _unauthorized("Invalid email or password.")

    if not bool(user_row.get("is_active", False)):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User is inactive.")

    tokens = await _issue_token_pair(user_row, user_agent=user_agent, ip_address=ip_address)
    return schemas.AuthResponse(user=to_user_response(user_row), tokens=tokens)


async def refresh_tokens(
    payload: schemas.RefreshRequest,
    *,
    user_agent: str | None = None,
    ip_address: str | None = None,
) -> schemas.TokenPairResponse:
    token_row = await repository.get_refresh_token_by_hash(
        security.hash_refresh_token(payload.refresh_token.strip())
    )
    if token_row is None:
        raise _unauthorized("Invalid refresh token.")
    if token_row.get("revoked_at") is not None:
        raise _unauthorized("Refresh token is revoked.")

    token_id = int(token_row["id"])
    expires_at = token_row.get("expires_at")
    if not isinstance(expires_at, datetime) or expires_at <= _utc_now():
        await repository.revoke_refresh_token(token_id=token_id)
        raise _unauthorized("Refresh token is expired.")

    user_row = await repository.get_user_by_id(int(token_row["user_id"]))
    if user_row is None or not bool(user_row.get("is_active", False)):
        await repository.revoke_refresh_token(token_id=token_id)
        raise _unauthorized("Invalid refresh token owner.")

    return await _issue_token_pair(
        user_row,
        user_agent=user_agent,
        ip_address=ip_address,
        replaces_token_id=token_id,
    )


async def logout(payload: schemas.LogoutRequest, *, current_user_id: int | None = None) -> dict[str, bool]:
    refresh_token = (payload.refresh_token or "").strip()
    if refresh_token:
        await repository.revoke_refresh_token(token_hash=security.hash_refresh_token(refresh_token))
        return {"ok": True}

    if current_user_id is not None:
        await repository.revoke_all_refresh_tokens_for_user(current_user_id)
        return {"ok": True}

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Provide refresh_token or authenticated user.",
    )


async def get_user_from_access_token(access_token: str) -> dict:
    try:
        user_id = security.access_token_user_id(access_token)
    except security.AuthSecurityError as exc:
        raise _unauthorized(str(exc)) from exc

    user_row = await repository.get_user_by_id(user_id)
    if user_row is None:
        raise _unauthorized("User not found.")
    if not bool(user_row.get("is_active", False)):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User is inactive.")
    return user_row


async def require_admin(user_id: int | None) -> dict:
    """
    Return the caller's admin row or abort before any write happens.
    """
    if user_id is None:
        raise _unauthorized(AUTHENTICATION_REQUIRED)
    admin_row = await repository.get_admin_by_user_id(user_id)
    if admin_row is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ADMIN_REQUIRED)
    return admin_row


async def require_super_admin(user_id: int | None) -> dict:
    admin_row = await require_admin(user_id)
    if admin_row.get("role") != "superAdmin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=SUPER_ADMIN_REQUIRED)
    return admin_row
