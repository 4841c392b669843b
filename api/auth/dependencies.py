"""
Auth dependencies for FastAPI routes.

- get_current_user: identity required (401 otherwise)
- get_optional_user_id: public routes that personalise when a caller is known
- require_admin / require_super_admin: privileged writes
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from . import service


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=service.AUTHENTICATION_REQUIRED,
        )

    scheme, _, token = raw.partition(" ")
    if scheme.strip().lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization must be: Bearer <token>.",
        )
    return token.strip()


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_user(access_token: str = Depends(get_bearer_token)) -> dict:
    return await service.get_user_from_access_token(access_token)


async def get_current_user_id(current_user: dict = Depends(get_current_user)) -> int:
    return int(current_user["id"])


async def get_optional_user_id(authorization: str | None = Header(default=None)) -> int | None:
    # No header means an anonymous caller; a bad token is still rejected.
    if not (authorization or "").strip():
        return None
    user_row = await service.get_user_from_access_token(_extract_bearer_token(authorization))
    return int(user_row["id"])


async def require_admin(user_id: int = Depends(get_current_user_id)) -> dict:
    return await service.require_admin(user_id)


async def require_super_admin(user_id: int = Depends(get_current_user_id)) -> dict:
    return await service.require_super_admin(user_id)
