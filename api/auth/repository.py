"""
Identity persistence: users, refresh tokens and the admin-role lookup.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core import db

USER_COLUMNS = "id, name, email, password_hash, is_active, created_at, updated_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def create_user(*, name: str, email: str, password_hash: str) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO users (name, email, password_hash)
        VALUES ($1, $2, $3)
        RETURNING {USER_COLUMNS}
        """,
        (name or "").strip(),
        normalize_email(email),
        password_hash,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        f"SELECT {USER_COLUMNS} FROM users WHERE lower(email) = $1",
        normalize_email(email),
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        f"SELECT {USER_COLUMNS} FROM users WHERE id = $1",
        user_id,
    )


async def get_admin_by_user_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, user_id, role, granted_by, granted_at
        FROM admin_users
        WHERE user_id = $1
        LIMIT 1
        """,
        user_id,
    )


async def insert_refresh_token(
    *,
    user_id: int,
    token_hash: str,
    expires_at: datetime,
    user_agent: str | None = None,
    ip_address: str | None = None,
) -> dict:
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)

    row = await db.fetch_one(
        """
        INSERT INTO refresh_tokens (user_id, token_hash, expires_at, user_agent, ip_address)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING id, user_id, expires_at
        """,
        user_id,
        token_hash,
        expires_at,
        user_agent,
        ip_address,
    )
    if row is None:
        raise RuntimeError("Failed to insert refresh token.")
    return row


async def get_refresh_token_by_hash(token_hash: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, user_id, expires_at, revoked_at
        FROM refresh_tokens
        WHERE token_hash = $1
        """,
        token_hash,
    )


async def rotate_refresh_token(*, old_token_id: int, new_token_id: int) -> None:
    await db.execute(
        """
        UPDATE refresh_tokens
        SET revoked_at = COALESCE(revoked_at, now()),
            last_used_at = now(),
            replaced_by_token_id = $2
        WHERE id = $1
        """,
        old_token_id,
        new_token_id,
    )


async def revoke_refresh_token(*, token_id: int | None = None, token_hash: str | None = None) -> bool:
    row = await db.fetch_one(
        """
        UPDATE refresh_tokens
        SET revoked_at = now()
        WHERE (id = $1 OR token_hash = $2)
          AND revoked_at IS NULL
        RETURNING id
        """,
        token_id,
        token_hash,
    )
    return row is not None


async def revoke_all_refresh_tokens_for_user(user_id: int) -> None:
    await db.execute(
        """
        UPDATE refresh_tokens
        SET revoked_at = now()
        WHERE user_id = $1
          AND revoked_at IS NULL
        """,
        user_id,
    )
