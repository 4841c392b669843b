"""
Admin role and user-directory persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db

# Serializes concurrent first-admin bootstraps.
_BOOTSTRAP_LOCK_KEY = 7_310_001


async def bootstrap_super_admin(user_id: int, *, granted_at: int) -> bool:
    """
    Insert `user_id` as superAdmin only when no admin exists yet.
    Returns True when a row was written.
    """
    async with db.transaction() as conn:
        await db.execute("SELECT pg_advisory_xact_lock($1)", _BOOTSTRAP_LOCK_KEY, conn=conn)
        existing = await db.fetch_value("SELECT count(*) FROM admin_users", conn=conn)
        if existing:
            return False
        await db.execute(
            """
            INSERT INTO admin_users (user_id, role, granted_by, granted_at)
            VALUES ($1, 'superAdmin', $1, $2)
            """,
            user_id,
            granted_at,
            conn=conn,
        )
        return True


async def upsert_role(*, user_id: int, role: str, granted_by: int, granted_at: int) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO admin_users (user_id, role, granted_by, granted_at)
        VALUES ($1, $2, $3, $4)
        ON CONFLICT (user_id) DO UPDATE
        SET role = EXCLUDED.role, granted_by = EXCLUDED.granted_by, granted_at = EXCLUDED.granted_at
        RETURNING id, user_id, role, granted_by, granted_at
        """,
        user_id,
        role,
        granted_by,
        granted_at,
    )
    if row is None:
        raise RuntimeError("Failed to grant role.")
    return row


async def delete_role(user_id: int) -> bool:
    status_tag = await db.execute("DELETE FROM admin_users WHERE user_id = $1", user_id)
    return db.affected_rows(status_tag) > 0


async def list_users_with_roles() -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT u.id, u.name, u.email, u.is_active, u.created_at,
               coalesce(a.role, 'user') AS role,
               a.granted_at,
               (d.id IS NOT NULL) AS has_demographics
        FROM users u
        LEFT JOIN admin_users a ON a.user_id = u.id
        LEFT JOIN user_demographics d ON d.user_id = u.id
        ORDER BY u.created_at DESC, u.id DESC
        """
    )


async def user_counts() -> dict[str, int]:
    row = await db.fetch_one(
        """
        SELECT
            (SELECT count(*) FROM users) AS total_users,
            (SELECT count(*) FROM admin_users) AS admin_users,
            (SELECT count(*) FROM user_demographics) AS demographics_completed
        """
    )
    return {key: int(value or 0) for key, value in (row or {}).items()}


async def update_user(user_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    columns = [name for name in ("name", "email") if name in fields]
    clause = ", ".join(f"{name} = ${i}" for i, name in enumerate(columns, start=2))
    return await db.fetch_one(
        f"""
        UPDATE users SET {clause}, updated_at = now()
        WHERE id = $1
        RETURNING id, name, email, is_active, created_at
        """,
        user_id,
        *[fields[name] for name in columns],
    )


async def delete_user(user_id: int) -> bool:
    """
    Delete a user with the content they authored. Likes, roles, demographics
    and refresh tokens go with the user row (ON DELETE CASCADE).
    """
    async with db.transaction() as conn:
        await db.execute("DELETE FROM news WHERE author_id = $1", user_id, conn=conn)
        await db.execute("DELETE FROM slideshow_slides WHERE created_by = $1", user_id, conn=conn)
        await db.execute("DELETE FROM faq_items WHERE created_by = $1", user_id, conn=conn)
        status_tag = await db.execute("DELETE FROM users WHERE id = $1", user_id, conn=conn)
    return db.affected_rows(status_tag) > 0
