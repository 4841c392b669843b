"""
User demographics persistence (raw SQL). One row per user.
"""

from __future__ import annotations

from typing import Any

from core import db

DEMOGRAPHICS_COLUMNS = "user_id, age_group, gender, region, registered_at"


async def upsert(*, user_id: int, age_group: str, gender: str, region: str, registered_at: int) -> dict[str, Any]:
    # registered_at keeps the first submission time.
    row = await db.fetch_one(
        f"""
        INSERT INTO user_demographics (user_id, age_group, gender, region, registered_at)
        VALUES ($1, $2, $3, $4, $5)
        ON CONFLICT (user_id) DO UPDATE
        SET age_group = EXCLUDED.age_group, gender = EXCLUDED.gender, region = EXCLUDED.region
        RETURNING {DEMOGRAPHICS_COLUMNS}
        """,
        user_id,
        age_group,
        gender,
        region,
        registered_at,
    )
    if row is None:
        raise RuntimeError("Failed to save demographics.")
    return row


async def get_for_user(user_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"SELECT {DEMOGRAPHICS_COLUMNS} FROM user_demographics WHERE user_id = $1",
        user_id,
    )


async def list_all() -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {DEMOGRAPHICS_COLUMNS} FROM user_demographics ORDER BY id ASC")


async def count_users() -> int:
    return int(await db.fetch_value("SELECT count(*) FROM users") or 0)
