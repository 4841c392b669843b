"""
Menu settings persistence (raw SQL). `menu_key` is unique.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db

MENU_COLUMNS = 'menu_key, menu_name, is_visible, "order", description'

# Unset values keep the stored ones on update; a new row falls back to
# menu_name = menu_key, visible, order 999.
_UPSERT_SQL = f"""
    INSERT INTO menu_settings (menu_key, menu_name, is_visible, "order", description, updated_by, updated_at)
    VALUES ($1, coalesce($2, $1), coalesce($3, true), coalesce($4, 999), $5, $6, $7)
    ON CONFLICT (menu_key) DO UPDATE
    SET menu_name = coalesce($2, menu_settings.menu_name),
        is_visible = coalesce($3, menu_settings.is_visible),
        "order" = coalesce($4, menu_settings."order"),
        description = coalesce($5, menu_settings.description),
        updated_by = $6,
        updated_at = $7
    RETURNING {MENU_COLUMNS}
"""


async def list_settings(*, visible_only: bool = False) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {MENU_COLUMNS}
        FROM menu_settings
        WHERE ($1::boolean = false OR is_visible = true)
        ORDER BY "order" ASC, id ASC
        """,
        visible_only,
    )


async def upsert_setting(
    fields: dict[str, Any],
    *,
    updated_by: int,
    updated_at: int,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any]:
    row = await db.fetch_one(
        _UPSERT_SQL,
        fields["menu_key"],
        fields.get("menu_name"),
        fields.get("is_visible"),
        fields.get("order"),
        fields.get("description"),
        updated_by,
        updated_at,
        conn=conn,
    )
    if row is None:
        raise RuntimeError("Failed to save menu setting.")
    return row


async def upsert_many(settings: list[dict[str, Any]], *, updated_by: int, updated_at: int) -> list[dict[str, Any]]:
    async with db.transaction() as conn:
        return [
            await upsert_setting(fields, updated_by=updated_by, updated_at=updated_at, conn=conn)
            for fields in settings
        ]
