"""
FAQ persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db

FAQ_COLUMNS = """
    id, question, answer, category, "order", is_published,
    created_by, updated_by, created_at, updated_at
"""


async def list_published() -> list[dict[str, Any]]:
    # Insertion order; grouping relies on it for first-seen category order.
    return await db.fetch_all(
        f"SELECT {FAQ_COLUMNS} FROM faq_items WHERE is_published = true ORDER BY id ASC"
    )


async def list_all() -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {FAQ_COLUMNS} FROM faq_items ORDER BY created_at DESC, id DESC")


async def list_categories() -> list[str]:
    rows = await db.fetch_all("SELECT DISTINCT category FROM faq_items")
    return [r["category"] for r in rows]


async def create_item(fields: dict[str, Any], *, created_by: int, created_at: int) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO faq_items (question, answer, category, "order", is_published, created_by, created_at)
        VALUES ($1, $2, $3, $4, $5, $6, $7)
        RETURNING {FAQ_COLUMNS}
        """,
        fields["question"],
        fields["answer"],
        fields["category"],
        fields["order"],
        fields["is_published"],
        created_by,
        created_at,
    )
    if row is None:
        raise RuntimeError("Failed to create FAQ item.")
    return row


async def update_item(item_id: int, fields: dict[str, Any], *, updated_by: int, updated_at: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE faq_items
        SET question = $2, answer = $3, category = $4, "order" = $5, is_published = $6,
            updated_by = $7, updated_at = $8
        WHERE id = $1
        RETURNING {FAQ_COLUMNS}
        """,
        item_id,
        fields["question"],
        fields["answer"],
        fields["category"],
        fields["order"],
        fields["is_published"],
        updated_by,
        updated_at,
    )


async def delete_item(item_id: int) -> bool:
    status_tag = await db.execute("DELETE FROM faq_items WHERE id = $1", item_id)
    return db.affected_rows(status_tag) > 0
