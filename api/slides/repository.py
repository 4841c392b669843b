"""
Slideshow persistence (raw SQL). `order` is a reserved word and stays quoted.
"""

from __future__ import annotations

from typing import Any

from core import db

SLIDE_COLUMNS = """
    id, title, description, image_url, image_id, link_url,
    background_color, "order", is_active, created_by, updated_by
"""

_FIELD_COLUMNS = {
    "title": "title",
    "description": "description",
    "image_url": "image_url",
    "image_id": "image_id",
    "link_url": "link_url",
    "background_color": "background_color",
    "order": '"order"',
    "is_active": "is_active",
    "updated_by": "updated_by",
}


async def list_slides(*, active_only: bool) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {SLIDE_COLUMNS}
        FROM slideshow_slides
        WHERE ($1::boolean = false OR is_active = true)
        ORDER BY "order" ASC, id ASC
        """,
        active_only,
    )


async def get_slide(slide_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(f"SELECT {SLIDE_COLUMNS} FROM slideshow_slides WHERE id = $1", slide_id)


async def create_slide(fields: dict[str, Any], *, created_by: int) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO slideshow_slides (
            title, description, image_url, image_id, link_url,
            background_color, "order", is_active, created_by
        )
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
        RETURNING {SLIDE_COLUMNS}
        """,
        fields["title"],
        fields.get("description") or "",
        fields.get("image_url"),
        fields.get("image_id"),
        fields.get("link_url"),
        fields["background_color"],
        fields["order"],
        fields["is_active"],
        created_by,
    )
    if row is None:
        raise RuntimeError("Failed to create slide.")
    return row


async def update_slide(slide_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    names = [name for name in _FIELD_COLUMNS if name in fields]
    if not names:
        return await get_slide(slide_id)
    clause = ", ".join(f"{_FIELD_COLUMNS[name]} = ${i}" for i, name in enumerate(names, start=2))
    return await db.fetch_one(
        f"UPDATE slideshow_slides SET {clause} WHERE id = $1 RETURNING {SLIDE_COLUMNS}",
        slide_id,
        *[fields[name] for name in names],
    )


async def delete_slide(slide_id: int) -> bool:
    status_tag = await db.execute("DELETE FROM slideshow_slides WHERE id = $1", slide_id)
    return db.affected_rows(status_tag) > 0
