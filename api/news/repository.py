"""
News persistence (raw SQL). Newest first everywhere.
"""

from __future__ import annotations

from typing import Any

from core import db

NEWS_COLUMNS = """
    id, title, content, category, publish_date, is_published,
    author_id, thumbnail_url, thumbnail_id
"""

NEWS_UPDATABLE = ("title", "content", "category", "publish_date", "is_published", "thumbnail_url", "thumbnail_id")


async def list_news(*, published_only: bool, limit: int | None = None) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {NEWS_COLUMNS}
        FROM news
        WHERE ($1::boolean = false OR is_published = true)
        ORDER BY id DESC
        LIMIT $2
        """,
        published_only,
        limit,
    )


async def get_news(news_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(f"SELECT {NEWS_COLUMNS} FROM news WHERE id = $1", news_id)


async def create_news(fields: dict[str, Any], *, author_id: int) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO news (title, content, category, publish_date, is_published, author_id, thumbnail_url, thumbnail_id)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
        RETURNING {NEWS_COLUMNS}
        """,
        fields["title"],
        fields["content"],
        fields["category"],
        fields["publish_date"],
        fields["is_published"],
        author_id,
        fields.get("thumbnail_url"),
        fields.get("thumbnail_id"),
    )
    if row is None:
        raise RuntimeError("Failed to create news.")
    return row


async def update_news(news_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    columns = [name for name in NEWS_UPDATABLE if name in fields]
    if not columns:
        return await get_news(news_id)
    clause = ", ".join(f"{name} = ${i}" for i, name in enumerate(columns, start=2))
    return await db.fetch_one(
        f"UPDATE news SET {clause} WHERE id = $1 RETURNING {NEWS_COLUMNS}",
        news_id,
        *[fields[name] for name in columns],
    )


async def delete_news(news_id: int) -> bool:
    status_tag = await db.execute("DELETE FROM news WHERE id = $1", news_id)
    return db.affected_rows(status_tag) > 0
