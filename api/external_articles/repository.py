"""
External source and article persistence (raw SQL).

Article lists are newest first by `published_at`; ties fall back to id.
"""

from __future__ import annotations

from typing import Any

from core import db

SOURCE_COLUMNS = """
    id, council_member_id, source_type, source_url, source_name, is_active,
    last_fetched_at, fetch_interval, created_by, created_at
"""

ARTICLE_COLUMNS = """
    id, title, content, excerpt, source_url, original_url, image_url,
    published_at, fetched_at, council_member_id, source_id, source_type,
    category, is_active, view_count
"""

SOURCE_UPDATABLE = ("council_member_id", "source_type", "source_url", "source_name", "fetch_interval", "is_active")
ARTICLE_UPDATABLE = (
    "title",
    "content",
    "excerpt",
    "original_url",
    "image_url",
    "published_at",
    "category",
    "is_active",
)


def _set_clause(columns: list[str]) -> str:
    return ", ".join(f"{name} = ${i}" for i, name in enumerate(columns, start=2))


async def list_articles(
    *,
    category: str | None = None,
    member_id: int | None = None,
    limit: int,
) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {ARTICLE_COLUMNS}
        FROM external_articles
        WHERE is_active = true
          AND ($1::text IS NULL OR category = $1)
          AND ($2::bigint IS NULL OR council_member_id = $2)
        ORDER BY published_at DESC, id DESC
        LIMIT $3
        """,
        category,
        member_id,
        limit,
    )


async def list_popular(limit: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {ARTICLE_COLUMNS}
        FROM external_articles
        WHERE is_active = true
        ORDER BY published_at DESC, view_count DESC, id DESC
        LIMIT $1
        """,
        limit,
    )


async def category_counts() -> dict[str, int]:
    rows = await db.fetch_all(
        """
        SELECT category, count(*) AS n
        FROM external_articles
        WHERE is_active = true
        GROUP BY category
        """
    )
    return {r["category"]: int(r["n"]) for r in rows}


async def get_article(article_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(f"SELECT {ARTICLE_COLUMNS} FROM external_articles WHERE id = $1", article_id)


async def increment_view_count(article_id: int) -> int | None:
    return await db.fetch_value(
        "UPDATE external_articles SET view_count = view_count + 1 WHERE id = $1 RETURNING view_count",
        article_id,
    )


async def create_article(fields: dict[str, Any], *, source: dict[str, Any], fetched_at: int) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO external_articles (
            title, content, excerpt, source_url, original_url, image_url, published_at,
            fetched_at, council_member_id, source_id, source_type, category
        )
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12)
        RETURNING {ARTICLE_COLUMNS}
        """,
        fields["title"],
        fields["content"],
        fields.get("excerpt"),
        source["source_url"],
        fields["original_url"],
        fields.get("image_url"),
        fields["published_at"],
        fetched_at,
        fields["council_member_id"],
        source["id"],
        source["source_type"],
        fields["category"],
    )
    if row is None:
        raise RuntimeError("Failed to create external article.")
    return row


async def update_article(article_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    columns = [name for name in ARTICLE_UPDATABLE if name in fields]
    if not columns:
        return await get_article(article_id)
    return await db.fetch_one(
        f"UPDATE external_articles SET {_set_clause(columns)} WHERE id = $1 RETURNING {ARTICLE_COLUMNS}",
        article_id,
        *[fields[name] for name in columns],
    )


async def delete_article(article_id: int) -> bool:
    status_tag = await db.execute("DELETE FROM external_articles WHERE id = $1", article_id)
    return db.affected_rows(status_tag) > 0


async def list_sources() -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {SOURCE_COLUMNS} FROM external_sources ORDER BY id ASC")


async def get_source(source_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(f"SELECT {SOURCE_COLUMNS} FROM external_sources WHERE id = $1", source_id)


async def create_source(fields: dict[str, Any], *, created_by: int, created_at: int) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO external_sources (
            council_member_id, source_type, source_url, source_name, fetch_interval, created_by, created_at
        )
        VALUES ($1, $2, $3, $4, coalesce($5, 60), $6, $7)
        RETURNING {SOURCE_COLUMNS}
        """,
        fields["council_member_id"],
        fields["source_type"],
        fields["source_url"],
        fields.get("source_name"),
        fields.get("fetch_interval"),
        created_by,
        created_at,
    )
    if row is None:
        raise RuntimeError("Failed to create external source.")
    return row


async def update_source(source_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    columns = [name for name in SOURCE_UPDATABLE if name in fields]
    if not columns:
        return await get_source(source_id)
    return await db.fetch_one(
        f"UPDATE external_sources SET {_set_clause(columns)} WHERE id = $1 RETURNING {SOURCE_COLUMNS}",
        source_id,
        *[fields[name] for name in columns],
    )


async def delete_source(source_id: int) -> bool:
    status_tag = await db.execute("DELETE FROM external_sources WHERE id = $1", source_id)
    return db.affected_rows(status_tag) > 0
