"""
Council members' external articles (blogs, social posts) and their sources.

Public reads only show active articles. Each article is returned with its
council member (photo resolved from storage) and its source.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import HTTPException, status

from core.schemas import now_ms
from core.storage import BlobStorage
from members import repository as members_repository
from members.service import with_photo

from . import repository, schemas

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 20
DEFAULT_FEATURED_LIMIT = 10
ALL_CATEGORIES = "all"

# Wire keys for the per-category counters.
CATEGORY_KEYS = {
    "政策・提案": "policy",
    "活動報告": "activity",
    "市政情報": "municipal",
    "地域イベント": "event",
    "お知らせ": "notice",
    "その他": "other",
}


async def _with_relations(row: dict[str, Any], storage: BlobStorage | None) -> schemas.Article:
    member = await members_repository.get_member(row["council_member_id"])
    source = await repository.get_source(row["source_id"]) if row.get("source_id") is not None else None
    return schemas.Article.model_validate(
        {
            **row,
            "council_member": with_photo(member, storage) if member else None,
            "source": source,
        }
    )


async def _articles(rows: list[dict[str, Any]], storage: BlobStorage | None) -> list[schemas.Article]:
    return list(await asyncio.gather(*(_with_relations(row, storage) for row in rows)))


async def list_articles(
    *,
    category: str | None = None,
    member_id: int | None = None,
    limit: int = DEFAULT_LIST_LIMIT,
    storage: BlobStorage | None,
) -> list[schemas.Article]:
    rows = await repository.list_articles(
        category=None if category == ALL_CATEGORIES else category,
        member_id=member_id,
        limit=limit,
    )
    return await _articles(rows, storage)


async def popular_articles(*, limit: int = DEFAULT_FEATURED_LIMIT, storage: BlobStorage | None) -> list[schemas.Article]:
    """Newest first; among articles published together, most viewed first."""
    return await _articles(await repository.list_popular(limit), storage)


async def latest_articles(*, limit: int = DEFAULT_FEATURED_LIMIT, storage: BlobStorage | None) -> list[schemas.Article]:
    return await _articles(await repository.list_articles(limit=limit), storage)


async def category_counts() -> schemas.CategoryCounts:
    stored = await repository.category_counts()
    counts = dict.fromkeys(CATEGORY_KEYS.values(), 0)
    for category, n in stored.items():
        key = CATEGORY_KEYS.get(category, "other")
        counts[key] += n
    return schemas.CategoryCounts(all=sum(stored.values()), **counts)


async def get_article(article_id: int, *, storage: BlobStorage | None) -> schemas.Article | None:
    row = await repository.get_article(article_id)
    if row is None or not row["is_active"]:
        return None
    return await _with_relations(row, storage)


async def record_view(article_id: int) -> schemas.ViewCount | None:
    view_count = await repository.increment_view_count(article_id)
    return schemas.ViewCount(view_count=view_count) if view_count is not None else None


async def _require_member(member_id: int) -> None:
    if await members_repository.get_member(member_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Council member not found.")


async def create_article(
    payload: schemas.CreateArticleRequest,
    *,
    admin_user_id: int,
    storage: BlobStorage | None,
) -> schemas.Article:
    source = await repository.get_source(payload.source_id)
    if source is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="External source not found.")
    await _require_member(payload.council_member_id)

    row = await repository.create_article(payload.model_dump(), source=source, fetched_at=now_ms())
    logger.info("external_article_created article_id=%s source_id=%s by=%s", row["id"], source["id"], admin_user_id)
    return await _with_relations(row, storage)


async def update_article(
    article_id: int,
    payload: schemas.UpdateArticleRequest,
    *,
    admin_user_id: int,
    storage: BlobStorage | None,
) -> schemas.Article:
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not fields:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update.")

    row = await repository.update_article(article_id, fields)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="External article not found.")
    logger.info("external_article_updated article_id=%s fields=%s by=%s", article_id, sorted(fields), admin_user_id)
    return await _with_relations(row, storage)


async def delete_article(article_id: int, *, admin_user_id: int) -> dict:
    if not await repository.delete_article(article_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="External article not found.")
    logger.info("external_article_deleted article_id=%s by=%s", article_id, admin_user_id)
    return {"ok": True, "article_id": article_id}


async def list_sources(*, storage: BlobStorage | None) -> list[schemas.SourceWithMember]:
    sources = await repository.list_sources()
    members = await asyncio.gather(*(members_repository.get_member(s["council_member_id"]) for s in sources))
    return [
        schemas.SourceWithMember.model_validate(
            {**source, "council_member": with_photo(member, storage) if member else None}
        )
        for source, member in zip(sources, members)
    ]


async def create_source(payload: schemas.CreateSourceRequest, *, admin_user_id: int) -> schemas.Source:
    await _require_member(payload.council_member_id)
    row = await repository.create_source(payload.model_dump(), created_by=admin_user_id, created_at=now_ms())
    logger.info("external_source_created source_id=%s by=%s", row["id"], admin_user_id)
    return schemas.Source.model_validate(row)


async def update_source(source_id: int, payload: schemas.UpdateSourceRequest, *, admin_user_id: int) -> schemas.Source:
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not fields:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update.")
    if "council_member_id" in fields:
        await _require_member(fields["council_member_id"])

    row = await repository.update_source(source_id, fields)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="External source not found.")
    logger.info("external_source_updated source_id=%s fields=%s by=%s", source_id, sorted(fields), admin_user_id)
    return schemas.Source.model_validate(row)


async def delete_source(source_id: int, *, admin_user_id: int) -> dict:
    """Articles from the source stay and lose their source link."""
    if not await repository.delete_source(source_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="External source not found.")
    logger.info("external_source_deleted source_id=%s by=%s", source_id, admin_user_id)
    return {"ok": True, "source_id": source_id}
