"""
News reads and admin writes.

Public reads never expose unpublished items: a hidden or missing item reads
as None. A stored thumbnail wins over a direct thumbnail URL.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from core.storage import BlobStorage, resolve_media_url

from . import repository, schemas

logger = logging.getLogger(__name__)

DEFAULT_RECENT = 5


def _to_news(row: dict[str, Any], storage: BlobStorage | None) -> schemas.News:
    return schemas.News.model_validate(
        {**row, "thumbnail_url": resolve_media_url(storage, row.get("thumbnail_id"), row.get("thumbnail_url"))}
    )


async def list_published(*, storage: BlobStorage | None) -> list[schemas.News]:
    return [_to_news(r, storage) for r in await repository.list_news(published_only=True)]


async def recent(*, limit: int = DEFAULT_RECENT, storage: BlobStorage | None) -> list[schemas.News]:
    return [_to_news(r, storage) for r in await repository.list_news(published_only=True, limit=limit)]


async def get_published(news_id: int, *, storage: BlobStorage | None) -> schemas.News | None:
    row = await repository.get_news(news_id)
    if row is None or not row["is_published"]:
        return None
    return _to_news(row, storage)


async def list_all(*, storage: BlobStorage | None) -> list[schemas.News]:
    return [_to_news(r, storage) for r in await repository.list_news(published_only=False)]


async def create(payload: schemas.CreateNewsRequest, *, admin_user_id: int, storage: BlobStorage | None) -> schemas.News:
    row = await repository.create_news(payload.model_dump(), author_id=admin_user_id)
    logger.info("news_created news_id=%s by=%s", row["id"], admin_user_id)
    return _to_news(row, storage)


async def update(
    news_id: int,
    payload: schemas.UpdateNewsRequest,
    *,
    admin_user_id: int,
    storage: BlobStorage | None,
) -> schemas.News:
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not fields:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update.")

    row = await repository.update_news(news_id, fields)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="News not found.")
    logger.info("news_updated news_id=%s fields=%s by=%s", news_id, sorted(fields), admin_user_id)
    return _to_news(row, storage)


async def delete(news_id: int, *, admin_user_id: int) -> dict:
    if not await repository.delete_news(news_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="News not found.")
    logger.info("news_deleted news_id=%s by=%s", news_id, admin_user_id)
    return {"ok": True, "news_id": news_id}
