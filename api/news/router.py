"""
News endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies
from core.storage import BlobStorage, get_storage

from . import schemas, service

router = APIRouter(prefix="/news")


@router.get("", response_model=list[schemas.News])
async def list_news(storage: BlobStorage = Depends(get_storage)) -> list[schemas.News]:
    return await service.list_published(storage=storage)


@router.get("/recent", response_model=list[schemas.News])
async def recent_news(
    limit: int = Query(default=service.DEFAULT_RECENT, ge=1, le=100),
    storage: BlobStorage = Depends(get_storage),
) -> list[schemas.News]:
    return await service.recent(limit=limit, storage=storage)


@router.get("/all", response_model=list[schemas.News])
async def list_all_news(
    _: dict = Depends(auth_dependencies.require_admin),
    storage: BlobStorage = Depends(get_storage),
) -> list[schemas.News]:
    return await service.list_all(storage=storage)


@router.get("/{news_id}", response_model=schemas.News | None)
async def get_news(news_id: int, storage: BlobStorage = Depends(get_storage)) -> schemas.News | None:
    return await service.get_published(news_id, storage=storage)


@router.post("", response_model=schemas.News)
async def create_news(
    payload: schemas.CreateNewsRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
    storage: BlobStorage = Depends(get_storage),
) -> schemas.News:
    return await service.create(payload, admin_user_id=int(admin["user_id"]), storage=storage)


@router.patch("/{news_id}", response_model=schemas.News)
async def update_news(
    news_id: int,
    payload: schemas.UpdateNewsRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
    storage: BlobStorage = Depends(get_storage),
) -> schemas.News:
    return await service.update(news_id, payload, admin_user_id=int(admin["user_id"]), storage=storage)


@router.delete("/{news_id}")
async def delete_news(
    news_id: int,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete(news_id, admin_user_id=int(admin["user_id"]))
