"""
External article endpoints: public catalogue plus admin management of
articles and their sources.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies
from core.storage import BlobStorage, get_storage

from . import schemas, service

router = APIRouter(prefix="/external-articles")


@router.get("", response_model=list[schemas.Article])
async def list_articles(
    category: str | None = Query(default=None, max_length=100),
    member_id: int | None = Query(default=None, alias="memberId"),
    limit: int = Query(default=service.DEFAULT_LIST_LIMIT, ge=1, le=200),
    storage: BlobStorage = Depends(get_storage),
) -> list[schemas.Article]:
    return await service.list_articles(category=category, member_id=member_id, limit=limit, storage=storage)


@router.get("/popular", response_model=list[schemas.Article])
async def popular_articles(
    limit: int = Query(default=service.DEFAULT_FEATURED_LIMIT, ge=1, le=100),
    storage: BlobStorage = Depends(get_storage),
) -> list[schemas.Article]:
    return await service.popular_articles(limit=limit, storage=storage)


@router.get("/latest", response_model=list[schemas.Article])
async def latest_articles(
    limit: int = Query(default=service.DEFAULT_FEATURED_LIMIT, ge=1, le=100),
    storage: BlobStorage = Depends(get_storage),
) -> list[schemas.Article]:
    return await service.latest_articles(limit=limit, storage=storage)


@router.get("/category-counts", response_model=schemas.CategoryCounts)
async def category_counts() -> schemas.CategoryCounts:
    return await service.category_counts()


@router.get("/sources", response_model=list[schemas.SourceWithMember])
async def list_sources(
    _: dict = Depends(auth_dependencies.require_admin),
    storage: BlobStorage = Depends(get_storage),
) -> list[schemas.SourceWithMember]:
    return await service.list_sources(storage=storage)


@router.post("/sources", response_model=schemas.Source)
async def create_source(
    payload: schemas.CreateSourceRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> schemas.Source:
    return await service.create_source(payload, admin_user_id=int(admin["user_id"]))


@router.patch("/sources/{source_id}", response_model=schemas.Source)
async def update_source(
    source_id: int,
    payload: schemas.UpdateSourceRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> schemas.Source:
    return await service.update_source(source_id, payload, admin_user_id=int(admin["user_id"]))


@router.delete("/sources/{source_id}")
async def delete_source(
    source_id: int,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_source(source_id, admin_user_id=int(admin["user_id"]))


@router.get("/{article_id}", response_model=schemas.Article | None)
async def get_article(article_id: int, storage: BlobStorage = Depends(get_storage)) -> schemas.Article | None:
    return await service.get_article(article_id, storage=storage)


@router.post("/{article_id}/view", response_model=schemas.ViewCount | None)
async def record_view(article_id: int) -> schemas.ViewCount | None:
    return await service.record_view(article_id)


@router.post("", response_model=schemas.Article)
async def create_article(
    payload: schemas.CreateArticleRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
    storage: BlobStorage = Depends(get_storage),
) -> schemas.Article:
    return await service.create_article(payload, admin_user_id=int(admin["user_id"]), storage=storage)


@router.patch("/{article_id}", response_model=schemas.Article)
async def update_article(
    article_id: int,
    payload: schemas.UpdateArticleRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
    storage: BlobStorage = Depends(get_storage),
) -> schemas.Article:
    return await service.update_article(article_id, payload, admin_user_id=int(admin["user_id"]), storage=storage)


@router.delete("/{article_id}")
async def delete_article(
    article_id: int,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_article(article_id, admin_user_id=int(admin["user_id"]))
