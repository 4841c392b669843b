"""
Slideshow endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from core.storage import BlobStorage, get_storage

from . import schemas, service

router = APIRouter(prefix="/slides")


@router.get("", response_model=list[schemas.Slide])
async def list_active_slides(storage: BlobStorage = Depends(get_storage)) -> list[schemas.Slide]:
    return await service.list_active(storage=storage)


@router.get("/all", response_model=list[schemas.Slide])
async def list_slides(
    _: dict = Depends(auth_dependencies.require_admin),
    storage: BlobStorage = Depends(get_storage),
) -> list[schemas.Slide]:
    return await service.list_all(storage=storage)


@router.post("", response_model=schemas.Slide)
async def create_slide(
    payload: schemas.SlideRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
    storage: BlobStorage = Depends(get_storage),
) -> schemas.Slide:
    return await service.create(payload, admin_user_id=int(admin["user_id"]), storage=storage)


@router.put("/{slide_id}", response_model=schemas.Slide)
async def update_slide(
    slide_id: int,
    payload: schemas.SlideRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
    storage: BlobStorage = Depends(get_storage),
) -> schemas.Slide:
    return await service.update(slide_id, payload, admin_user_id=int(admin["user_id"]), storage=storage)


@router.delete("/{slide_id}")
async def delete_slide(
    slide_id: int,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete(slide_id, admin_user_id=int(admin["user_id"]))
