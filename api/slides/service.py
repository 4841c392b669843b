"""
Slideshow reads and admin writes.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from core.storage import BlobStorage, resolve_media_url

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_slide(row: dict[str, Any], storage: BlobStorage | None) -> schemas.Slide:
    return schemas.Slide.model_validate(
        {**row, "image_url": resolve_media_url(storage, row.get("image_id"), row.get("image_url"))}
    )


async def list_active(*, storage: BlobStorage | None) -> list[schemas.Slide]:
    return [_to_slide(r, storage) for r in await repository.list_slides(active_only=True)]


async def list_all(*, storage: BlobStorage | None) -> list[schemas.Slide]:
    return [_to_slide(r, storage) for r in await repository.list_slides(active_only=False)]


async def create(payload: schemas.SlideRequest, *, admin_user_id: int, storage: BlobStorage | None) -> schemas.Slide:
    row = await repository.create_slide(payload.model_dump(), created_by=admin_user_id)
    logger.info("slide_created slide_id=%s by=%s", row["id"], admin_user_id)
    return _to_slide(row, storage)


async def update(
    slide_id: int,
    payload: schemas.SlideRequest,
    *,
    admin_user_id: int,
    storage: BlobStorage | None,
) -> schemas.Slide:
    """
    Full replace of the editable fields. The stored image is kept unless a
    new image id is supplied.
    """
    fields = payload.model_dump()
    if not fields.get("image_id"):
        fields.pop("image_id", None)
    fields["updated_by"] = admin_user_id

    row = await repository.update_slide(slide_id, fields)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Slide not found.")
    logger.info("slide_updated slide_id=%s by=%s", slide_id, admin_user_id)
    return _to_slide(row, storage)


async def delete(slide_id: int, *, admin_user_id: int) -> dict:
    if not await repository.delete_slide(slide_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Slide not found.")
    logger.info("slide_deleted slide_id=%s by=%s", slide_id, admin_user_id)
    return {"ok": True, "slide_id": slide_id}
