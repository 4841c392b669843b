"""
Blob upload endpoints: issue a presigned upload URL and resolve a stored
object to a readable URL.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from core.schemas import CamelModel
from core.storage import BlobStorage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uploads")


class UploadTicket(CamelModel):
    storage_id: str
    upload_url: str


class ResolvedUrl(CamelModel):
    url: str | None = None


@router.post("", response_model=UploadTicket)
async def generate_upload_url(
    admin: dict = Depends(auth_dependencies.require_admin),
    storage: BlobStorage = Depends(get_storage),
) -> UploadTicket:
    storage_id, upload_url = storage.generate_upload_url()
    logger.info("upload_url_issued storage_id=%s by=%s", storage_id, admin["user_id"])
    return UploadTicket(storage_id=storage_id, upload_url=upload_url)


@router.get("/{storage_id:path}", response_model=ResolvedUrl)
async def resolve_upload_url(storage_id: str, storage: BlobStorage = Depends(get_storage)) -> ResolvedUrl:
    return ResolvedUrl(url=storage.resolve_url(storage_id))
