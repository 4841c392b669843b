"""
Contact endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/contact")


@router.post("", response_model=schemas.ContactSubmitted)
async def submit_contact_form(payload: schemas.ContactRequest) -> schemas.ContactSubmitted:
    return await service.submit(payload)


@router.get("", response_model=list[schemas.ContactMessage])
async def list_contact_messages(
    message_status: schemas.ContactStatus | None = Query(default=None, alias="status"),
    _: dict = Depends(auth_dependencies.require_admin),
) -> list[schemas.ContactMessage]:
    return await service.list_messages(message_status=message_status)


@router.patch("/{message_id}", response_model=schemas.ContactMessage)
async def update_contact_status(
    message_id: int,
    payload: schemas.UpdateContactStatusRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> schemas.ContactMessage:
    return await service.update_status(message_id, payload, admin_user_id=int(admin["user_id"]))
