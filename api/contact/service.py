"""
Public contact form and the admin inbox.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.schemas import now_ms

from . import repository, schemas

logger = logging.getLogger(__name__)


async def submit(payload: schemas.ContactRequest) -> schemas.ContactSubmitted:
    row = await repository.create_message(payload.model_dump(), submitted_at=now_ms())
    logger.info("contact_submitted message_id=%s category=%s", row["id"], row["category"])
    return schemas.ContactSubmitted(id=row["id"])


async def list_messages(*, message_status: str | None = None) -> list[schemas.ContactMessage]:
    rows = await repository.list_messages(status=message_status)
    return [schemas.ContactMessage.model_validate(r) for r in rows]


async def update_status(
    message_id: int,
    payload: schemas.UpdateContactStatusRequest,
    *,
    admin_user_id: int,
) -> schemas.ContactMessage:
    row = await repository.update_status(
        message_id,
        status=payload.status,
        response=payload.response,
        updated_at=now_ms(),
    )
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contact message not found.")
    logger.info("contact_status_updated message_id=%s status=%s by=%s", message_id, payload.status, admin_user_id)
    return schemas.ContactMessage.model_validate(row)
