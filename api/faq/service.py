"""
FAQ reads and admin writes.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from fastapi import HTTPException, status

from core.schemas import now_ms

from . import repository, schemas

logger = logging.getLogger(__name__)


def group_by_category(items: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    [{category, items}] with categories in first-seen order and items
    ordered by `order` inside each category.
    """
    groups: dict[str, list[dict[str, Any]]] = {}
    for item in items:
        groups.setdefault(item["category"], []).append(item)
    return [
        {"category": category, "items": sorted(members, key=lambda i: i["order"])}
        for category, members in groups.items()
    ]


async def published_groups() -> list[schemas.FAQGroup]:
    return [schemas.FAQGroup.model_validate(g) for g in group_by_category(await repository.list_published())]


async def list_all() -> list[schemas.FAQItem]:
    return [schemas.FAQItem.model_validate(r) for r in await repository.list_all()]


async def categories() -> list[str]:
    return sorted(await repository.list_categories())


async def create(payload: schemas.FAQRequest, *, admin_user_id: int) -> schemas.FAQItem:
    row = await repository.create_item(payload.model_dump(), created_by=admin_user_id, created_at=now_ms())
    logger.info("faq_created faq_id=%s by=%s", row["id"], admin_user_id)
    return schemas.FAQItem.model_validate(row)


async def update(item_id: int, payload: schemas.FAQRequest, *, admin_user_id: int) -> schemas.FAQItem:
    row = await repository.update_item(item_id, payload.model_dump(), updated_by=admin_user_id, updated_at=now_ms())
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="FAQ item not found.")
    logger.info("faq_updated faq_id=%s by=%s", item_id, admin_user_id)
    return schemas.FAQItem.model_validate(row)


async def delete(item_id: int, *, admin_user_id: int) -> dict:
    if not await repository.delete_item(item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="FAQ item not found.")
    logger.info("faq_deleted faq_id=%s by=%s", item_id, admin_user_id)
    return {"ok": True, "faq_id": item_id}
