"""
FAQ endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/faq")


@router.get("", response_model=list[schemas.FAQGroup])
async def list_faqs() -> list[schemas.FAQGroup]:
    return await service.published_groups()


@router.get("/categories")
async def faq_categories() -> list[str]:
    return await service.categories()


@router.get("/all", response_model=list[schemas.FAQItem])
async def list_all_faqs(_: dict = Depends(auth_dependencies.require_admin)) -> list[schemas.FAQItem]:
    return await service.list_all()


@router.post("", response_model=schemas.FAQItem)
async def create_faq(
    payload: schemas.FAQRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> schemas.FAQItem:
    return await service.create(payload, admin_user_id=int(admin["user_id"]))


@router.put("/{item_id}", response_model=schemas.FAQItem)
async def update_faq(
    item_id: int,
    payload: schemas.FAQRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> schemas.FAQItem:
    return await service.update(item_id, payload, admin_user_id=int(admin["user_id"]))


@router.delete("/{item_id}")
async def delete_faq(
    item_id: int,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete(item_id, admin_user_id=int(admin["user_id"]))
