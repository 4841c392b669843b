"""
Menu settings endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/menus")


@router.get("", response_model=list[schemas.MenuSetting])
async def get_menu_settings() -> list[schemas.MenuSetting]:
    return await service.menu_settings()


@router.get("/visible", response_model=list[schemas.MenuSetting])
async def get_visible_menus() -> list[schemas.MenuSetting]:
    return await service.visible_menus()


@router.put("", response_model=schemas.MenuSetting)
async def update_menu_setting(
    payload: schemas.UpdateMenuSettingRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> schemas.MenuSetting:
    return await service.update_setting(payload, admin_user_id=int(admin["user_id"]))


@router.put("/bulk", response_model=list[schemas.MenuSetting])
async def update_menu_settings(
    payload: schemas.BulkMenuSettingsRequest,
    admin: dict = Depends(auth_dependencies.require_admin),
) -> list[schemas.MenuSetting]:
    return await service.update_settings(payload, admin_user_id=int(admin["user_id"]))
