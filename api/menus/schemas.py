from __future__ import annotations

from pydantic import Field

from core.schemas import CamelModel


class MenuSetting(CamelModel):
    menu_key: str
    menu_name: str
    is_visible: bool
    order: int
    description: str | None = None


class UpdateMenuSettingRequest(CamelModel):
    menu_key: str = Field(..., min_length=1, max_length=100)
    menu_name: str | None = Field(default=None, min_length=1, max_length=100)
    is_visible: bool | None = None
    order: int | None = None
    description: str | None = Field(default=None, max_length=500)


class BulkMenuSetting(CamelModel):
    menu_key: str = Field(..., min_length=1, max_length=100)
    menu_name: str | None = Field(default=None, min_length=1, max_length=100)
    is_visible: bool
    order: int
    description: str | None = Field(default=None, max_length=500)


class BulkMenuSettingsRequest(CamelModel):
    settings: list[BulkMenuSetting] = Field(..., min_length=1)
