from __future__ import annotations

from pydantic import Field

from core.schemas import CamelModel


class Slide(CamelModel):
    id: int
    title: str
    description: str = ""
    image_url: str | None = None
    image_id: str | None = None
    link_url: str | None = None
    background_color: str
    order: int
    is_active: bool


class SlideRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=1000)
    image_url: str | None = None
    image_id: str | None = Field(default=None, max_length=300)
    link_url: str | None = None
    background_color: str = Field(..., min_length=1, max_length=100)
    order: int
    is_active: bool = True
