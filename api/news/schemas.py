"""
Pydantic schemas for news endpoints.
"""

from __future__ import annotations

from pydantic import Field

from core.schemas import CamelModel


class News(CamelModel):
    id: int
    title: str
    content: str
    category: str
    publish_date: int
    is_published: bool
    author_id: int | None = None
    thumbnail_url: str | None = None
    thumbnail_id: str | None = None


class CreateNewsRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)
    publish_date: int
    is_published: bool = False
    thumbnail_url: str | None = None
    thumbnail_id: str | None = Field(default=None, max_length=300)


class UpdateNewsRequest(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=300)
    content: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    publish_date: int | None = None
    is_published: bool | None = None
    thumbnail_url: str | None = None
    thumbnail_id: str | None = Field(default=None, max_length=300)
